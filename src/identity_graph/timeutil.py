# ABOUTME: UTC time helpers shared by models and services.
# ABOUTME: SQLite drops tzinfo, so values read back are re-tagged as UTC.

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a timezone-naive datetime, or convert an aware one."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
