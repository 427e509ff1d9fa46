# ABOUTME: SQLModel for the append-only event log and the published event view.
# ABOUTME: Covers user registration, profile update and connection creation events.

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel

from identity_graph.timeutil import as_utc, utcnow


class EventKind(str, Enum):
    """Kinds of recorded registry events."""

    USER_REGISTERED = "user_registered"
    PROFILE_UPDATED = "profile_updated"
    CONNECTION_CREATED = "connection_created"


class EventRecord(SQLModel, table=True):
    """A persisted event. Rows are only ever inserted."""

    __tablename__ = "events"

    id: int | None = Field(default=None, primary_key=True)
    kind: EventKind = Field(index=True)
    identity: str = Field(index=True, description="Acting identity (identityA for connections)")
    counterpart: str | None = Field(
        default=None, index=True, description="identityB for connection events"
    )
    name: str | None = None
    timestamp: datetime = Field(default_factory=utcnow)


class Event(BaseModel):
    """Immutable event handed to subscribers and query callers."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    identity: str
    counterpart: str | None = None
    name: str | None = None
    timestamp: datetime

    @classmethod
    def from_record(cls, record: EventRecord) -> "Event":
        """Build an event from a stored EventRecord row."""
        return cls(
            kind=record.kind,
            identity=record.identity,
            counterpart=record.counterpart,
            name=record.name,
            timestamp=as_utc(record.timestamp),
        )
