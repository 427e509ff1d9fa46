# ABOUTME: SQLModel for the single-row global aggregate counters.
# ABOUTME: The row is created zero-valued when the database is initialized.

from sqlmodel import Field, SQLModel

STATS_ROW_ID = 1


class RegistryStats(SQLModel, table=True):
    """Global counters maintained by register and connect."""

    __tablename__ = "registry_stats"

    id: int = Field(default=STATS_ROW_ID, primary_key=True)
    total_registered_users: int = Field(default=0, ge=0)
    total_active_connections: int = Field(default=0, ge=0)
