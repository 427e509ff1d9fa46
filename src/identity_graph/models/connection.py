# ABOUTME: SQLModel tables for undirected connections and per-identity adjacency lists.
# ABOUTME: Connections are keyed by the canonical pair key; adjacency rows keep formation order.

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from identity_graph.timeutil import as_utc, utcnow


class Connection(SQLModel, table=True):
    """An undirected connection between two registered identities.

    Endpoints are stored in canonical order (byte-wise smaller first).
    """

    __tablename__ = "connections"

    id: int | None = Field(default=None, primary_key=True)
    pair_key: str = Field(unique=True, index=True, description="Canonical pair key")
    low_identity: str = Field(index=True)
    high_identity: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)
    is_active: bool = True


class AdjacencyEntry(SQLModel, table=True):
    """One direction of a connection: `peer` appears in `identity`'s list."""

    __tablename__ = "adjacency_entries"
    __table_args__ = (UniqueConstraint("identity", "peer", name="uq_adjacency_identity_peer"),)

    id: int | None = Field(default=None, primary_key=True)
    identity: str = Field(index=True)
    peer: str
    pair_key: str = Field(index=True)


class ConnectionView(BaseModel):
    """Immutable snapshot of a stored connection."""

    model_config = ConfigDict(frozen=True)

    pair_key: str
    low_identity: str
    high_identity: str
    created_at: datetime

    @classmethod
    def from_connection(cls, connection: Connection) -> "ConnectionView":
        """Build a view from a stored Connection row."""
        return cls(
            pair_key=connection.pair_key,
            low_identity=connection.low_identity,
            high_identity=connection.high_identity,
            created_at=as_utc(connection.created_at),
        )
