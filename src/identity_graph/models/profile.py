# ABOUTME: SQLModel table and pydantic views for registered identity profiles.
# ABOUTME: ProfileFields validates editable fields; ProfileView is the read-only projection.

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from identity_graph.timeutil import as_utc, utcnow


class Profile(SQLModel, table=True):
    """A registered identity and its profile fields.

    The autoincrement id preserves registration order.
    """

    __tablename__ = "profiles"

    id: int | None = Field(default=None, primary_key=True)
    identity: str = Field(unique=True, index=True, description="Opaque identity key")

    name: str
    bio: str
    skills: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    connection_count: int = Field(default=0, ge=0)
    registered_at: datetime = Field(default_factory=utcnow)


class ProfileFields(BaseModel):
    """Editable profile fields, validated on registration and update."""

    name: Annotated[str, PydanticField(min_length=1, description="Display name")]
    bio: Annotated[str, PydanticField(min_length=1, description="Short biography")]
    skills: Annotated[
        list[str], PydanticField(min_length=1, description="Ordered skill tags")
    ]


class ProfileView(BaseModel):
    """Immutable snapshot of a profile returned to callers."""

    model_config = ConfigDict(frozen=True)

    identity: str
    name: str
    bio: str
    skills: tuple[str, ...]
    connection_count: int
    registration_time: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileView":
        """Build a view from a stored Profile row."""
        return cls(
            identity=profile.identity,
            name=profile.name,
            bio=profile.bio,
            skills=tuple(profile.skills),
            connection_count=profile.connection_count,
            registration_time=as_utc(profile.registered_at),
        )
