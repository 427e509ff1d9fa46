# ABOUTME: Profile registry service: registration, profile updates and profile queries.
# ABOUTME: Each mutation runs in one transaction together with its counter update and event.

import logging
from collections.abc import Sequence

from pydantic import ValidationError
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from identity_graph.database.service import DatabaseService
from identity_graph.errors import AlreadyRegistered, InvalidInput, NotRegistered
from identity_graph.events.log import EventLog
from identity_graph.identity import is_null_identity
from identity_graph.models import (
    STATS_ROW_ID,
    EventKind,
    Profile,
    ProfileFields,
    ProfileView,
    RegistryStats,
)
from identity_graph.timeutil import utcnow

logger = logging.getLogger(__name__)


def validate_fields(name: str, bio: str, skills: Sequence[str]) -> ProfileFields:
    """Validate editable profile fields.

    Args:
        name: Display name, must be non-empty.
        bio: Biography, must be non-empty.
        skills: Skill tags, must contain at least one entry.

    Returns:
        The validated ProfileFields.

    Raises:
        InvalidInput: If any field is empty or skills is a single string.
    """
    if isinstance(skills, str):
        raise InvalidInput("Invalid profile fields: skills must be a list of tags, not a string")
    try:
        return ProfileFields(name=name, bio=bio, skills=list(skills))
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        raise InvalidInput(f"Invalid profile fields: {fields or 'input'}") from e


class ProfileRegistry:
    """Owns profile records keyed by identity."""

    def __init__(self, db_service: DatabaseService, event_log: EventLog) -> None:
        """Initialize the registry.

        Args:
            db_service: Database service holding the profiles table.
            event_log: Event log receiving registration and update events.
        """
        self._db_service = db_service
        self._event_log = event_log

    @staticmethod
    def _load(session: Session, identity: str) -> Profile | None:
        statement = select(Profile).where(Profile.identity == identity)
        return session.exec(statement).first()

    def require_profile(self, session: Session, identity: str) -> Profile:
        """Load a profile inside an open session or raise NotRegistered."""
        profile = self._load(session, identity)
        if profile is None:
            raise NotRegistered(identity)
        return profile

    def register(self, identity: str, name: str, bio: str, skills: Sequence[str]) -> None:
        """Create a profile for a new identity.

        Args:
            identity: Caller identity to register.
            name: Display name.
            bio: Biography.
            skills: Non-empty list of skill tags.

        Raises:
            InvalidInput: If the identity is null or a field is empty.
            AlreadyRegistered: If the identity already has a profile.
        """
        if is_null_identity(identity):
            raise InvalidInput("Cannot register the null identity")
        fields = validate_fields(name, bio, skills)
        now = utcnow()

        try:
            with self._db_service.transaction() as session:
                if self._load(session, identity) is not None:
                    raise AlreadyRegistered(identity)

                session.add(
                    Profile(
                        identity=identity,
                        name=fields.name,
                        bio=fields.bio,
                        skills=fields.skills,
                        connection_count=0,
                        registered_at=now,
                    )
                )
                session.execute(
                    update(RegistryStats)
                    .where(RegistryStats.id == STATS_ROW_ID)
                    .values(total_registered_users=RegistryStats.total_registered_users + 1)
                )
                event = self._event_log.record(
                    session, EventKind.USER_REGISTERED, identity, name=fields.name, timestamp=now
                )
        except IntegrityError as e:
            # A concurrent writer in another process registered the identity first.
            raise AlreadyRegistered(identity) from e

        logger.info("Registered identity %s", identity)
        self._event_log.publish(event)

    def update_profile(self, identity: str, name: str, bio: str, skills: Sequence[str]) -> None:
        """Replace the name, bio and skills of a registered identity.

        Connection count and registration time are left untouched.

        Raises:
            NotRegistered: If the identity has no profile.
            InvalidInput: If a field is empty.
        """
        fields = validate_fields(name, bio, skills)

        with self._db_service.transaction() as session:
            profile = self.require_profile(session, identity)
            profile.name = fields.name
            profile.bio = fields.bio
            profile.skills = fields.skills
            session.add(profile)
            event = self._event_log.record(
                session, EventKind.PROFILE_UPDATED, identity, name=fields.name
            )

        logger.info("Updated profile of %s", identity)
        self._event_log.publish(event)

    def get_profile(self, identity: str) -> ProfileView:
        """Get a snapshot of a registered profile.

        Raises:
            NotRegistered: If the identity has no profile.
        """
        with self._db_service.get_session() as session:
            return ProfileView.from_profile(self.require_profile(session, identity))

    def is_registered(self, identity: str) -> bool:
        """Return True if the identity has a profile."""
        with self._db_service.get_session() as session:
            return self._load(session, identity) is not None

    def list_all(self) -> list[str]:
        """List every registered identity in registration order."""
        with self._db_service.get_session() as session:
            statement = select(Profile.identity).order_by(Profile.id)
            return list(session.exec(statement).all())
