# ABOUTME: Connection graph service maintaining the undirected relation between identities.
# ABOUTME: connect() writes the connection, both adjacency entries and the counters in one commit.

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select

from identity_graph.database.service import DatabaseService
from identity_graph.errors import AlreadyConnected, InvalidTarget
from identity_graph.events.log import EventLog
from identity_graph.identity import canonical_pair_key, is_null_identity, order_pair
from identity_graph.models import (
    STATS_ROW_ID,
    AdjacencyEntry,
    Connection,
    ConnectionView,
    EventKind,
    Profile,
    RegistryStats,
)
from identity_graph.registry.service import ProfileRegistry
from identity_graph.timeutil import utcnow

logger = logging.getLogger(__name__)


class ConnectionGraph:
    """Owns connections between registered identities.

    Every connection is stored once under its canonical pair key and
    mirrored as one adjacency entry per endpoint.
    """

    def __init__(
        self,
        db_service: DatabaseService,
        registry: ProfileRegistry,
        event_log: EventLog,
    ) -> None:
        """Initialize the graph.

        Args:
            db_service: Database service holding the connection tables.
            registry: Registry used to check that both endpoints exist.
            event_log: Event log receiving connection events.
        """
        self._db_service = db_service
        self._registry = registry
        self._event_log = event_log

    @staticmethod
    def canonical_pair_key(identity_a: str, identity_b: str) -> str:
        """Return the order-independent key for a pair of identities."""
        return canonical_pair_key(identity_a, identity_b)

    def connect(self, caller: str, target: str) -> None:
        """Create a mutual connection between the caller and a target.

        Args:
            caller: Pre-authenticated identity making the request.
            target: Identity to connect with.

        Raises:
            InvalidTarget: If the target is null or equal to the caller.
            NotRegistered: If either identity has no profile.
            AlreadyConnected: If the pair is already connected.
        """
        if is_null_identity(target):
            raise InvalidTarget("Target identity must not be null")
        if target == caller:
            raise InvalidTarget("Cannot connect an identity to itself")

        pair_key = canonical_pair_key(caller, target)
        low, high = order_pair(caller, target)
        now = utcnow()

        try:
            with self._db_service.transaction() as session:
                self._registry.require_profile(session, caller)
                self._registry.require_profile(session, target)

                existing = session.exec(
                    select(Connection).where(Connection.pair_key == pair_key)
                ).first()
                if existing is not None:
                    raise AlreadyConnected(caller, target)

                session.add(
                    Connection(
                        pair_key=pair_key,
                        low_identity=low,
                        high_identity=high,
                        created_at=now,
                        is_active=True,
                    )
                )
                session.add(AdjacencyEntry(identity=caller, peer=target, pair_key=pair_key))
                session.add(AdjacencyEntry(identity=target, peer=caller, pair_key=pair_key))
                session.execute(
                    update(Profile)
                    .where(col(Profile.identity).in_([caller, target]))
                    .values(connection_count=Profile.connection_count + 1)
                )
                session.execute(
                    update(RegistryStats)
                    .where(RegistryStats.id == STATS_ROW_ID)
                    .values(total_active_connections=RegistryStats.total_active_connections + 1)
                )
                event = self._event_log.record(
                    session,
                    EventKind.CONNECTION_CREATED,
                    caller,
                    counterpart=target,
                    timestamp=now,
                )
        except IntegrityError as e:
            # Another process stored the same pair key first.
            raise AlreadyConnected(caller, target) from e

        logger.info("Connected %s and %s", caller, target)
        self._event_log.publish(event)

    def are_connected(self, identity_a: str, identity_b: str) -> bool:
        """Return True if the pair has an active connection, in either order."""
        pair_key = canonical_pair_key(identity_a, identity_b)
        with self._db_service.get_session() as session:
            connection = session.exec(
                select(Connection).where(Connection.pair_key == pair_key)
            ).first()
            return connection is not None and connection.is_active

    def list_connections(self, identity: str) -> list[str]:
        """List the identities connected to a registered identity.

        Returns:
            Peer identities in the order the connections were formed.

        Raises:
            NotRegistered: If the identity has no profile.
        """
        with self._db_service.get_session() as session:
            self._registry.require_profile(session, identity)
            statement = (
                select(AdjacencyEntry.peer)
                .where(AdjacencyEntry.identity == identity)
                .order_by(AdjacencyEntry.id)
            )
            return list(session.exec(statement).all())

    def list_all_connections(self) -> list[ConnectionView]:
        """List every active connection in creation order."""
        with self._db_service.get_session() as session:
            statement = (
                select(Connection)
                .where(Connection.is_active == True)  # noqa: E712
                .order_by(Connection.id)
            )
            return [ConnectionView.from_connection(c) for c in session.exec(statement).all()]
