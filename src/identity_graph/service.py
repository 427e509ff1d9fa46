# ABOUTME: Service facade coordinating ProfileRegistry, ConnectionGraph and the event log.
# ABOUTME: This is the single entry point used by the CLI and by embedding applications.

from collections.abc import Callable, Sequence
from pathlib import Path

from identity_graph.config import Settings
from identity_graph.database import DatabaseService
from identity_graph.database.stats import check_consistency, get_statistics
from identity_graph.events import EventBus, EventLog
from identity_graph.export.csv_exporter import CSVExporter
from identity_graph.graph import ConnectionGraph
from identity_graph.models import ConnectionView, Event, EventKind, ProfileView
from identity_graph.registry import ProfileRegistry


class IdentityGraphService:
    """Coordinates registry and graph operations over one database.

    Handles:
    - Profile registration, update and lookup
    - Connection creation and graph queries
    - Aggregate statistics and consistency checks
    - Event queries and subscriptions
    """

    def __init__(self, db_service: DatabaseService, bus: EventBus | None = None) -> None:
        """Initialize the service.

        Args:
            db_service: Initialized database service.
            bus: Optional event bus shared with other components.
        """
        self._db_service = db_service
        self._event_log = EventLog(db_service, bus)
        self.registry = ProfileRegistry(db_service, self._event_log)
        self.graph = ConnectionGraph(db_service, self.registry, self._event_log)

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityGraphService":
        """Create a service over the configured database, initializing it if needed."""
        db_service = DatabaseService(db_path=settings.db_path, echo=settings.echo_sql)
        db_service.init_db()
        return cls(db_service)

    def register(self, identity: str, name: str, bio: str, skills: Sequence[str]) -> None:
        """Register a new identity. See ProfileRegistry.register."""
        self.registry.register(identity, name, bio, skills)

    def update_profile(self, identity: str, name: str, bio: str, skills: Sequence[str]) -> None:
        """Update a profile. See ProfileRegistry.update_profile."""
        self.registry.update_profile(identity, name, bio, skills)

    def connect(self, identity: str, target: str) -> None:
        """Connect the caller to a target. See ConnectionGraph.connect."""
        self.graph.connect(identity, target)

    def get_profile(self, identity: str) -> ProfileView:
        """Get a profile snapshot. See ProfileRegistry.get_profile."""
        return self.registry.get_profile(identity)

    def is_registered(self, identity: str) -> bool:
        """Return True if the identity has a profile."""
        return self.registry.is_registered(identity)

    def list_connections(self, identity: str) -> list[str]:
        """List an identity's connections. See ConnectionGraph.list_connections."""
        return self.graph.list_connections(identity)

    def are_connected(self, identity_a: str, identity_b: str) -> bool:
        """Return True if the two identities are connected."""
        return self.graph.are_connected(identity_a, identity_b)

    def get_statistics(self) -> dict[str, int]:
        """Get the registered user and active connection counters."""
        return get_statistics(self._db_service)

    def list_all_users(self) -> list[str]:
        """List all registered identities in registration order."""
        return self.registry.list_all()

    def list_events(
        self,
        kind: EventKind | None = None,
        identity: str | None = None,
    ) -> list[Event]:
        """List recorded events, optionally filtered by kind or identity."""
        return self._event_log.list_events(kind=kind, identity=identity)

    def subscribe(self, listener: Callable[[Event], None]) -> Callable[[], None]:
        """Subscribe to committed events. Returns an unsubscribe callable."""
        return self._event_log.bus.subscribe(listener)

    def check_consistency(self) -> list[str]:
        """Return every graph invariant violation found in the store."""
        return check_consistency(self._db_service)

    def list_all_connections(self) -> list[ConnectionView]:
        """List every connection in creation order."""
        return self.graph.list_all_connections()

    def export_connections(self, output_path: Path) -> tuple[Path, int]:
        """Write every connection to a CSV file.

        Returns:
            Path to the created CSV file and the number of connection rows written.
        """
        connections = self.list_all_connections()
        return CSVExporter().export(connections, output_path), len(connections)
