# ABOUTME: Append-only event log backed by the events table.
# ABOUTME: Records events inside a caller's transaction and queries them in append order.

from datetime import datetime

from sqlmodel import Session, or_, select

from identity_graph.database.service import DatabaseService
from identity_graph.events.bus import EventBus
from identity_graph.models import Event, EventKind, EventRecord
from identity_graph.timeutil import utcnow


class EventLog:
    """Persists registry events and hands them to the bus once committed."""

    def __init__(self, db_service: DatabaseService, bus: EventBus | None = None) -> None:
        """Initialize the event log.

        Args:
            db_service: Database service holding the events table.
            bus: Bus to publish committed events on. A private bus is created if omitted.
        """
        self._db_service = db_service
        self.bus = bus if bus is not None else EventBus()

    def record(
        self,
        session: Session,
        kind: EventKind,
        identity: str,
        counterpart: str | None = None,
        name: str | None = None,
        timestamp: datetime | None = None,
    ) -> Event:
        """Add an event row to an open transaction.

        The row is only persisted if the surrounding transaction commits.
        Pass timestamp to share one clock reading with the rows the
        operation writes.

        Returns:
            The Event to publish after commit.
        """
        record = EventRecord(
            kind=kind,
            identity=identity,
            counterpart=counterpart,
            name=name,
            timestamp=timestamp if timestamp is not None else utcnow(),
        )
        session.add(record)
        return Event.from_record(record)

    def publish(self, event: Event) -> None:
        """Publish a committed event to subscribers."""
        self.bus.publish(event)

    def list_events(
        self,
        kind: EventKind | None = None,
        identity: str | None = None,
    ) -> list[Event]:
        """Retrieve recorded events in the order they were appended.

        Args:
            kind: Optional event kind to filter by.
            identity: Optional identity; matches either endpoint of an event.

        Returns:
            List of Event objects.
        """
        with self._db_service.get_session() as session:
            statement = select(EventRecord).order_by(EventRecord.id)
            if kind is not None:
                statement = statement.where(EventRecord.kind == kind)
            if identity is not None:
                statement = statement.where(
                    or_(EventRecord.identity == identity, EventRecord.counterpart == identity)
                )
            return [Event.from_record(record) for record in session.exec(statement).all()]
