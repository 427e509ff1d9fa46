# ABOUTME: In-process publish/subscribe bus for committed registry events.
# ABOUTME: Subscriber failures are logged and never undo the committed operation.

import logging
import threading
from collections.abc import Callable

from identity_graph.models import Event

logger = logging.getLogger(__name__)

Listener = Callable[[Event], None]


class EventBus:
    """Delivers events to subscribers after the emitting transaction commits."""

    def __init__(self) -> None:
        """Initialize an empty bus."""
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for every published event.

        Args:
            listener: Callable invoked with each Event.

        Returns:
            A callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: Event) -> None:
        """Deliver an event to all current listeners in subscription order.

        Args:
            event: The committed event.
        """
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener %r failed for %s", listener, event.kind.value)
