# ABOUTME: Events package for the registry audit log.
# ABOUTME: Exports the EventBus for subscribers and the persisted EventLog.

from identity_graph.events.bus import EventBus
from identity_graph.events.log import EventLog

__all__ = ["EventBus", "EventLog"]
