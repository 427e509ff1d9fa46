# ABOUTME: Models package for identity graph data structures.
# ABOUTME: Exports SQLModel tables for profiles, connections, counters and events plus their views.

from identity_graph.models.connection import AdjacencyEntry, Connection, ConnectionView
from identity_graph.models.event import Event, EventKind, EventRecord
from identity_graph.models.profile import Profile, ProfileFields, ProfileView
from identity_graph.models.stats import STATS_ROW_ID, RegistryStats

__all__ = [
    "AdjacencyEntry",
    "Connection",
    "ConnectionView",
    "Event",
    "EventKind",
    "EventRecord",
    "Profile",
    "ProfileFields",
    "ProfileView",
    "RegistryStats",
    "STATS_ROW_ID",
]
