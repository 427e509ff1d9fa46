# ABOUTME: Database statistics and consistency checks for the registry.
# ABOUTME: Reads the aggregate counters and re-derives graph invariants from stored rows.

from collections import Counter

from sqlmodel import func, select

from identity_graph.database.service import DatabaseService
from identity_graph.models import (
    STATS_ROW_ID,
    AdjacencyEntry,
    Connection,
    Profile,
    RegistryStats,
)


def get_statistics(db_service: DatabaseService) -> dict[str, int]:
    """Get the global aggregate counters.

    Args:
        db_service: The DatabaseService instance to query.

    Returns:
        Dictionary containing:
            - registered_users: Number of profiles ever registered
            - active_connections: Number of connections ever created
    """
    with db_service.get_session() as session:
        stats = session.get(RegistryStats, STATS_ROW_ID)
        if stats is None:
            return {"registered_users": 0, "active_connections": 0}
        return {
            "registered_users": stats.total_registered_users,
            "active_connections": stats.total_active_connections,
        }


def check_consistency(db_service: DatabaseService) -> list[str]:
    """Re-derive the graph invariants from stored rows.

    Checks symmetry of adjacency entries, per-profile connection counts,
    uniqueness of connections per unordered pair and both global counters.

    Args:
        db_service: The DatabaseService instance to query.

    Returns:
        Human-readable descriptions of every violation found. Empty when
        the store is consistent.
    """
    problems: list[str] = []

    with db_service.read_snapshot() as session:
        profiles = list(session.exec(select(Profile)).all())
        connections = list(
            session.exec(select(Connection).where(Connection.is_active == True)).all()  # noqa: E712
        )
        entries = list(session.exec(select(AdjacencyEntry)).all())
        stats = session.get(RegistryStats, STATS_ROW_ID)
        profile_count = session.exec(select(func.count()).select_from(Profile)).one()

    adjacency = {(entry.identity, entry.peer) for entry in entries}

    for connection in connections:
        low, high = connection.low_identity, connection.high_identity
        if (low, high) not in adjacency:
            problems.append(f"{high} missing from adjacency list of {low}")
        if (high, low) not in adjacency:
            problems.append(f"{low} missing from adjacency list of {high}")

    list_lengths = Counter(entry.identity for entry in entries)
    for profile in profiles:
        actual = list_lengths.get(profile.identity, 0)
        if profile.connection_count != actual:
            problems.append(
                f"{profile.identity} has connection_count {profile.connection_count} "
                f"but {actual} adjacency entries"
            )

    pairs = Counter(
        frozenset((connection.low_identity, connection.high_identity))
        for connection in connections
    )
    for pair, count in pairs.items():
        if count > 1:
            problems.append(f"{count} active connections for pair {sorted(pair)}")

    if stats is None:
        problems.append("registry counters row is missing")
        return problems

    if stats.total_registered_users != profile_count:
        problems.append(
            f"total_registered_users is {stats.total_registered_users} "
            f"but {profile_count} profiles exist"
        )
    if stats.total_active_connections != len(connections):
        problems.append(
            f"total_active_connections is {stats.total_active_connections} "
            f"but {len(connections)} active connections exist"
        )

    return problems
