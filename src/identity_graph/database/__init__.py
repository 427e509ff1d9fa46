# ABOUTME: Database package for the identity graph persistence layer.
# ABOUTME: Provides DatabaseService for SQLite sessions and atomic write transactions.

from identity_graph.database.service import DatabaseService

__all__ = ["DatabaseService"]
