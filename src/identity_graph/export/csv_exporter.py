# ABOUTME: CSV exporter for the connection graph edge list.
# ABOUTME: Exports connections to CSV format with a metadata header row.

import csv
from datetime import UTC, datetime
from pathlib import Path

from identity_graph.models import ConnectionView


class CSVExporter:
    """Exports connections to CSV format, one row per unordered pair."""

    HEADERS = [
        "low_identity",
        "high_identity",
        "pair_key",
        "created_at",
    ]

    def export(self, connections: list[ConnectionView], output_path: Path) -> Path:
        """Export connections to a CSV file.

        Args:
            connections: List of ConnectionView objects to export.
            output_path: Path to the output CSV file.

        Returns:
            Path to the created CSV file.
        """
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self._create_metadata_row(len(connections)))
            writer.writerow(self.HEADERS)
            for connection in connections:
                writer.writerow(self._connection_to_row(connection))

        return output_path

    def _create_metadata_row(self, count: int) -> list[str]:
        """Create a metadata row with export information.

        Returns:
            Single-cell row so CSV readers don't split it.
        """
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        return [f"# Exported at: {timestamp} | Connections: {count}"]

    def _connection_to_row(self, connection: ConnectionView) -> list[str]:
        return [
            connection.low_identity,
            connection.high_identity,
            connection.pair_key,
            connection.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        ]
