# ABOUTME: Export module for writing the connection graph to files.
# ABOUTME: Provides CSV edge-list export with metadata.

from identity_graph.export.csv_exporter import CSVExporter

__all__ = ["CSVExporter"]
