# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports table renderers, error panels and status panels.

from identity_graph.display.errors import display_error
from identity_graph.display.status import render_consistency_report, render_statistics
from identity_graph.display.tables import ProfileTable, render_event_table, render_identity_table

__all__ = [
    "ProfileTable",
    "display_error",
    "render_consistency_report",
    "render_event_table",
    "render_identity_table",
    "render_statistics",
]
