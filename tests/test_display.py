# ABOUTME: Tests for Rich display helpers and logging setup.
# ABOUTME: Covers error panels, profile and identity tables, status panels and the Rich handler.

import logging
from datetime import UTC, datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from identity_graph.display import (
    ProfileTable,
    display_error,
    render_consistency_report,
    render_event_table,
    render_identity_table,
    render_statistics,
)
from identity_graph.errors import AlreadyConnected, NotRegistered
from identity_graph.logging_config import configure_logging
from identity_graph.models import Event, EventKind, ProfileView


def _render(renderable: object) -> str:
    console = Console(width=120, record=True)
    console.print(renderable)
    return console.export_text()


class TestDisplayError:
    """Tests for the display_error function."""

    def test_returns_red_panel(self) -> None:
        """Test that display_error returns a red Rich Panel."""
        result = display_error(ValueError("Test"))
        assert isinstance(result, Panel)
        assert result.border_style == "red"

    def test_includes_message_and_hint(self) -> None:
        """Test that registry errors carry a hint."""
        text = _render(display_error(NotRegistered("ghost")))
        assert "NotRegistered" in text
        assert "ghost" in text
        assert "register" in text.lower()

    def test_verbose_includes_traceback(self) -> None:
        """Test that verbose mode adds the traceback."""
        try:
            raise AlreadyConnected("alice", "bob")
        except AlreadyConnected as e:
            text = _render(display_error(e, verbose=True))
        assert "Traceback" in text


class TestTables:
    """Tests for table renderers."""

    def test_profile_table(self) -> None:
        """Test that the profile table shows every field."""
        view = ProfileView(
            identity="alice",
            name="Alice",
            bio="Engineer " * 20,
            skills=("Go", "Rust"),
            connection_count=3,
            registration_time=datetime(2025, 6, 15, 12, 0, 0, tzinfo=UTC),
        )

        table = ProfileTable().render(view)
        text = _render(table)

        assert isinstance(table, Table)
        assert "Go, Rust" in text
        assert "2025-06-15 12:00:00 UTC" in text
        assert "..." in text

    def test_identity_table_numbers_rows(self) -> None:
        """Test that identities are listed with row numbers."""
        table = render_identity_table(["alice", "bob"], title="Users")
        assert table.row_count == 2

    def test_event_table(self) -> None:
        """Test that events render with their counterpart or name."""
        events = [
            Event(
                kind=EventKind.USER_REGISTERED,
                identity="alice",
                name="Alice",
                timestamp=datetime(2025, 6, 15, tzinfo=UTC),
            ),
            Event(
                kind=EventKind.CONNECTION_CREATED,
                identity="alice",
                counterpart="bob",
                timestamp=datetime(2025, 6, 16, tzinfo=UTC),
            ),
        ]
        text = _render(render_event_table(events))
        assert "user_registered" in text
        assert "bob" in text


class TestStatusPanels:
    """Tests for statistics and consistency panels."""

    def test_statistics_panel(self) -> None:
        """Test that the statistics panel shows both counters."""
        text = _render(render_statistics({"registered_users": 2, "active_connections": 1}))
        assert "Registered Users" in text
        assert "Active Connections" in text

    def test_consistency_panel_ok(self) -> None:
        """Test that a clean check renders green."""
        assert render_consistency_report([]).border_style == "green"

    def test_consistency_panel_lists_problems(self) -> None:
        """Test that violations are listed in a red panel."""
        panel = render_consistency_report(["alice count mismatch"])
        assert panel.border_style == "red"
        assert "alice count mismatch" in _render(panel)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_single_rich_handler(self) -> None:
        """Test that repeated calls keep one handler and update the level."""
        root = logging.getLogger()
        original_level = root.level
        original_handlers = list(root.handlers)
        try:
            configure_logging("INFO")
            configure_logging("DEBUG")

            rich_handlers = [
                h for h in root.handlers if isinstance(h, RichHandler) and h.get_name()
            ]
            assert len(rich_handlers) == 1
            assert root.level == logging.DEBUG
        finally:
            root.handlers = original_handlers
            root.setLevel(original_level)
