# ABOUTME: Tests for the Typer command-line interface.
# ABOUTME: Covers every command against a temporary database configured through the environment.

import csv
import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest import mock

import pytest
from typer.testing import CliRunner

from identity_graph.cli import app
from identity_graph.config import get_settings


@pytest.fixture
def runner() -> CliRunner:
    """Create a CliRunner instance for testing Typer commands."""
    return CliRunner()


@pytest.fixture
def temp_settings_env() -> Generator[str, None, None]:
    """Point the CLI at a fresh temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        env_vars = {"IDENTITY_GRAPH_DB_PATH": str(Path(tmpdir) / "graph.db")}
        with mock.patch.dict(os.environ, env_vars, clear=False):
            get_settings.cache_clear()
            yield tmpdir
        get_settings.cache_clear()


def _register(runner: CliRunner, identity: str, name: str, skill: str) -> None:
    result = runner.invoke(
        app, ["register", identity, "--name", name, "--bio", f"{name}'s bio", "--skill", skill]
    )
    assert result.exit_code == 0, result.output


class TestCLIBasics:
    """Tests for basic CLI structure."""

    def test_app_has_help(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that the app lists its commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("register", "connect", "connections", "stats", "check"):
            assert command in result.output

    def test_no_command_prints_hint(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that invoking without a command points at --help."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "--help" in result.output


class TestRegisterAndProfile:
    """Tests for register, update and profile commands."""

    def test_register_and_show_profile(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that a registered profile can be shown."""
        result = runner.invoke(
            app,
            ["register", "alice", "-n", "Alice", "-b", "Engineer", "-s", "Go", "-s", "Rust"],
        )
        assert result.exit_code == 0
        assert "Registered" in result.output

        result = runner.invoke(app, ["profile", "alice"])
        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Go, Rust" in result.output

    def test_register_without_skills_fails(
        self, runner: CliRunner, temp_settings_env: str
    ) -> None:
        """Test that registering with no skills shows InvalidInput."""
        result = runner.invoke(app, ["register", "alice", "--name", "Alice", "--bio", "Bio"])
        assert result.exit_code == 1
        assert "InvalidInput" in result.output

    def test_register_twice_fails(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that a duplicate registration shows AlreadyRegistered."""
        _register(runner, "alice", "Alice", "Go")
        result = runner.invoke(
            app, ["register", "alice", "--name", "A", "--bio", "B", "--skill", "C"]
        )
        assert result.exit_code == 1
        assert "AlreadyRegistered" in result.output

    def test_update_profile(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that update changes the displayed profile."""
        _register(runner, "alice", "Alice", "Go")
        result = runner.invoke(
            app, ["update", "alice", "--name", "Alicia", "--bio", "Lead", "--skill", "Zig"]
        )
        assert result.exit_code == 0

        result = runner.invoke(app, ["profile", "alice"])
        assert "Alicia" in result.output
        assert "Zig" in result.output

    def test_profile_unregistered_fails(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that showing an unknown identity fails."""
        result = runner.invoke(app, ["profile", "ghost"])
        assert result.exit_code == 1
        assert "NotRegistered" in result.output
        assert "Traceback" not in result.output

    def test_verbose_error_shows_traceback(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that --verbose adds the traceback to the error panel."""
        result = runner.invoke(app, ["--verbose", "profile", "ghost"])
        assert result.exit_code == 1
        assert "NotRegistered" in result.output
        assert "Traceback" in result.output


class TestGraphCommands:
    """Tests for connect and graph query commands."""

    def test_connect_and_query(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test the register, register, connect walkthrough from the CLI."""
        _register(runner, "alice", "Alice", "Go")
        _register(runner, "bob", "Bob", "Figma")

        result = runner.invoke(app, ["connect", "alice", "bob"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["connected", "bob", "alice"])
        assert "are connected" in result.output

        result = runner.invoke(app, ["connections", "alice"])
        assert result.exit_code == 0
        assert "bob" in result.output

        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "Registered Users" in result.output

        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "invariants hold" in result.output

    def test_connect_self_fails(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that self-connection shows InvalidTarget."""
        _register(runner, "alice", "Alice", "Go")
        result = runner.invoke(app, ["connect", "alice", "alice"])
        assert result.exit_code == 1
        assert "InvalidTarget" in result.output

    def test_connect_twice_fails(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that duplicate connections show AlreadyConnected."""
        _register(runner, "alice", "Alice", "Go")
        _register(runner, "bob", "Bob", "Figma")
        runner.invoke(app, ["connect", "alice", "bob"])

        result = runner.invoke(app, ["connect", "bob", "alice"])
        assert result.exit_code == 1
        assert "AlreadyConnected" in result.output

    def test_connected_unknown_identities(
        self, runner: CliRunner, temp_settings_env: str
    ) -> None:
        """Test that connected never fails for unknown identities."""
        result = runner.invoke(app, ["connected", "ghost", "phantom"])
        assert result.exit_code == 0
        assert "not connected" in result.output

    def test_connections_empty(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test the message for an identity without connections."""
        _register(runner, "alice", "Alice", "Go")
        result = runner.invoke(app, ["connections", "alice"])
        assert result.exit_code == 0
        assert "no connections" in result.output

    def test_users_lists_registration_order(
        self, runner: CliRunner, temp_settings_env: str
    ) -> None:
        """Test that users are listed in registration order."""
        _register(runner, "zed", "Zed", "Go")
        _register(runner, "amy", "Amy", "Go")

        result = runner.invoke(app, ["users"])

        assert result.exit_code == 0
        assert result.output.index("zed") < result.output.index("amy")

    def test_users_empty(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test the message for an empty registry."""
        result = runner.invoke(app, ["users"])
        assert "No registered users" in result.output


class TestEventsAndExport:
    """Tests for events and export commands."""

    def test_events_filtered_by_kind(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that events can be filtered by kind."""
        _register(runner, "alice", "Alice", "Go")
        _register(runner, "bob", "Bob", "Figma")
        runner.invoke(app, ["connect", "alice", "bob"])

        result = runner.invoke(app, ["events", "--kind", "connection_created"])

        assert result.exit_code == 0
        assert "connection_created" in result.output
        assert "user_registered" not in result.output

    def test_events_empty(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test the message when nothing has happened yet."""
        result = runner.invoke(app, ["events"])
        assert "No events recorded" in result.output

    def test_export_writes_csv(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that export writes the edge list to the given path."""
        _register(runner, "alice", "Alice", "Go")
        _register(runner, "bob", "Bob", "Figma")
        runner.invoke(app, ["connect", "bob", "alice"])
        output = Path(temp_settings_env) / "edges.csv"

        result = runner.invoke(app, ["export", "--output", str(output)])

        assert result.exit_code == 0
        assert "Exported 1 connection" in result.output
        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[2][:2] == ["alice", "bob"]

    def test_export_counts_written_rows(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test that the reported count matches the rows in the file."""
        _register(runner, "alice", "Alice", "Go")
        _register(runner, "bob", "Bob", "Figma")
        _register(runner, "carol", "Carol", "Python")
        runner.invoke(app, ["connect", "alice", "bob"])
        runner.invoke(app, ["connect", "carol", "alice"])
        output = Path(temp_settings_env) / "edges.csv"

        result = runner.invoke(app, ["export", "--output", str(output)])

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert "Exported 2 connection" in result.output
        assert len(rows[2:]) == 2

    def test_export_empty_graph(self, runner: CliRunner, temp_settings_env: str) -> None:
        """Test the message when there is nothing to export."""
        output = Path(temp_settings_env) / "edges.csv"

        result = runner.invoke(app, ["export", "--output", str(output)])

        assert result.exit_code == 0
        assert "No connections to export" in result.output
