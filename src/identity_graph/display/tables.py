# ABOUTME: Rich table rendering for profiles, identity lists and events.
# ABOUTME: Provides ProfileTable and plain render functions used by the CLI.

from rich.table import Table

from identity_graph.models import Event, EventKind, ProfileView


class ProfileTable:
    """Renders a ProfileView as a two-column Rich table."""

    MAX_BIO_LENGTH = 60

    def _truncate(self, text: str, max_length: int) -> str:
        """Truncate text to max length with ellipsis."""
        if len(text) <= max_length:
            return text
        return text[: max_length - 3] + "..."

    def render(self, profile: ProfileView) -> Table:
        """Render a profile as a Rich Table.

        Args:
            profile: The profile snapshot to display.

        Returns:
            Rich Table with one row per profile field.
        """
        table = Table(title=profile.name, show_header=False, box=None, padding=(0, 1))
        table.add_column("Field", style="dim")
        table.add_column("Value")

        table.add_row("Identity:", f"[cyan]{profile.identity}[/cyan]")
        table.add_row("Bio:", self._truncate(profile.bio, self.MAX_BIO_LENGTH))
        table.add_row("Skills:", ", ".join(profile.skills))
        table.add_row("Connections:", f"[green]{profile.connection_count}[/green]")
        table.add_row(
            "Registered:", profile.registration_time.strftime("%Y-%m-%d %H:%M:%S UTC")
        )
        return table


def render_identity_table(identities: list[str], title: str | None = None) -> Table:
    """Render a numbered list of identities.

    Args:
        identities: Identities in display order.
        title: Optional title for the table.

    Returns:
        Rich Table with row numbers.
    """
    table = Table(title=title, show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Identity", style="cyan", no_wrap=True)

    for idx, identity in enumerate(identities, 1):
        table.add_row(str(idx), identity)

    return table


EVENT_COLORS: dict[EventKind, str] = {
    EventKind.USER_REGISTERED: "green",
    EventKind.PROFILE_UPDATED: "yellow",
    EventKind.CONNECTION_CREATED: "magenta",
}


def render_event_table(events: list[Event]) -> Table:
    """Render recorded events in append order."""
    table = Table(title="Events", show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Time", style="dim")
    table.add_column("Kind")
    table.add_column("Identity", style="cyan")
    table.add_column("Detail")

    for idx, event in enumerate(events, 1):
        color = EVENT_COLORS.get(event.kind, "white")
        detail = event.counterpart if event.counterpart is not None else (event.name or "")
        table.add_row(
            str(idx),
            event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            f"[{color}]{event.kind.value}[/{color}]",
            event.identity,
            detail,
        )

    return table
