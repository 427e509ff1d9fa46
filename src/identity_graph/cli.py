# ABOUTME: Command-line interface for the identity graph registry using Typer.
# ABOUTME: Provides register, update, connect and query commands rendered with Rich.

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from identity_graph.config import get_settings
from identity_graph.display import (
    ProfileTable,
    display_error,
    render_consistency_report,
    render_event_table,
    render_identity_table,
    render_statistics,
)
from identity_graph.errors import IdentityGraphError
from identity_graph.logging_config import configure_logging
from identity_graph.models import EventKind
from identity_graph.service import IdentityGraphService

app = typer.Typer(
    name="identity-graph",
    help="Register identity profiles and manage the mutual connection graph.",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)

NameOption = Annotated[str, typer.Option("--name", "-n", help="Display name.")]
BioOption = Annotated[str, typer.Option("--bio", "-b", help="Short biography.")]
SkillsOption = Annotated[
    list[str] | None,
    typer.Option("--skill", "-s", help="Skill tag; repeat for several skills."),
]


def _get_service() -> IdentityGraphService:
    """Build the service over the configured database."""
    return IdentityGraphService.from_settings(get_settings())


def _fail(ctx: typer.Context, error: IdentityGraphError) -> typer.Exit:
    """Print an error panel and return the exit to raise.

    The panel includes the traceback when the CLI runs with --verbose.
    """
    logger.debug("Operation rejected: %s", error)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    console.print(display_error(error, verbose=verbose))
    return typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log at INFO level and show error tracebacks."),
    ] = False,
) -> None:
    """Identity graph registry CLI.

    Register profiles, connect identities and query the resulting graph.
    """
    ctx.obj = {"verbose": verbose}
    settings = get_settings()
    configure_logging("INFO" if verbose else settings.log_level)
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


@app.command()
def register(
    ctx: typer.Context,
    identity: Annotated[str, typer.Argument(help="Identity to register.")],
    name: NameOption,
    bio: BioOption,
    skills: SkillsOption = None,
) -> None:
    """Register a profile for a new identity."""
    service = _get_service()
    try:
        service.register(identity, name, bio, skills or [])
    except IdentityGraphError as e:
        raise _fail(ctx, e) from None
    console.print(f"[green]Registered '[bold]{identity}[/bold]'.[/green]")


@app.command()
def update(
    ctx: typer.Context,
    identity: Annotated[str, typer.Argument(help="Registered identity to update.")],
    name: NameOption,
    bio: BioOption,
    skills: SkillsOption = None,
) -> None:
    """Replace the name, bio and skills of a registered identity."""
    service = _get_service()
    try:
        service.update_profile(identity, name, bio, skills or [])
    except IdentityGraphError as e:
        raise _fail(ctx, e) from None
    console.print(f"[green]Updated profile of '[bold]{identity}[/bold]'.[/green]")


@app.command()
def profile(
    ctx: typer.Context,
    identity: Annotated[str, typer.Argument(help="Identity to show.")],
) -> None:
    """Show a registered profile."""
    service = _get_service()
    try:
        view = service.get_profile(identity)
    except IdentityGraphError as e:
        raise _fail(ctx, e) from None
    console.print(ProfileTable().render(view))


@app.command()
def connect(
    ctx: typer.Context,
    identity: Annotated[str, typer.Argument(help="Caller identity.")],
    target: Annotated[str, typer.Argument(help="Identity to connect with.")],
) -> None:
    """Create a mutual connection between two registered identities."""
    service = _get_service()
    try:
        service.connect(identity, target)
    except IdentityGraphError as e:
        raise _fail(ctx, e) from None
    console.print(
        f"[green]Connected '[bold]{identity}[/bold]' and '[bold]{target}[/bold]'.[/green]"
    )


@app.command()
def connected(
    identity_a: Annotated[str, typer.Argument(help="First identity.")],
    identity_b: Annotated[str, typer.Argument(help="Second identity.")],
) -> None:
    """Check whether two identities are connected."""
    service = _get_service()
    if service.are_connected(identity_a, identity_b):
        console.print(f"[green]'{identity_a}' and '{identity_b}' are connected.[/green]")
    else:
        console.print(f"[yellow]'{identity_a}' and '{identity_b}' are not connected.[/yellow]")


@app.command()
def connections(
    ctx: typer.Context,
    identity: Annotated[str, typer.Argument(help="Registered identity.")],
) -> None:
    """List an identity's connections in the order they were formed."""
    service = _get_service()
    try:
        peers = service.list_connections(identity)
    except IdentityGraphError as e:
        raise _fail(ctx, e) from None

    if peers:
        console.print(render_identity_table(peers, title=f"Connections of {identity}"))
    else:
        console.print(f"[yellow]'{identity}' has no connections.[/yellow]")


@app.command()
def users() -> None:
    """List all registered identities in registration order."""
    service = _get_service()
    identities = service.list_all_users()
    if identities:
        console.print(render_identity_table(identities, title="Registered Users"))
    else:
        console.print("[yellow]No registered users.[/yellow]")


@app.command()
def stats() -> None:
    """Show registered user and active connection counts."""
    service = _get_service()
    console.print(render_statistics(service.get_statistics()))


@app.command()
def events(
    kind: Annotated[
        EventKind | None,
        typer.Option("--kind", "-k", help="Only show events of this kind."),
    ] = None,
    identity: Annotated[
        str | None,
        typer.Option("--identity", "-i", help="Only show events involving this identity."),
    ] = None,
) -> None:
    """Show the event log in append order."""
    service = _get_service()
    recorded = service.list_events(kind=kind, identity=identity)
    if recorded:
        console.print(render_event_table(recorded))
    else:
        console.print("[yellow]No events recorded.[/yellow]")


@app.command()
def check() -> None:
    """Verify graph invariants against the stored data."""
    service = _get_service()
    problems = service.check_consistency()
    console.print(render_consistency_report(problems))
    if problems:
        raise typer.Exit(code=1)


def _generate_default_export_path() -> Path:
    """Generate a default export file path with timestamp."""
    from datetime import UTC, datetime

    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return Path(f"connections_export_{timestamp}.csv")


@app.command()
def export(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path. Defaults to connections_export_{timestamp}.csv",
        ),
    ] = None,
) -> None:
    """Export all connections to CSV."""
    service = _get_service()
    output_path = output if output is not None else _generate_default_export_path()
    result_path, count = service.export_connections(output_path)

    if count == 0:
        console.print("[yellow]No connections to export.[/yellow]")
    else:
        console.print(f"[green]Exported {count} connection(s) to:[/green]")
    console.print(f"  [cyan]{result_path}[/cyan]")


if __name__ == "__main__":
    app()
