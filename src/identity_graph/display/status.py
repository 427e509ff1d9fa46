# ABOUTME: Status panels for registry statistics and consistency check results.
# ABOUTME: Provides Rich panels for the stats and check commands.

from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def render_statistics(stats: dict[str, int]) -> Panel:
    """Render the aggregate counters as a Rich Panel.

    Args:
        stats: Dictionary from get_statistics.

    Returns:
        Rich Panel containing the formatted counters.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    table.add_row("Registered Users:", f"[cyan]{stats.get('registered_users', 0)}[/cyan]")
    table.add_row("Active Connections:", f"[cyan]{stats.get('active_connections', 0)}[/cyan]")

    return Panel(
        table,
        title="Registry Statistics",
        border_style="blue",
        padding=(1, 2),
    )


def render_consistency_report(problems: list[str]) -> Panel:
    """Render the result of a consistency check.

    Args:
        problems: Violations reported by check_consistency.

    Returns:
        Green panel when consistent, red panel listing violations otherwise.
    """
    if not problems:
        return Panel(
            Text("All graph invariants hold.", style="green"),
            title="Consistency Check",
            border_style="green",
            padding=(1, 2),
        )

    content = Text()
    for problem in problems:
        content.append(f"• {problem}\n", style="red")

    return Panel(
        content,
        title=f"Consistency Check ({len(problems)} problem(s))",
        border_style="red",
        padding=(1, 2),
    )
