# ABOUTME: Error display helpers for formatting error messages with Rich.
# ABOUTME: Provides error panels with a hint for each rejected registry or graph operation.

import traceback

from rich.panel import Panel
from rich.text import Text

from identity_graph.errors import (
    AlreadyConnected,
    AlreadyRegistered,
    InvalidInput,
    InvalidTarget,
    NotRegistered,
)

ERROR_HINTS: dict[type[Exception], str] = {
    InvalidInput: "Name and bio must be non-empty and at least one skill is required.",
    AlreadyRegistered: "Use 'identity-graph update' to change an existing profile.",
    NotRegistered: "Register the identity first with 'identity-graph register'.",
    InvalidTarget: "Pick a different, non-null identity to connect with.",
    AlreadyConnected: "Connections are permanent; nothing to do.",
}


def display_error(error: Exception, verbose: bool = False) -> Panel:
    """Format an error as a Rich Panel.

    Args:
        error: The exception to display.
        verbose: If True, include full traceback information.

    Returns:
        A Rich Panel containing formatted error information.
    """
    error_type = type(error).__name__
    error_message = str(error)

    content = Text()
    content.append(f"{error_type}: ", style="bold red")
    content.append(error_message, style="red")

    hint = ERROR_HINTS.get(type(error))
    if hint:
        content.append("\n\n")
        content.append(hint, style="dim")

    if verbose:
        content.append("\n\n")
        content.append("Traceback:", style="dim")
        content.append("\n")
        tb_text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        content.append(tb_text, style="dim")

    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(1, 2),
    )
