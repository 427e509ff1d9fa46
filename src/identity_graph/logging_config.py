# ABOUTME: Logging setup that routes stdlib logging through Rich.
# ABOUTME: Installs a single RichHandler on the root logger.

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "identity-graph"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Configure root logging for the application.

    Safe to call more than once; the handler is installed only on the
    first call and later calls just adjust the level.

    Args:
        level: Logging level name (e.g. "INFO").
        console: Optional Rich console to write to. Defaults to stderr.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
