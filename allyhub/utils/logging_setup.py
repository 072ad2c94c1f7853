"""Logging configuration for command-line entry points."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure root logging once, rendering records through rich.

    Args:
        verbose: Log DEBUG and above for allyhub modules instead of WARNING
        console: Console to write to (defaults to stderr)
    """
    root = logging.getLogger()

    # Drop handlers from an earlier call to avoid duplicate output.
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("allyhub").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.captureWarnings(True)
