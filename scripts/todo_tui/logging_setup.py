"""Logging configuration for the TUI."""

from __future__ import annotations

import logging

from textual.logging import TextualHandler

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING) -> None:
    """Send todo_tui logs through Textual's handler.

    While the app is running, records go to the Textual devtools console
    (`textual console`), so they never draw over the screen. Outside the
    app they go to stderr.

    Call this once, before the app starts.
    """
    package_logger = logging.getLogger("todo_tui")
    package_logger.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False
