"""Logging setup for the command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route ``ral`` log records through rich, on stderr by default."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    ral_logger = logging.getLogger("ral")
    ral_logger.handlers.clear()
    ral_logger.addHandler(handler)
    ral_logger.setLevel(level.upper())
