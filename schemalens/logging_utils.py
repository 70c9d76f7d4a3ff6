"""Logging setup for the schemalens CLI."""

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route library logging through rich at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(show_path=False)],
    )
