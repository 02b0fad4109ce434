"""Logging helpers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Install a rich console handler on the root logger.

    Args:
        level: Logging level name.
    """

    root = logging.getLogger()
    root.setLevel(level)
    # Calling twice must not duplicate output
    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
