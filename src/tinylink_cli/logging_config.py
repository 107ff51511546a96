"""Logging configuration for tinylink-cli."""

import logging

from rich.logging import RichHandler

from tinylink_cli.display import console


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Route the package logger through rich.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The configured ``tinylink_cli`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("tinylink_cli")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger
