"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "fluorite_flake"


def setup_logging(level: str = "INFO", verbose: bool = False) -> logging.Logger:
    """Configure the package logger.

    Log records go to stderr through a rich handler so they never mix with
    command output on stdout.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        verbose: Force DEBUG level and show source paths

    Returns:
        Configured package logger
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        show_time=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False

    return logger
