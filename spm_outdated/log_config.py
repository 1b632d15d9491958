"""Logging setup for the command line tool."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.ERROR


def setup_logging(verbosity: int = 0) -> None:
    """Route all log records to stderr through rich.

    Without ``-v`` only errors are shown, so non-fatal lookup and manifest
    problems stay silent.
    """
    logging.basicConfig(
        level=level_for_verbosity(verbosity),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbosity >= 2)],
        force=True,
    )
