"""
Shared CLI utilities for lsdir.

Provides:
- Console output
- Logging setup
- Formatting utilities
- Option callbacks turning query text into typed specs
"""

import logging
from datetime import datetime
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler

from ..core.errors import LsdirError

# Shared console instance for all CLI output
console = Console()

# Log output goes to stderr
err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Route log records through rich on stderr.

    Raises:
        click.UsageError: If ``level`` is not a logging level name
    """
    if not isinstance(logging.getLevelName(level), int):
        raise click.UsageError(
            f"Invalid log level: {level!r} (set LSDIR_LOG_LEVEL to DEBUG, INFO, WARNING, ERROR or CRITICAL)"
        )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def format_size(size_bytes: int | float | None) -> str:
    """Format byte size to human-readable string."""
    if size_bytes is None:
        return "N/A"
    for unit in ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]:
        if abs(size_bytes) < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} EiB"


def format_datetime(dt: datetime | None) -> str:
    """Format datetime for display."""
    if dt is None:
        return "N/A"
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def spec_callback(parser: Callable[[str], object]):
    """Build a click callback that parses an option value with ``parser``.

    Query errors become click.BadParameter, so a malformed clause aborts the
    command with a usage message instead of a traceback.
    """

    def callback(ctx, param, value):
        if value is None:
            return None
        try:
            return parser(value)
        except LsdirError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e

    return callback
