"""Logging utilities with rich output for the lstodo CLI.

Every module gets its logger through ``get_logger`` so that log records
and rendered results share one rich console.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Scanning %s", root)
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Global console instance shared by log records and rendered results
console = Console()
err_console = Console(stderr=True)

_PACKAGES = ("common", "scan", "present")


def _resolve_level(level: str | None) -> str:
    """Pick the explicit level, else LOG_LEVEL, else INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    return level.upper()


def _make_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,  # file paths and line content may contain brackets
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output (default: False for clean CLI)
        show_path: Show file path in log output (default: False for clean CLI)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(level))
    logger.addHandler(_make_handler(show_time=show_time, show_path=show_path))

    # Propagate so pytest caplog can capture records
    logger.propagate = True

    return logger


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger and every lstodo module logger.

    Called once from the CLI entry point. Module loggers created through
    ``get_logger`` keep their own handler, so only their level is adjusted.

    Args:
        level: Logging level for the whole application; falls back to
               LOG_LEVEL, then INFO.
    """
    resolved = _resolve_level(level)

    logging.getLogger().setLevel(resolved)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.split(".")[0] in _PACKAGES:
            logger.setLevel(resolved)


def error(message: str) -> None:
    """Print a user-facing error with a red X icon to stderr.

    Example:
        >>> error("Root directory does not exist")
        ✗ Root directory does not exist
    """
    err_console.print(f"[red]✗[/red] {escape(message)}")
