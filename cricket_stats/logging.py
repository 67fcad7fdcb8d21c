"""Logging configuration using Loguru.

Console output goes to stderr so it never mixes with the tables the CLI
prints on stdout. A second sink writes rotating, JSON-serialized files
under ``LOG_DIR``. Level and directory default to the application
settings, and ``verbose`` forces DEBUG with source locations on the
console.

Example:
    >>> from cricket_stats.logging import setup_logging, get_logger
    >>> setup_logging(verbose=True)
    >>> logger = get_logger(__name__, player_id=1)
    >>> logger.info("Aggregated {} performances", 12)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from cricket_stats.config import get_settings

LOG_FILE_PATTERN = "cricket_stats_{time:YYYY-MM-DD}.log"

CONSOLE_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"

VERBOSE_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Route records from stdlib loggers (pandas, typer) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the stdlib call
        frame, depth = sys._getframe(6), 6
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            name=record.name
        ).log(level, record.getMessage())


def setup_logging(
    level: str | None = None,
    log_dir: str | Path | None = None,
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
    verbose: bool = False,
) -> Path:
    """Configure console and file logging.

    Args:
        level: Minimum log level. Defaults to ``LOG_LEVEL`` from settings.
        log_dir: Directory for log files. Defaults to ``LOG_DIR``.
        rotation: When to rotate log files (e.g., "1 day", "100 MB").
        retention: How long to keep old log files.
        serialize: Whether to write JSON-formatted logs to file.
        verbose: Force DEBUG and show source locations on the console.

    Returns:
        The directory log files are written to.
    """
    if level is None or log_dir is None:
        settings = get_settings()
        level = level or settings.log_level
        log_dir = log_dir if log_dir is not None else settings.log_dir_obj
    if verbose:
        level = "DEBUG"

    logger.remove()
    logger.configure(extra={"name": "cricket_stats"})

    logger.add(
        sys.stderr,
        level=level,
        format=VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT,
        colorize=True,
    )

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path / LOG_FILE_PATTERN,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{line} | {message}",
        rotation=rotation,
        retention=retention,
        serialize=serialize,
        enqueue=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return log_path


def get_logger(name: str, **context: Any) -> Any:
    """Get a logger bound to a module name and optional context.

    Args:
        name: Logger name, typically __name__ of the calling module.
        **context: Extra fields carried on every record, such as
            ``player_id``. They appear in the JSON file logs.

    Returns:
        Loguru logger bound with the given name and context.
    """
    return logger.bind(name=name, **context)


__all__ = ["get_logger", "logger", "setup_logging"]
