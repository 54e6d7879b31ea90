#!/usr/bin/env python3
"""Logging configuration using loguru for umitransfer."""

import contextlib
import time
from collections.abc import Callable
from pathlib import Path
from typing import Literal, TypeVar

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

T = TypeVar("T")

# Track file handler ID so we can avoid duplicates
_file_handler_id: int | None = None

# Default log format for files
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    log_file: str | Path | None = None,
) -> None:
    """Configure loguru logging for the application.

    Log messages go to stderr so that they never mix with FASTQ data that
    may be written to stdout by other tools in a pipe.

    Args:
        level: Minimum log level to display.
        log_file: Optional path to log file. If None, logs only to console.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        RichHandler(
            console=Console(stderr=True),
            markup=True,
            show_time=False,
            show_level=True,
            show_path=False,
        ),
        format="{message}",
        level=level,
    )

    if log_file:
        add_file_handler(log_file, level=level)


def get_logger(name: str | None = None):
    """Get a logger instance.

    Args:
        name: Optional name for the logger context.

    Returns:
        Configured logger instance.
    """
    if name:
        return logger.bind(name=name)
    return logger


def add_file_handler(
    log_path: Path | str,
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG",
) -> int:
    """Add a file handler to the logger.

    Only one file handler is active at a time.

    Args:
        log_path: Path to the log file.
        level: Minimum log level for file logging.

    Returns:
        Handler ID that can be used to remove the handler later.
    """
    global _file_handler_id

    if _file_handler_id is not None:
        with contextlib.suppress(ValueError):
            logger.remove(_file_handler_id)

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler_id = logger.add(str(log_path), format=LOG_FORMAT, level=level)

    return _file_handler_id


def timedrun(msg: str, func: Callable[[], T]) -> T:
    """Run func and log msg together with the elapsed wall-clock time."""
    start = time.perf_counter()
    result = func()
    logger.info(f"{msg} in {time.perf_counter() - start:.2f}s")
    return result
