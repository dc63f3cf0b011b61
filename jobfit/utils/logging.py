"""Logging configuration for the Job Fit Analyzer."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Parent logger for every `jobfit.*` module logger
LOGGER_NAME = "jobfit"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure_logging(
    level: str | None = None,
    stream: TextIO | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the `jobfit` logger.

    Repeated calls only adjust the level; the handler is installed once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Unknown or missing values fall back to INFO.
        stream: Destination stream for the handler. Defaults to stderr so
                JSON written to stdout by the CLI stays clean.
        format_string: Format string for log messages.
        date_format: Format string for timestamps.

    Returns:
        The configured application logger.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger.setLevel(log_level)

    if _handler is None:
        logger.handlers.clear()
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
        logger.addHandler(_handler)
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger


def reset_logging() -> None:
    """Drop the installed handler and level (useful for testing)."""
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _handler = None
