"""Process-wide logging setup for the service."""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PACKAGE_LOGGER = "car_dealership"


def log_level() -> int:
    """Level from LOG_LEVEL ('DEBUG', 'INFO', ...), INFO when unset or unknown."""
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int | None = None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Safe to call more than once: an existing handler is reused and only the
    level is updated.

    Args:
        level: Logging level; defaults to LOG_LEVEL from the environment

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    resolved = level if level is not None else log_level()
    logger.setLevel(resolved)

    # Avoid adding multiple handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
