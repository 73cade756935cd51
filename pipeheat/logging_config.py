"""Logging configuration for the ``pipeheat`` namespace.

Modules log through ``logging.getLogger(__name__)``; nothing is printed
until an application calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "pipeheat"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Configure the ``pipeheat`` logger with a stdout handler.

    Calling it again replaces the handlers instead of duplicating them.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``).
        log_file: Optional path; log records are also written there.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialised at level %s.", logging.getLevelName(level))
    return logger
