"""
Logging configuration for Organizer.

Every module obtains its logger through get_logger() so the package logger is
configured exactly once with a consistent format.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "organizer"

_configured = False


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name; defaults to ORGANIZER_LOG_LEVEL or INFO

    Returns:
        The configured package logger
    """
    global _configured

    level_name = (level or os.environ.get("ORGANIZER_LOG_LEVEL", "INFO")).upper()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_organizer_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._organizer_handler = True
        logger.addHandler(handler)

    _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
