"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.
Format, date format and level come from `config` (LOG_FORMAT,
LOG_DATE_FORMAT, LOG_LEVEL); an unknown level name falls back to INFO.
"""

import logging
import sys

from config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL

_configured = False


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _configure_root() -> None:
    """Attach the stdout handler to the root logger on first use."""
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(_resolve_level(LOG_LEVEL))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _configure_root()
    return logging.getLogger(name)
