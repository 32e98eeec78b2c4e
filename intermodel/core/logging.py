"""
intermodel Logging
==================
Provides consistent, scoped loggers for the package.
"""

import logging
import sys
from typing import List, Union

CONSOLE_FMT = "[%(name)s] %(levelname)s: %(message)s"

_KNOWN_LOGGERS: List[logging.Logger] = []
_CONSOLE_LEVEL = logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """
    Creates or retrieves a logger with the package console format.

    Args:
        name: Dot-separated module name (e.g., 'intermodel.analysis').
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # handlers filter it down
    logger.propagate = False

    if logger not in _KNOWN_LOGGERS:
        _KNOWN_LOGGERS.append(logger)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )
    if not has_console:
        c_handler = logging.StreamHandler(sys.stdout)
        c_handler.setLevel(_CONSOLE_LEVEL)
        c_handler.setFormatter(logging.Formatter(CONSOLE_FMT))
        logger.addHandler(c_handler)

    return logger


def set_log_level(level: Union[int, str]) -> None:
    """
    Change the console level of every logger created through `get_logger`.

    Args:
        level: A logging level (``logging.DEBUG``) or its name (``"DEBUG"``).
    """
    global _CONSOLE_LEVEL

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    _CONSOLE_LEVEL = level

    for logger in _KNOWN_LOGGERS:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
