"""Diagnostic logging for traversal tracing.

Every module logs through ``logging.getLogger(__name__)`` under the
``tagvalid`` namespace. Tracing is purely observational.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LogLevel

LOGGER_NAME = "tagvalid"

_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(level: LogLevel | str = LogLevel.WARN, console: Console | None = None) -> None:
    """Route tagvalid logs to a rich handler at the given level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_LEVELS[LogLevel(level)])

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    logger.addHandler(handler)


# Level in force before enable_debug(True); restored on enable_debug(False)
_level_before_debug: int | None = None


def enable_debug(flag: bool = True) -> None:
    """Turn traversal tracing on or off.

    Switching off returns the logger to whatever level it had when tracing
    was switched on, so a level chosen through ``configure_logging`` survives.
    """
    global _level_before_debug
    logger = logging.getLogger(LOGGER_NAME)
    if flag:
        if _level_before_debug is None:
            _level_before_debug = logger.level
        if not logger.handlers:
            configure_logging(LogLevel.DEBUG)
        logger.setLevel(logging.DEBUG)
    elif _level_before_debug is not None:
        logger.setLevel(_level_before_debug)
        _level_before_debug = None


def is_debug_enabled() -> bool:
    return logging.getLogger(LOGGER_NAME).isEnabledFor(logging.DEBUG)
