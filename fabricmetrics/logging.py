"""Logging setup for fabricmetrics.

Every module logs through ``get_logger(__name__)``. Those loggers carry no
level or handler of their own; the ``fabricmetrics`` logger owns the only
handler, and its level is what the CLI's ``--verbose``/``--quiet`` flags
change. Records go to stderr so tables and JSON on stdout stay clean.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "fabricmetrics"

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _root() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def _build_handler(
    handler: Optional[logging.Handler], format_string: Optional[str]
) -> logging.Handler:
    handler = handler or logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))
    return handler


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Give the ``fabricmetrics`` logger its handler, once.

    Later calls do nothing until :func:`reset_logging` runs, so the first
    caller decides the handler and format.

    Args:
        level: Initial level of the package logger.
        format_string: ``logging.Formatter`` format; a timestamped default
            is used when omitted.
        handler: Destination for records; stderr when omitted.
    """
    global _configured
    if _configured:
        return

    root = _root()
    root.handlers.clear()
    root.addHandler(_build_handler(handler, format_string))
    root.setLevel(level)
    # caplog listens on the Python root logger
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, deferring its level to the package."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Change the package logger's level and its handlers' levels."""
    setup_root_logger()
    root = _root()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Forget the handler so the next logger call sets up afresh (tests)."""
    global _configured
    _configured = False
    root = _root()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
