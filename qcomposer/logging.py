"""Logging utilities for qcomposer.

Every module asks for its logger through :func:`get_logger`, so all
qcomposer output shares one namespace, one format and one level switch.
The initial level can be set with the ``QCOMPOSER_LOG_LEVEL`` environment
variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_ROOT_NAME = "qcomposer"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_DEFAULT_STREAM: Optional[object] = None


def _level_from_name(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


_DEFAULT_LEVEL = _level_from_name(os.getenv("QCOMPOSER_LOG_LEVEL", "WARNING"))

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qcomposer.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Simulating circuit")
    """
    if name is None:
        name = _ROOT_NAME

    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_NAME}.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)

        handler = logging.StreamHandler(_DEFAULT_STREAM or sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all qcomposer loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or string
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').

    Example:
        >>> from qcomposer.logging import set_log_level
        >>> set_log_level("DEBUG")
    """
    global _DEFAULT_LEVEL
    level = _level_from_name(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for qcomposer.

    Replaces the handler of every logger created so far and sets the
    defaults used for loggers created later. Call it once at application
    startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from qcomposer.logging import configure_logging
        >>> configure_logging(level=logging.INFO)
    """
    global _DEFAULT_LEVEL, _DEFAULT_FORMAT, _DEFAULT_STREAM
    level = _level_from_name(level)

    if stream is None:
        stream = sys.stderr
    if format_string is not None:
        _DEFAULT_FORMAT = format_string

    formatter = logging.Formatter(_DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
    _DEFAULT_STREAM = stream


__all__ = ["get_logger", "set_log_level", "configure_logging"]
