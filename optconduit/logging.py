"""Logging utilities for Opt Conduit.

Provides per-module loggers with a shared configuration. The initial level is
read from the ``OPTCONDUIT_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_LOG_LEVEL_ENV_VAR = "OPTCONDUIT_LOG_LEVEL"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _parse_level(level: int | str, default: int = logging.WARNING) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), default)
    return level


_DEFAULT_LEVEL = _parse_level(os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING"))

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be `__name__` from the calling module.

    Args:
        name: Logger name (typically `__name__`). If None, returns the package
            logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from optconduit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Solving problem")
    """
    if name is None:
        name = "optconduit"

    logger_name = name if name.startswith("optconduit") else f"optconduit.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all Opt Conduit loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or string
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
    """
    level = _parse_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for Opt Conduit.

    Replaces the handlers of every logger created so far and sets the default
    used by loggers created afterwards.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses default.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> from optconduit.logging import configure_logging
        >>> import logging
        >>> configure_logging(level=logging.DEBUG)
    """
    level = _parse_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
