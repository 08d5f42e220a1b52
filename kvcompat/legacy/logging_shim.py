# kvcompat/legacy/logging_shim.py
# SPDX-License-Identifier: Apache-2.0
"""
Process-wide logging entry point for legacy callers.

Every kvcompat module logs through `logging.getLogger(__name__)`, so all
package output flows through the `kvcompat` logger. `set_logging` owns the
single handler attached to that logger:

- with a callback, each accepted record is delivered as
  `callback(LogLevel, message)`;
- without one, records go to stderr as
  `<timestamp> KVCOMPAT [<thread id>] <message>`.

Calling `set_logging` again replaces the previous handler. The level and
handler are expected to be configured once at startup and only read
afterwards.

Importing the package installs nothing: until `set_logging` is called, the
`kvcompat` logger has no handler of its own and its records propagate to
whatever the application configured. `reset_logging` returns to that state.
"""

from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, Optional

LOGGER_NAME = "kvcompat"
VERBOSE = 5
STDERR_FORMAT = "%(asctime)s KVCOMPAT [%(thread)d] %(message)s"

logging.addLevelName(VERBOSE, "VERBOSE")


class LogLevel(enum.IntEnum):
    """Legacy severities, valued as stdlib logging levels."""

    ERROR = logging.ERROR
    WARN = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    VERBOSE = VERBOSE

    @classmethod
    def from_logging_level(cls, levelno: int) -> "LogLevel":
        for level in cls:
            if levelno >= level:
                return level
        return cls.VERBOSE

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        key = (name or "").strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown log level: {name!r}") from None


LogCallback = Callable[[LogLevel, str], None]


class _CallbackHandler(logging.Handler):
    def __init__(self, callback: LogCallback) -> None:
        super().__init__()
        self._callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._callback(LogLevel.from_logging_level(record.levelno), record.getMessage())
        except Exception:  # noqa: BLE001
            self.handleError(record)


_handler: Optional[logging.Handler] = None


def _logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def set_logging(level: LogLevel, callback: Optional[LogCallback] = None) -> None:
    """Set the minimum severity and route output to `callback` or stderr."""
    global _handler

    logger = _logger()
    if _handler is not None:
        logger.removeHandler(_handler)

    if callback is not None:
        handler: logging.Handler = _CallbackHandler(callback)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(STDERR_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(int(level))
    logger.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Remove the shim handler and hand `kvcompat` records back to the application."""
    global _handler

    logger = _logger()
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def log(level: LogLevel, message: str) -> None:
    """Emit `message` through the same path as package-internal logging."""
    _logger().log(int(level), "%s", message)


__all__ = [
    "LOGGER_NAME",
    "VERBOSE",
    "LogLevel",
    "LogCallback",
    "set_logging",
    "reset_logging",
    "log",
]
