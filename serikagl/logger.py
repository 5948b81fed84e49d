"""Thread-safe leveled logger with an optional redirect callback."""

from __future__ import annotations

import sys
import threading
from enum import IntEnum
from typing import Any, Callable, Optional, TextIO

MAX_LOG_LENGTH = 1024


class LogLevel(IntEnum):
    """Severity of a log message, in increasing order."""

    INFO = 0
    DEBUG = 1
    WARNING = 2
    ERROR = 3


LogFunc = Callable[[Any, LogLevel, str], None]


class Logger:
    """Writes messages at or above a minimum level to a stream or a callback."""

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        max_length: int = MAX_LOG_LENGTH,
        stream: Optional[TextIO] = None,
    ) -> None:
        if max_length < 2:
            raise ValueError("max_length must be at least 2")
        self._min_level = LogLevel(min_level)
        self._max_length = max_length
        self._stream = stream
        self._context: Any = None
        self._func: Optional[LogFunc] = None
        self._lock = threading.Lock()

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    def set_log_func(self, context: Any, func: Optional[LogFunc]) -> None:
        """Send messages to ``func(context, level, text)`` instead of the stream."""
        with self._lock:
            self._context = context
            self._func = func

    def set_log_level(self, level: LogLevel) -> None:
        """Drop messages below ``level`` from now on."""
        with self._lock:
            self._min_level = LogLevel(level)

    def log(self, level: LogLevel, file: str, line: int, message: str, *args: Any) -> None:
        """Format ``message % args`` and emit it if ``level`` is high enough."""
        with self._lock:
            level = LogLevel(level)
            if level < self._min_level:
                return
            text = message % args if args else message
            text = text[: self._max_length - 2]
            if self._func is not None:
                self._func(self._context, level, text)
                return
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(f"[{level.name}] {file}:{line}: {text}\n")
            stream.flush()