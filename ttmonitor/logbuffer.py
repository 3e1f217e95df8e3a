"""Logging that keeps recent messages in memory for display in the UI."""

from __future__ import annotations

import logging
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Union

__all__ = [
    "LogMessage",
    "MAX_LOG_MESSAGES",
    "init_logging_with_buffer",
    "get_log_messages",
    "get_recent_log_messages",
    "clear_log_messages",
    "get_log_message_count",
    "disable_stderr",
    "enable_stderr",
]

MAX_LOG_MESSAGES = 100


@dataclass(frozen=True)
class LogMessage:
    """One captured log record."""

    level: str
    message: str
    timestamp: str


_lock = threading.Lock()
_buffer: Optional[Deque[LogMessage]] = None
_stderr_enabled = threading.Event()
_stderr_enabled.set()


class _BufferedHandler(logging.Handler):
    """Writes records to stderr (unless disabled) and to the shared buffer."""

    def __init__(self, buffer: Deque[LogMessage], level: int) -> None:
        super().__init__(level)
        self._buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except Exception:  # malformed format arguments
            self.handleError(record)
            return
        timestamp = time.strftime("%H:%M:%S", time.localtime(record.created))
        if _stderr_enabled.is_set():
            stream = sys.stderr
            stream.write(f"[{timestamp}] {record.levelname} - {message}\n")
            stream.flush()
        with _lock:
            self._buffer.append(LogMessage(record.levelname, message, timestamp))


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def init_logging_with_buffer(level: Union[int, str]) -> None:
    """Install the buffering handler on the root logger; later calls do nothing."""
    global _buffer
    numeric = _resolve_level(level)
    with _lock:
        if _buffer is not None:
            return
        _buffer = deque(maxlen=MAX_LOG_MESSAGES)
        handler = _BufferedHandler(_buffer, numeric)
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(numeric)


def get_log_messages() -> list[LogMessage]:
    """All buffered messages, oldest first."""
    with _lock:
        return list(_buffer) if _buffer is not None else []


def get_recent_log_messages(count: int) -> list[LogMessage]:
    """The newest ``count`` messages, oldest first."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    with _lock:
        if _buffer is None or count == 0:
            return []
        return list(_buffer)[-count:]


def clear_log_messages() -> None:
    """Drop every buffered message."""
    with _lock:
        if _buffer is not None:
            _buffer.clear()


def get_log_message_count() -> int:
    """Number of messages currently buffered."""
    with _lock:
        return len(_buffer) if _buffer is not None else 0


def disable_stderr() -> None:
    """Stop echoing records to stderr; they are still buffered."""
    _stderr_enabled.clear()


def enable_stderr() -> None:
    """Resume echoing records to stderr."""
    _stderr_enabled.set()