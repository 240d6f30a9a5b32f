"""
Provides structured, thread-safe console logging for course runs.

Every entry is a single line: UTC timestamp, level, event name and
``key=value`` pairs. Lines are written through ``tqdm.write`` so they never
break an active progress bar, and a lock keeps lines from concurrent clip
workers from interleaving.
"""
import threading
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from tqdm import tqdm

_print_lock = threading.Lock()
_separator = " | "


class LogLevel(Enum):
    """Log level enumeration."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_current_level = LogLevel.INFO


def set_log_level(level: LogLevel) -> None:
    """Set the current log level."""
    global _current_level
    _current_level = level


def get_log_level() -> LogLevel:
    """Get the current log level."""
    return _current_level


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, timedelta):
        return f"{value.total_seconds():.3f}s"
    if isinstance(value, (str, Path)):
        # Keep log entries single-line.
        escaped = str(value).replace("\r", "\\r").replace("\n", "\\n").replace('"', '\\"')
        return f'"{escaped}"'
    return str(value)


def _format_kv(data: Dict[str, Any]) -> str:
    return _separator.join(f"{key}={_format_value(value)}" for key, value in data.items())


def _write_line(text: str) -> None:
    tqdm.write(text)


def _should_log(level: LogLevel) -> bool:
    return level.value >= _current_level.value


def get_worker_id() -> str:
    """Return ``main`` for the main thread, else the pool thread's name."""
    thread = threading.current_thread()
    if thread is threading.main_thread():
        return "main"
    return thread.name


def log(event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'clip.start', 'module.done')
        level: Log level (TRACE, DEBUG, INFO, WARN, ERROR)
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return

    kwargs.setdefault("worker", get_worker_id())

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"
    line = f"{header}{_separator}{_format_kv(kwargs)}" if kwargs else header

    with _print_lock:
        _write_line(line)


def safe_print(*args, **kwargs) -> None:
    """Thread-safe print for plain console output (banners, summaries)."""
    with _print_lock:
        print(*args, **kwargs, flush=True)
