"""
Provides structured logging with thread-safety and log levels.

Every line carries a UTC timestamp, the level, a dotted event name and
key-value pairs, so batch runs can be grepped per file or per event:

    2024-05-01 10:00:00 | [INFO] | rename.apply | file="a.mkv" | worker=main

Lines are written through ``tqdm.write`` so they do not tear the progress bar
drawn by the batch walker.
"""
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any

from tqdm import tqdm

_print_lock = threading.Lock()
_worker_id_map = {}
_worker_counter = 0
_worker_lock = threading.Lock()
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


def parse_log_level(name: str) -> LogLevel:
    """Map a level name such as ``"debug"`` or ``"WARNING"`` to a LogLevel."""
    key = name.strip().upper()
    if key == "WARNING":
        key = "WARN"
    return LogLevel[key]


def _format_kv(data: Dict[str, Any]) -> str:
    """Format key-value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            # Keep log entries single-line.
            escaped = value.replace("\r", "\\r").replace("\n", "\\n")
            escaped = escaped.replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        elif value is None:
            parts.append(f'{key}=null')
        elif isinstance(value, bool):
            parts.append(f'{key}={str(value).lower()}')
        else:
            parts.append(f'{key}={value}')
    return _separator.join(parts)


def _should_log(level: LogLevel) -> bool:
    """Check if a message at the given level should be logged."""
    return level.value >= _current_level.value


def format_line(event: str, level: LogLevel, **kwargs) -> str:
    """Build a log line without writing it."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"
    if kwargs:
        return f"{header}{_separator}{_format_kv(kwargs)}"
    return header


def log(event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'parse.tv', 'rename.apply')
        level: Log level (TRACE, DEBUG, INFO, WARN, ERROR)
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return

    if "worker" not in kwargs:
        kwargs["worker"] = get_worker_id()

    with _print_lock:
        tqdm.write(format_line(event, level, **kwargs))


def safe_print(*args, **kwargs) -> None:
    """
    Thread-safe print function for user-facing output (previews, prompts).
    Use log() for diagnostics instead.
    """
    with _print_lock:
        print(*args, **kwargs, flush=True)


def get_worker_id() -> str:
    """Get current worker/thread identifier (numeric ID for worker threads)."""
    global _worker_counter
    thread = threading.current_thread()

    if thread.name == "MainThread":
        return "main"

    if thread.ident in _worker_id_map:
        return _worker_id_map[thread.ident]

    with _worker_lock:
        _worker_counter += 1
        worker_id = f"w{_worker_counter}"
        _worker_id_map[thread.ident] = worker_id
        return worker_id
