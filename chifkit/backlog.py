"""Thread-safe in-memory log that echoes to the console and can be saved."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass


class LogLevel(enum.Enum):
    """Severity of a log entry."""

    INFO = enum.auto()
    DEBUG = enum.auto()
    WARNING = enum.auto()
    ERR = enum.auto()


_LEVEL_NAMES = {
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.WARNING: "WARNING",
    LogLevel.ERR: "ERROR",
}


@dataclass(frozen=True)
class LogEntry:
    """One recorded message."""

    source: str
    text: str
    level: LogLevel

    def __str__(self) -> str:
        return f"[{log_level_to_string(self.level)}::{self.source}] {self.text}"


_lock = threading.Lock()
_entries: list[LogEntry] = []


def log_level_to_string(level: LogLevel) -> str:
    """Return the display name of a level, or ``UNKNOWN``."""
    return _LEVEL_NAMES.get(level, "UNKNOWN")


def log(source: str, msg: str, level: LogLevel = LogLevel.INFO) -> None:
    """Record a message and print it to standard output."""
    entry = LogEntry(source, msg, level)
    with _lock:
        _entries.append(entry)
        print(entry, flush=True)


def entries() -> list[LogEntry]:
    """Return a copy of all recorded entries, oldest first."""
    with _lock:
        return list(_entries)


def clear() -> None:
    """Forget all recorded entries."""
    with _lock:
        _entries.clear()


def save_logs(filename: str = "CHIFEngine.log") -> None:
    """Append every recorded entry to ``filename``.

    If the file cannot be opened, an error entry is logged instead.
    """
    with _lock:
        snapshot = list(_entries)
    try:
        with open(filename, "a", encoding="utf-8") as fh:
            fh.writelines(f"{entry}\n" for entry in snapshot)
    except OSError:
        log("Backlog", "Failed to open log file", LogLevel.ERR)