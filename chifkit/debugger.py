"""Switchable breakpoint logging for user and engine code."""

from __future__ import annotations

from dataclasses import dataclass

from chifkit import backlog


@dataclass
class _DebugState:
    debugging: bool = False
    engine_debugging: bool = False


_state = _DebugState()


def enable_debugging(state: bool) -> None:
    """Turn breakpoint logging for user code on or off."""
    _state.debugging = bool(state)


def enable_engine_debugging(state: bool) -> None:
    """Turn breakpoint logging for engine code on or off."""
    _state.engine_debugging = bool(state)


def is_debugging_enabled() -> bool:
    """Return whether user breakpoints are logged."""
    return _state.debugging


def is_engine_debugging_enabled() -> bool:
    """Return whether engine breakpoints are logged."""
    return _state.engine_debugging


def breakpoint(file: str, line: int, in_engine: bool = False) -> None:
    """Log that a breakpoint at ``file``:``line`` was reached, if enabled."""
    if in_engine and _state.engine_debugging:
        backlog.log(
            file,
            f"[Source::InEngine] Breakpoint hit at line {line}",
            backlog.LogLevel.DEBUG,
        )
    elif _state.debugging:
        backlog.log(file, f"Breakpoint hit at line {line}", backlog.LogLevel.DEBUG)