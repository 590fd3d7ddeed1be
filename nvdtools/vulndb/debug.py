"""Verbosity level for diagnostic logging of database operations."""

from __future__ import annotations

import re

_INT8_MIN = -128
_INT8_MAX = 127
_DECIMAL = re.compile(r"[+-]?[0-9]+")

_level = 0


def parse_level(value: str) -> int:
    """Parse a decimal verbosity level that must fit in a signed byte."""
    if not _DECIMAL.fullmatch(value):
        raise ValueError(f"cannot convert verbosity level {value!r} to int8")
    level = int(value, 10)
    if not _INT8_MIN <= level <= _INT8_MAX:
        raise ValueError(f"cannot convert verbosity level {value!r} to int8")
    return level


def set_level(value: str | int) -> None:
    """Set the verbosity level from a string or an integer."""
    global _level
    if isinstance(value, str):
        _level = parse_level(value)
        return
    if not _INT8_MIN <= value <= _INT8_MAX:
        raise ValueError(f"verbosity level {value} does not fit in int8")
    _level = int(value)


def get_level() -> int:
    """Return the current verbosity level."""
    return _level


def v(level: int) -> bool:
    """Report whether the configured verbosity is at least ``level``."""
    return level <= _level