"""Lenient parsing helpers for settings and feed values."""

from __future__ import annotations

from typing import Any

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def parse_int(value: Any) -> int | None:
    """Return value as int, or None if it is not an integral number.

    Accepts ints, integral floats and numeric strings ("42", " 42 ").
    Booleans are rejected so that True does not silently become 1.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None


def safe_positive_int(value: Any, fallback: int) -> int:
    """Parse a strictly positive int; unparseable or <= 0 values yield fallback."""
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        return fallback
    return parsed


def safe_bool(value: Any, fallback: bool) -> bool:
    """Parse a boolean flag from bools, 0/1 or common strings; otherwise fallback."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return fallback


def safe_text(value: Any, fallback: str) -> str:
    """Return a stripped non-empty string, otherwise fallback."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback
