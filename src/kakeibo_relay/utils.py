"""Miscellaneous helpers."""

from __future__ import annotations


def parse_count(value: str | None, default: int = 0) -> int:
    """Parse a non-negative integer setting.

    Blank, malformed or negative values return ``default``.
    """

    if value is None:
        return default
    stripped = value.strip()
    if not stripped:
        return default
    try:
        parsed = int(stripped)
    except ValueError:
        return default
    if parsed < 0:
        return default
    return parsed


def parse_seconds(value: str | None, default: float) -> float:
    if value is None:
        return default
    stripped = value.strip()
    if not stripped:
        return default
    try:
        parsed = float(stripped)
    except ValueError:
        return default
    if parsed <= 0:
        return default
    return parsed


def mask_secret(value: str, visible: int = 4) -> str:
    """Return ``value`` with everything but the last characters hidden."""

    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
