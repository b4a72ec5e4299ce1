"""Parsing of human duration strings such as `25m`, `90s` or `1h30m`."""

from __future__ import annotations

import math
import re

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1.0,
    "sec": 1.0,
    "m": 60.0,
    "min": 60.0,
    "h": 3600.0,
}
_PART = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|sec|min|s|m|h)")
_FULL = re.compile(r"(?:\s*\d+(?:\.\d+)?\s*(?:ms|sec|min|s|m|h)\s*)+")


def parse_duration_seconds(value: str) -> float:
    """Parse a duration into seconds; bare numbers are minutes.

    Raises:
        ValueError: If the text is not a non-negative duration.
    """
    raw = value.strip().lower()
    if not raw:
        raise ValueError("duration cannot be empty")

    try:
        minutes = float(raw)
    except ValueError:
        pass
    else:
        if not math.isfinite(minutes) or minutes < 0:
            raise ValueError(f"duration must be a finite, non-negative number: {value!r}")
        return minutes * 60.0

    if not _FULL.fullmatch(raw):
        raise ValueError(f"invalid duration: {value!r}")
    return sum(float(amount) * _UNIT_SECONDS[unit] for amount, unit in _PART.findall(raw))
