"""Normalization helpers.

Centralizes defensive parsing of wire attribute values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def safe_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    text = safe_str(value)
    if text is None:
        return None
    normalized = text.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    ``round()`` uses banker's rounding, which would shift heading sector
    boundaries and displayed ages by one on exact halves.
    """
    return math.floor(value + 0.5)
