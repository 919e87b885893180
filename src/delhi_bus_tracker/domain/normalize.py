"""Normalization helpers.

Every join key passes through ``normalize_key`` before comparison so that a
route id decoded as ``534`` or ``534.0`` matches the reference text ``"534"``.
"""

from __future__ import annotations

import math
import numbers
from typing import Any


def normalize_key(value: Any) -> str | None:
    """Return the canonical string form of an identifier, or None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip()
        return text or None
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return str(int(number))
        return str(number)
    return None


def safe_float(value: Any) -> float | None:
    """Coerce a scalar to a finite float, or None when that is not possible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, numbers.Real):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
