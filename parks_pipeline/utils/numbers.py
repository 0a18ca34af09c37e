"""Numeric coercion for loosely typed record fields."""

import math
from typing import Any


def as_number(value: Any, default: float | None = 0) -> float | None:
    """Read a priority, score or size as a finite number.

    Numbers and numeric strings are accepted. None, booleans, other
    non-numeric values, NaN and infinities give ``default``.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default

    try:
        number = float(value)
    except (TypeError, ValueError):
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number
