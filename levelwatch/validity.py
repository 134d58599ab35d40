"""Sentinel filter — decides whether an upstream scalar is a real value.

Upstream marks "not computed" with a reserved huge number instead of null.
Anything near that magnitude is noise from the same source.
"""

import math
from typing import Any, Mapping

SENTINEL = 1e100
LARGE_THRESHOLD = 1e10


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a price
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid(value: Any) -> bool:
    """True unless value is None, the sentinel, NaN or above LARGE_THRESHOLD.

    Non-numeric values (str, bool, list, dict) are valid; callers apply their
    own structural checks.
    """
    if value is None:
        return False
    if is_number(value):
        if math.isnan(value):
            return False
        return value != SENTINEL and abs(value) <= LARGE_THRESHOLD
    return True


def has_valid_value(values: Mapping[str, Any] | None) -> bool:
    """True if any entry in the mapping passes is_valid."""
    if not values:
        return False
    return any(is_valid(v) for v in values.values())


def to_price(value: Any) -> float | None:
    """Coerce a numeric or numeric-string level to float; None if unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not is_number(value):
        return None
    value = float(value)
    return value if is_valid(value) else None
