"""
Input validation for user-supplied values.
Checks run before any read or write reaches the store.
"""

import math
from typing import Any, Optional


class ValidationError(ValueError):
    """A user input was rejected; the message is meant for the end user."""


def parse_positive(value: Any) -> Optional[float]:
    """Return `value` as a finite number > 0, or None when it is anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def require_positive(value: Any, message: str) -> float:
    """Like `parse_positive`, but raise ValidationError(message) instead of None."""
    number = parse_positive(value)
    if number is None:
        raise ValidationError(message)
    return number


def require_at_least(value: Any, minimum: float, message: str) -> float:
    number = parse_positive(value)
    if number is None or number < minimum:
        raise ValidationError(message)
    return number
