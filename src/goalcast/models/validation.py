"""
Input checks shared by the rating estimator and the goal model.

Every check raises InvalidParameterError naming the offending field, so bad
inputs are rejected before any arithmetic runs.
"""

from __future__ import annotations

import math
import numbers

from goalcast.config import MAX_GOALS_LIMIT
from goalcast.errors import InvalidParameterError


def check_finite(name: str, value: float) -> float:
    """Return ``value`` as a float, rejecting non-numeric and non-finite input."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return value


def check_non_negative(name: str, value: float) -> float:
    value = check_finite(name, value)
    if value < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value!r}")
    return value


def check_positive(name: str, value: float) -> float:
    value = check_finite(name, value)
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value!r}")
    return value


def check_max_goals(value: int) -> int:
    """
    Validate the score-matrix truncation bound.

    Integral floats (e.g. ``6.0`` coming from a CSV column) are accepted and
    converted; anything else outside ``0..MAX_GOALS_LIMIT`` is rejected.
    """
    if isinstance(value, bool):
        raise InvalidParameterError(f"max_goals must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        value = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        value = int(value)
    else:
        raise InvalidParameterError(f"max_goals must be an integer, got {value!r}")

    if not 0 <= value <= MAX_GOALS_LIMIT:
        raise InvalidParameterError(
            f"max_goals must be between 0 and {MAX_GOALS_LIMIT}, got {value}"
        )
    return value
