"""
Exception types raised by GoalCast.

The core is pure arithmetic, so the taxonomy is narrow: bad inputs are rejected
before any computation, and a score matrix without usable mass is reported
instead of producing NaN probabilities.
"""


class GoalCastError(Exception):
    """Base class for all GoalCast errors."""


class InvalidParameterError(GoalCastError, ValueError):
    """A rating, rate, statistic or model parameter is out of its valid domain."""


class NormalizationError(GoalCastError, ArithmeticError):
    """The score matrix mass is zero or non-finite and cannot be normalized."""
