"""
Dixon-Coles goal model.

Converts ratings and a league baseline into Poisson goal rates and evaluates a
bounded score matrix whose low-scoring cells carry the Dixon-Coles correlation
correction:

    cell[i, j] = P(home = i) * P(away = j) * tau(i, j)

The matrix is truncated at ``max_goals``; the missing tail mass is removed by
normalization in ``goalcast.models.aggregator``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from goalcast.config import (
    DEFAULT_HOME_ADVANTAGE,
    DEFAULT_LEAGUE_AVERAGE,
    DEFAULT_MAX_GOALS,
    DEFAULT_RHO,
    MAX_GOALS_LIMIT,
)
from goalcast.errors import InvalidParameterError
from goalcast.models.ratings import Ratings
from goalcast.models.validation import (
    check_finite,
    check_max_goals,
    check_non_negative,
    check_positive,
)


def _factorial_table(size: int) -> Tuple[float, ...]:
    table = [1.0]
    for k in range(1, size + 1):
        table.append(table[-1] * k)
    return tuple(table)


# k! for k = 0..MAX_GOALS_LIMIT
FACTORIALS: Tuple[float, ...] = _factorial_table(MAX_GOALS_LIMIT)


@dataclass(frozen=True)
class ModelParameters:
    """
    Tunable parameters of the goal model.

    Attributes
    ----------
    home_advantage : float
        Multiplier applied to the home expected goals.
    league_average : float
        Baseline goals-for per team per match.
    rho : float
        Dixon-Coles correlation strength.
    max_goals : int
        Score-matrix truncation bound (inclusive).
    """

    home_advantage: float = DEFAULT_HOME_ADVANTAGE
    league_average: float = DEFAULT_LEAGUE_AVERAGE
    rho: float = DEFAULT_RHO
    max_goals: int = DEFAULT_MAX_GOALS

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "home_advantage", check_positive("home_advantage", self.home_advantage)
        )
        object.__setattr__(
            self, "league_average", check_positive("league_average", self.league_average)
        )
        object.__setattr__(self, "rho", check_finite("rho", self.rho))
        object.__setattr__(self, "max_goals", check_max_goals(self.max_goals))


@dataclass(frozen=True)
class GoalExpectation:
    """Poisson rates (expected goals) for the home and away sides."""

    lambda_home: float
    lambda_away: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "lambda_home", check_non_negative("lambda_home", self.lambda_home)
        )
        object.__setattr__(
            self, "lambda_away", check_non_negative("lambda_away", self.lambda_away)
        )


def expected_goals(ratings: Ratings, params: ModelParameters) -> GoalExpectation:
    """
    Expected goals for both sides.

        lambda_home = home_attack * away_defense * home_advantage * league_average
        lambda_away = away_attack * home_defense * league_average
    """
    return GoalExpectation(
        lambda_home=ratings.home_attack
        * ratings.away_defense
        * params.home_advantage
        * params.league_average,
        lambda_away=ratings.away_attack * ratings.home_defense * params.league_average,
    )


def poisson_pmf(lam: float, k: int) -> float:
    """
    Poisson probability mass ``exp(-lam) * lam**k / k!``.

    ``k`` is limited to ``0..MAX_GOALS_LIMIT`` so the factorial always comes
    from the precomputed table.
    """
    lam = check_non_negative("lambda", lam)
    if not 0 <= k <= MAX_GOALS_LIMIT:
        raise InvalidParameterError(
            f"k must be between 0 and {MAX_GOALS_LIMIT}, got {k}"
        )
    if lam == 0:
        return 1.0 if k == 0 else 0.0
    # Log space keeps very large rates from overflowing lam**k.
    return math.exp(k * math.log(lam) - lam - math.log(FACTORIALS[k]))


def correlation_correction(
    home_goals: int,
    away_goals: int,
    lambda_home: float,
    lambda_away: float,
    rho: float = DEFAULT_RHO,
) -> float:
    """
    Dixon-Coles adjustment factor tau for a single scoreline.

    Only the 0-0, 1-0, 0-1 and 1-1 cells are adjusted; every other scoreline
    returns 1.
    """
    if home_goals > 1 or away_goals > 1:
        return 1.0
    if home_goals == 0 and away_goals == 0:
        return 1.0 - lambda_home * lambda_away * rho
    if home_goals == 1 and away_goals == 0:
        return 1.0 + lambda_away * rho
    if home_goals == 0 and away_goals == 1:
        return 1.0 + lambda_home * rho
    return 1.0 - rho


def score_matrix(
    lambda_home: float,
    lambda_away: float,
    rho: float = DEFAULT_RHO,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> np.ndarray:
    """
    Joint scoreline probabilities with the Dixon-Coles correction.

    Correction factors are floored at zero: in high-scoring fixtures
    ``1 - lambda_home * lambda_away * rho`` goes negative and the 0-0 cell is
    emptied instead. A single-cell matrix (``max_goals=0``) is left
    uncorrected, since normalization makes its only cell certain anyway.

    Parameters
    ----------
    lambda_home, lambda_away : float
        Non-negative Poisson rates.
    rho : float
        Correlation strength.
    max_goals : int
        Truncation bound; the matrix covers 0..max_goals goals per side.

    Returns
    -------
    np.ndarray
        Array of shape (max_goals + 1, max_goals + 1) where ``[i, j]`` is
        P(home scores i, away scores j). Rows are home goals.
    """
    lambda_home = check_non_negative("lambda_home", lambda_home)
    lambda_away = check_non_negative("lambda_away", lambda_away)
    rho = check_finite("rho", rho)
    max_goals = check_max_goals(max_goals)

    goals = range(max_goals + 1)
    home_pmf = np.array([poisson_pmf(lambda_home, k) for k in goals])
    away_pmf = np.array([poisson_pmf(lambda_away, k) for k in goals])
    matrix = np.outer(home_pmf, away_pmf)

    if max_goals >= 1:
        for i in (0, 1):
            for j in (0, 1):
                tau = correlation_correction(i, j, lambda_home, lambda_away, rho)
                matrix[i, j] *= max(tau, 0.0)

    return matrix
