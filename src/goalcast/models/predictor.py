"""
Public prediction entry points.

- ``predict`` runs ratings through the goal model and the aggregator.
- ``predict_from_lambdas`` is the legacy path that takes expected goals
  directly and skips the ratings step.

Both share the same matrix and aggregation code, so they agree whenever they
are fed the same rates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from goalcast.config import DEFAULT_LEAGUE_AVERAGE, DEFAULT_MAX_GOALS, DEFAULT_RHO
from goalcast.models.aggregator import OutcomeDistribution, aggregate
from goalcast.models.goal_model import (
    GoalExpectation,
    ModelParameters,
    expected_goals,
    score_matrix,
)
from goalcast.models.ratings import Ratings
from goalcast.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Prediction:
    """Outcome distribution, expected goals and the parameters that produced them."""

    outcome: OutcomeDistribution
    goals: GoalExpectation
    model_parameters: Dict[str, float] = field(default_factory=dict)

    @property
    def p_home(self) -> float:
        return self.outcome.p_home

    @property
    def p_draw(self) -> float:
        return self.outcome.p_draw

    @property
    def p_away(self) -> float:
        return self.outcome.p_away

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-ready view of the prediction."""
        return {
            **self.outcome.as_dict(),
            "expected_goals_home": self.goals.lambda_home,
            "expected_goals_away": self.goals.lambda_away,
            "model_parameters": dict(self.model_parameters),
        }


def _run_model(
    goals: GoalExpectation,
    rho: float,
    max_goals: int,
    model_parameters: Dict[str, float],
) -> Prediction:
    matrix: np.ndarray = score_matrix(
        goals.lambda_home, goals.lambda_away, rho=rho, max_goals=max_goals
    )
    outcome = aggregate(matrix)
    logger.debug(
        "lambda_home=%.3f lambda_away=%.3f -> home=%.3f draw=%.3f away=%.3f",
        goals.lambda_home,
        goals.lambda_away,
        outcome.p_home,
        outcome.p_draw,
        outcome.p_away,
    )
    return Prediction(outcome=outcome, goals=goals, model_parameters=model_parameters)


def predict(ratings: Ratings, params: Optional[ModelParameters] = None) -> Prediction:
    """
    Predict the outcome distribution of a fixture.

    Parameters
    ----------
    ratings : Ratings
        Attack/defense ratings of both sides (already clamped by the caller).
    params : ModelParameters | None
        Model parameters; defaults are used when None.

    Returns
    -------
    Prediction
        Probabilities, expected goals and the parameters used.
    """
    if params is None:
        params = ModelParameters()

    goals = expected_goals(ratings, params)
    model_parameters = {
        **ratings.as_dict(),
        "home_advantage": params.home_advantage,
        "league_average": params.league_average,
        "correlation_factor": params.rho,
        "max_goals": params.max_goals,
    }
    return _run_model(goals, params.rho, params.max_goals, model_parameters)


def predict_from_lambdas(
    lambda_home: float,
    lambda_away: float,
    rho: float = DEFAULT_RHO,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> Prediction:
    """
    Legacy prediction from raw expected goals.

    The reported parameters describe the equivalent rating-based call: attack
    = lambda / league average, unit defenses and no home advantage.
    """
    params = ModelParameters(
        home_advantage=1.0,
        league_average=DEFAULT_LEAGUE_AVERAGE,
        rho=rho,
        max_goals=max_goals,
    )
    goals = GoalExpectation(lambda_home=lambda_home, lambda_away=lambda_away)
    model_parameters = {
        "home_attack": goals.lambda_home / params.league_average,
        "home_defense": 1.0,
        "away_attack": goals.lambda_away / params.league_average,
        "away_defense": 1.0,
        "home_advantage": params.home_advantage,
        "league_average": params.league_average,
        "correlation_factor": params.rho,
        "max_goals": params.max_goals,
    }
    return _run_model(goals, params.rho, params.max_goals, model_parameters)
