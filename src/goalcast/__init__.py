"""
GoalCast: Dixon-Coles match outcome probabilities.

Quick use:

    from goalcast import Ratings, predict

    prediction = predict(Ratings(1.8, 1.2, 1.1, 0.9))
    prediction.p_home, prediction.p_draw, prediction.p_away
"""

from goalcast.errors import GoalCastError, InvalidParameterError, NormalizationError
from goalcast.models.goal_model import ModelParameters
from goalcast.models.predictor import Prediction, predict, predict_from_lambdas
from goalcast.models.ratings import Ratings

__all__ = [
    "GoalCastError",
    "InvalidParameterError",
    "ModelParameters",
    "NormalizationError",
    "Prediction",
    "Ratings",
    "predict",
    "predict_from_lambdas",
]
