# path: src/goalcast/api/main.py
"""
FastAPI app exposing GoalCast prediction endpoints.

Endpoints:
- GET  /health            -> simple health check
- POST /predict           -> outcome probabilities from team ratings
- POST /predict/lambdas   -> outcome probabilities from raw expected goals
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from goalcast.config import (
    DEFAULT_HOME_ADVANTAGE,
    DEFAULT_LEAGUE_AVERAGE,
    DEFAULT_MAX_GOALS,
    DEFAULT_RHO,
)
from goalcast.errors import InvalidParameterError, NormalizationError
from goalcast.models.goal_model import ModelParameters
from goalcast.models.predictor import predict, predict_from_lambdas
from goalcast.models.ratings import Ratings
from goalcast.utils.logging_utils import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="GoalCast API",
    version="0.1.0",
    description="Dixon-Coles match outcome probabilities",
)


class PredictRequest(BaseModel):
    home_attack: float
    home_defense: float
    away_attack: float
    away_defense: float
    home_advantage: float = DEFAULT_HOME_ADVANTAGE
    league_average: float = DEFAULT_LEAGUE_AVERAGE
    rho: float = DEFAULT_RHO
    max_goals: int = DEFAULT_MAX_GOALS


class LambdaPredictRequest(BaseModel):
    lambda_home: float
    lambda_away: float
    rho: float = DEFAULT_RHO
    max_goals: int = DEFAULT_MAX_GOALS


@app.exception_handler(InvalidParameterError)
async def invalid_parameter_handler(request: Request, exc: InvalidParameterError) -> JSONResponse:
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NormalizationError)
async def normalization_handler(request: Request, exc: NormalizationError) -> JSONResponse:
    logger.error("Computation failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/predict")
def predict_endpoint(payload: PredictRequest) -> Dict[str, Any]:
    """
    Predict a fixture from attack/defense ratings.

    Request:
        {
          "home_attack": 1.8, "home_defense": 1.2,
          "away_attack": 1.1, "away_defense": 0.9,
          "home_advantage": 1.35, "league_average": 1.4,
          "rho": 0.1, "max_goals": 6
        }

    Response:
        {
          "p_home": ..., "p_draw": ..., "p_away": ...,
          "expected_goals_home": ..., "expected_goals_away": ...,
          "model_parameters": {...}
        }
    """
    ratings = Ratings(
        home_attack=payload.home_attack,
        home_defense=payload.home_defense,
        away_attack=payload.away_attack,
        away_defense=payload.away_defense,
    )
    params = ModelParameters(
        home_advantage=payload.home_advantage,
        league_average=payload.league_average,
        rho=payload.rho,
        max_goals=payload.max_goals,
    )
    return predict(ratings, params).to_dict()


@app.post("/predict/lambdas")
def predict_lambdas_endpoint(payload: LambdaPredictRequest) -> Dict[str, Any]:
    """Predict a fixture directly from expected goals (legacy entry point)."""
    return predict_from_lambdas(
        payload.lambda_home,
        payload.lambda_away,
        rho=payload.rho,
        max_goals=payload.max_goals,
    ).to_dict()
