"""
Score a table of upcoming fixtures with the Dixon-Coles model.

Usage (from project root, with the virtualenv activated):

    python -m goalcast.models.predict_fixtures

This will:
- Load data/raw/fixtures.csv (or --fixtures).
- Use the fixture's own rating columns when present, otherwise derive ratings
  from data/raw/standings.csv and data/raw/results.csv.
- Save one prediction per fixture to data/processed/predictions.csv.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from goalcast.config import (
    DEFAULT_MAX_GOALS,
    DEFAULT_RHO,
    MODEL_VERSION,
    RECENT_FORM_WINDOW,
)
from goalcast.data.data_loader import load_fixtures, load_results, load_standings
from goalcast.data.schema import (
    OPTIONAL_PARAMETER_COLUMNS,
    PREDICTION_COLUMNS,
    RATING_COLUMNS,
    has_rating_columns,
)
from goalcast.errors import GoalCastError
from goalcast.features.form import FormConfig, build_fixture_inputs
from goalcast.models.goal_model import ModelParameters
from goalcast.models.predictor import predict
from goalcast.models.ratings import Ratings, clamp_ratings
from goalcast.utils.logging_utils import get_logger
from goalcast.utils.paths import get_predictions_path

logger = get_logger(__name__)


def _row_has_ratings(row: pd.Series) -> bool:
    return all(col in row.index and pd.notna(row[col]) for col in RATING_COLUMNS)


def _row_parameters(row: pd.Series, base_params: ModelParameters) -> ModelParameters:
    overrides = {
        col: float(row[col])
        for col in OPTIONAL_PARAMETER_COLUMNS
        if col in row.index and pd.notna(row[col])
    }
    return dataclasses.replace(base_params, **overrides) if overrides else base_params


def predict_fixture_table(
    df_fixtures: pd.DataFrame,
    df_standings: Optional[pd.DataFrame] = None,
    df_results: Optional[pd.DataFrame] = None,
    base_params: Optional[ModelParameters] = None,
    form_config: Optional[FormConfig] = None,
    model_version: str = MODEL_VERSION,
) -> pd.DataFrame:
    """
    Predict every fixture in a validated fixtures table.

    Parameters
    ----------
    df_fixtures : pandas.DataFrame
        Fixtures, optionally carrying rating and parameter columns.
    df_standings, df_results : pandas.DataFrame | None
        League tables used for fixtures without ratings.
    base_params : ModelParameters | None
        Defaults for rho, max_goals, home advantage and league average.
    form_config : FormConfig | None
        Window and rating method for the form layer.
    model_version : str
        Tag stored with each prediction.

    Returns
    -------
    pandas.DataFrame
        One row per fixture with ``PREDICTION_COLUMNS``.

    Raises
    ------
    ValueError
        If a fixture has no ratings and no league tables were supplied.
    """
    if base_params is None:
        base_params = ModelParameters()

    records: List[Dict[str, Any]] = []
    for _, row in df_fixtures.iterrows():
        if _row_has_ratings(row):
            ratings = clamp_ratings(
                Ratings(**{col: float(row[col]) for col in RATING_COLUMNS})
            )
            params = _row_parameters(row, base_params)
        elif df_standings is not None and df_results is not None:
            ratings, params = build_fixture_inputs(
                df_standings,
                df_results,
                row["home_team"],
                row["away_team"],
                config=form_config,
                base_params=base_params,
            )
        else:
            raise ValueError(
                f"Fixture {row['fixture_id']} has no ratings and no standings/results "
                "were provided to derive them."
            )

        prediction = predict(ratings, params)
        records.append(
            {
                "fixture_id": row["fixture_id"],
                "model_version": model_version,
                "p_home": prediction.p_home,
                "p_draw": prediction.p_draw,
                "p_away": prediction.p_away,
                "expected_goals_home": prediction.goals.lambda_home,
                "expected_goals_away": prediction.goals.lambda_away,
            }
        )

    return pd.DataFrame.from_records(records, columns=PREDICTION_COLUMNS)


def run_predictions(
    fixtures_path: Optional[Path | str] = None,
    output_path: Optional[Path | str] = None,
    standings_path: Optional[Path | str] = None,
    results_path: Optional[Path | str] = None,
    rho: float = DEFAULT_RHO,
    max_goals: int = DEFAULT_MAX_GOALS,
    window: int = RECENT_FORM_WINDOW,
    method: str = "form",
) -> pd.DataFrame:
    """Run the batch prediction pipeline and write the predictions CSV."""
    logger.info("Starting fixture predictions...")
    df_fixtures = load_fixtures(fixtures_path)

    df_standings = df_results = None
    needs_tables = not has_rating_columns(df_fixtures) or (
        df_fixtures[RATING_COLUMNS].isna().values.any()
    )
    if needs_tables:
        df_standings = load_standings(standings_path)
        df_results = load_results(results_path)

    predictions = predict_fixture_table(
        df_fixtures,
        df_standings,
        df_results,
        base_params=ModelParameters(rho=rho, max_goals=max_goals),
        form_config=FormConfig(recent_form_window=window, method=method),
    )

    out_path = Path(output_path) if output_path is not None else get_predictions_path()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    predictions.to_csv(out_path, index=False)
    logger.info("Saved %d predictions to %s", len(predictions), out_path)
    return predictions


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Predict upcoming fixtures with the Dixon-Coles model."
    )
    parser.add_argument("--fixtures", type=str, default=None, help="Fixtures CSV path.")
    parser.add_argument("--standings", type=str, default=None, help="Standings CSV path.")
    parser.add_argument("--results", type=str, default=None, help="Results CSV path.")
    parser.add_argument("--output", type=str, default=None, help="Predictions CSV path.")
    parser.add_argument(
        "--rho",
        type=float,
        default=DEFAULT_RHO,
        help="Dixon-Coles correlation strength.",
    )
    parser.add_argument(
        "--max-goals",
        type=int,
        default=DEFAULT_MAX_GOALS,
        help="Score-matrix truncation bound.",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=RECENT_FORM_WINDOW,
        help="Number of recent matches used for form.",
    )
    parser.add_argument(
        "--method",
        choices=["form", "blend"],
        default="form",
        help="How to derive ratings for fixtures without rating columns.",
    )
    args = parser.parse_args(argv)

    try:
        run_predictions(
            fixtures_path=args.fixtures,
            output_path=args.output,
            standings_path=args.standings,
            results_path=args.results,
            rho=args.rho,
            max_goals=args.max_goals,
            window=args.window,
            method=args.method,
        )
    except (GoalCastError, ValueError, FileNotFoundError) as exc:
        logger.error("Prediction run failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
