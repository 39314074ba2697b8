"""
Schema and validation utilities for the fixtures, standings and results tables.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from goalcast.utils.logging_utils import get_logger

logger = get_logger(__name__)

FIXTURE_COLUMNS: List[str] = ["fixture_id", "home_team", "away_team"]

# Optional on fixtures: when present they bypass the form layer.
RATING_COLUMNS: List[str] = [
    "home_attack",
    "home_defense",
    "away_attack",
    "away_defense",
]
OPTIONAL_PARAMETER_COLUMNS: List[str] = ["home_advantage", "league_average"]

STANDINGS_COLUMNS: List[str] = ["team", "played", "goals_for", "goals_against"]

RESULTS_COLUMNS: List[str] = [
    "date",
    "home_team",
    "away_team",
    "home_score",
    "away_score",
]

PREDICTION_COLUMNS: List[str] = [
    "fixture_id",
    "model_version",
    "p_home",
    "p_draw",
    "p_away",
    "expected_goals_home",
    "expected_goals_away",
]


def _require_columns(df: pd.DataFrame, columns: Sequence[str], table: str) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required {table} columns: {missing}")


def has_rating_columns(df: pd.DataFrame) -> bool:
    """True when every rating column is present on the fixtures table."""
    return all(col in df.columns for col in RATING_COLUMNS)


def validate_fixtures_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate an upcoming fixtures table.

    Checks:
    - Identifier and team columns are present.
    - Rating and parameter columns, if present, are numeric.
    - Duplicate fixture ids are dropped (first one wins).

    Raises
    ------
    ValueError
        If required columns are missing.
    """
    _require_columns(df, FIXTURE_COLUMNS, "fixture")

    df = df.copy()
    for col in RATING_COLUMNS + OPTIONAL_PARAMETER_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    before = len(df)
    df = df.drop_duplicates(subset="fixture_id", keep="first")
    if len(df) < before:
        logger.warning("Dropped %d duplicate fixture rows.", before - len(df))

    return df.reset_index(drop=True)


def validate_standings_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a league standings table (one row per team).

    Raises
    ------
    ValueError
        If required columns are missing or a team appears twice.
    """
    _require_columns(df, STANDINGS_COLUMNS, "standings")

    df = df.copy()
    for col in ("played", "goals_for", "goals_against"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)

    duplicated = df["team"][df["team"].duplicated()].unique().tolist()
    if duplicated:
        raise ValueError(f"Teams listed more than once in standings: {duplicated}")

    return df.reset_index(drop=True)


def validate_results_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a settled results table.

    Checks:
    - All required columns are present.
    - Coerces the date column to datetime and scores to numbers.
    - Drops rows without a usable score (unplayed or abandoned matches).
    """
    _require_columns(df, RESULTS_COLUMNS, "results")

    df = df.copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    if df["date"].isna().any():
        logger.warning("Some result rows have invalid 'date' values after parsing.")

    for col in ("home_score", "away_score"):
        df[col] = pd.to_numeric(df[col], errors="coerce")

    before = len(df)
    df = df.dropna(subset=["home_score", "away_score"])
    if len(df) < before:
        logger.info("Dropped %d result rows without a score.", before - len(df))

    return df.reset_index(drop=True)


def validate_predictions_df(df: pd.DataFrame) -> pd.DataFrame:
    """Validate a stored predictions table."""
    _require_columns(df, PREDICTION_COLUMNS, "prediction")
    return df.copy()


def get_schema_description() -> Dict[str, str]:
    """
    Return a human-readable description of the input columns.

    Returns
    -------
    Dict[str, str]
        Mapping from column name to description.
    """
    return {
        "fixture_id": "Unique fixture identifier",
        "home_team": "Name of home team",
        "away_team": "Name of away team",
        "home_attack": "Home attack rating (optional, dimensionless)",
        "home_defense": "Home defense rating, higher concedes more (optional)",
        "away_attack": "Away attack rating (optional)",
        "away_defense": "Away defense rating (optional)",
        "home_advantage": "Home advantage multiplier (optional)",
        "league_average": "League goals per team per match (optional)",
        "team": "Team name (standings)",
        "played": "Matches played this season (standings)",
        "goals_for": "Season goals scored (standings)",
        "goals_against": "Season goals conceded (standings)",
        "date": "Match date (results)",
        "home_score": "Goals scored by home team (results)",
        "away_score": "Goals scored by away team (results)",
    }
