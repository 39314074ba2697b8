"""
Data loading utilities for GoalCast.

This module provides functions to load the fixtures, standings and results
tables consumed by the batch pipeline, and stored predictions for evaluation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pandas as pd

from goalcast.data.schema import (
    validate_fixtures_df,
    validate_predictions_df,
    validate_results_df,
    validate_standings_df,
)
from goalcast.utils.logging_utils import get_logger
from goalcast.utils.paths import (
    get_fixtures_path,
    get_predictions_path,
    get_results_path,
    get_standings_path,
)

logger = get_logger(__name__)


def _load_csv(
    path: Optional[Path | str],
    default: Callable[[], Path],
    validate: Callable[[pd.DataFrame], pd.DataFrame],
    table: str,
) -> pd.DataFrame:
    csv_path = Path(path) if path is not None else default()
    if not csv_path.exists():
        raise FileNotFoundError(f"{table.capitalize()} file not found: {csv_path}")

    logger.info("Loading %s from %s", table, csv_path)
    df = validate(pd.read_csv(csv_path))
    logger.info("Loaded %d valid %s rows.", len(df), table)
    return df


def load_fixtures(path: Optional[Path | str] = None) -> pd.DataFrame:
    """
    Load upcoming fixtures from a CSV file and validate them.

    Parameters
    ----------
    path : pathlib.Path | str | None
        Path to the fixtures CSV. If None, uses the default path from config.

    Returns
    -------
    pandas.DataFrame
        Validated fixtures DataFrame.
    """
    return _load_csv(path, get_fixtures_path, validate_fixtures_df, "fixtures")


def load_standings(path: Optional[Path | str] = None) -> pd.DataFrame:
    """Load and validate the league standings table."""
    return _load_csv(path, get_standings_path, validate_standings_df, "standings")


def load_results(path: Optional[Path | str] = None) -> pd.DataFrame:
    """Load and validate settled match results."""
    return _load_csv(path, get_results_path, validate_results_df, "results")


def load_predictions(path: Optional[Path | str] = None) -> pd.DataFrame:
    """
    Load stored predictions.

    Raises
    ------
    FileNotFoundError
        If the predictions file does not exist.
    """
    return _load_csv(path, get_predictions_path, validate_predictions_df, "predictions")
