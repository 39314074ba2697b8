"""
Helper functions for file and directory paths used in GoalCast.
"""

from pathlib import Path

from goalcast.config import (
    RAW_DATA_DIR,
    PROCESSED_DATA_DIR,
    FIXTURES_FILENAME,
    STANDINGS_FILENAME,
    RESULTS_FILENAME,
    PREDICTIONS_FILENAME,
)


def get_raw_data_path(filename: str) -> Path:
    """Return the path to a file in the raw data directory."""
    return RAW_DATA_DIR / filename


def get_fixtures_path(filename: str | None = None) -> Path:
    """
    Return the path to the upcoming fixtures table.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default fixtures CSV.

    Returns
    -------
    Path
        Full path to the fixtures file.
    """
    return get_raw_data_path(filename or FIXTURES_FILENAME)


def get_standings_path(filename: str | None = None) -> Path:
    """Return the path to the league standings table."""
    return get_raw_data_path(filename or STANDINGS_FILENAME)


def get_results_path(filename: str | None = None) -> Path:
    """Return the path to the settled results table."""
    return get_raw_data_path(filename or RESULTS_FILENAME)


def get_predictions_path(filename: str | None = None) -> Path:
    """
    Return the path to a predictions table in the processed data directory.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default predictions CSV.

    Returns
    -------
    Path
        Full path to the predictions file.
    """
    if filename is None:
        filename = PREDICTIONS_FILENAME
    return PROCESSED_DATA_DIR / filename
