import pandas as pd
import pytest

from goalcast.data.schema import validate_results_df, validate_standings_df


@pytest.fixture
def standings_df() -> pd.DataFrame:
    return validate_standings_df(
        pd.DataFrame(
            {
                "team": ["Alpha", "Beta"],
                "played": [10, 10],
                "goals_for": [20, 10],
                "goals_against": [10, 20],
            }
        )
    )


@pytest.fixture
def results_df() -> pd.DataFrame:
    return validate_results_df(
        pd.DataFrame(
            {
                "fixture_id": [1, 2, 3, 4],
                "date": ["2024-01-01", "2024-01-08", "2024-01-15", "2024-01-22"],
                "home_team": ["Alpha", "Beta", "Alpha", "Beta"],
                "away_team": ["Beta", "Alpha", "Beta", "Alpha"],
                "home_score": [2, 1, 3, 0],
                "away_score": [0, 1, 1, 2],
            }
        )
    )
