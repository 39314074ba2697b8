# path: src/goalcast/features/form.py
"""
Form features for GoalCast.

This module turns standings and settled results into goal model inputs:

- Builds a team-centric long view with one row per team per match.
- Computes league scoring baselines from the standings table.
- Computes each team's recent form over its last N matches.
- Derives fixture ratings either from recent form relative to the league
  ("form") or from the blended rating estimator rescaled to the league
  ("blend"), plus a venue-based
  home advantage.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from goalcast.config import (
    DEFAULT_FORM_RATE,
    DEFAULT_LEAGUE_AVERAGE,
    MIN_AVERAGE_DIVISOR,
    MIN_LEAGUE_AVERAGE,
    RECENT_FORM_WINDOW,
)
from goalcast.models.goal_model import ModelParameters
from goalcast.models.ratings import (
    Ratings,
    TeamStats,
    VenueStats,
    clamp_ratings,
    estimate_ratings,
    home_advantage,
)
from goalcast.utils.logging_utils import get_logger

logger = get_logger(__name__)

RATING_METHODS = ("form", "blend")


@dataclass
class FormConfig:
    """Configuration for form feature computation."""

    recent_form_window: int = RECENT_FORM_WINDOW
    method: str = "form"

    def __post_init__(self) -> None:
        if self.recent_form_window < 1:
            raise ValueError("recent_form_window must be at least 1")
        if self.method not in RATING_METHODS:
            raise ValueError(
                f"Unknown rating method {self.method!r}; expected one of {RATING_METHODS}"
            )


@dataclass(frozen=True)
class LeagueAverages:
    """Goals scored and conceded per team per match across the league."""

    goals_for: float
    goals_against: float


@dataclass(frozen=True)
class RecentForm:
    """Goals over a team's most recent matches."""

    goals_for: float
    goals_against: float
    matches: int

    @property
    def goals_per_game(self) -> float:
        if self.matches == 0:
            return DEFAULT_FORM_RATE
        return self.goals_for / self.matches

    @property
    def conceded_per_game(self) -> float:
        if self.matches == 0:
            return DEFAULT_FORM_RATE
        return self.goals_against / self.matches


def compute_outcome_label(
    home_goals: int,
    away_goals: int,
) -> str:
    """
    Compute the match outcome from the home team's perspective.

    Returns
    -------
    str
        One of 'home_win', 'draw', 'away_win'.
    """
    if home_goals > away_goals:
        return "home_win"
    if home_goals < away_goals:
        return "away_win"
    return "draw"


def build_long_team_view(df_results: pd.DataFrame) -> pd.DataFrame:
    """
    Construct a long-format DataFrame with one row per team per match.

    For each result, we create:
    - one row for the home team, is_home=1
    - one row for the away team, is_home=0

    Columns: date, team, opponent, is_home, goals_for, goals_against, result
    (win/draw/loss from the team's perspective). Sorted most recent first.
    """
    df_home = df_results[["date", "home_team", "away_team", "home_score", "away_score"]].rename(
        columns={
            "home_team": "team",
            "away_team": "opponent",
            "home_score": "goals_for",
            "away_score": "goals_against",
        }
    )
    df_home["is_home"] = 1

    df_away = df_results[["date", "home_team", "away_team", "home_score", "away_score"]].rename(
        columns={
            "away_team": "team",
            "home_team": "opponent",
            "away_score": "goals_for",
            "home_score": "goals_against",
        }
    )
    df_away["is_home"] = 0

    df_long = pd.concat([df_home, df_away], ignore_index=True)
    df_long["date"] = pd.to_datetime(df_long["date"], errors="coerce")

    def _result(row) -> str:
        if row["goals_for"] > row["goals_against"]:
            return "win"
        if row["goals_for"] < row["goals_against"]:
            return "loss"
        return "draw"

    if df_long.empty:
        df_long["result"] = pd.Series(dtype=str)
    else:
        df_long["result"] = df_long.apply(_result, axis=1)

    return df_long.sort_values("date", ascending=False, na_position="last").reset_index(
        drop=True
    )


def league_averages(df_standings: pd.DataFrame) -> LeagueAverages:
    """
    Goals for/against per team per match across the league.

    Falls back to ``DEFAULT_LEAGUE_AVERAGE`` when no matches have been played.
    """
    played = float(df_standings["played"].sum())
    if played <= 0:
        logger.warning(
            "No matches played in standings; using default league average %.2f",
            DEFAULT_LEAGUE_AVERAGE,
        )
        return LeagueAverages(DEFAULT_LEAGUE_AVERAGE, DEFAULT_LEAGUE_AVERAGE)

    return LeagueAverages(
        goals_for=float(df_standings["goals_for"].sum()) / played,
        goals_against=float(df_standings["goals_against"].sum()) / played,
    )


def recent_form(
    df_long: pd.DataFrame,
    team: str,
    window: int = RECENT_FORM_WINDOW,
) -> RecentForm:
    """
    Goals scored and conceded by ``team`` over its last ``window`` matches.

    Parameters
    ----------
    df_long : pandas.DataFrame
        Output of ``build_long_team_view`` (most recent first).
    team : str
        Team name.
    window : int
        Number of matches to consider.
    """
    last = df_long.loc[df_long["team"] == team].head(window)
    return RecentForm(
        goals_for=float(last["goals_for"].sum()),
        goals_against=float(last["goals_against"].sum()),
        matches=len(last),
    )


def team_stats(
    df_standings: pd.DataFrame,
    df_long: pd.DataFrame,
    team: str,
    is_home: int,
    window: int = RECENT_FORM_WINDOW,
) -> TeamStats:
    """
    Assemble the rating estimator input for one side of a fixture.

    Season totals come from the standings row (zeros if the team is missing),
    recent form from the last ``window`` results and the venue split from all
    of the team's home (``is_home=1``) or away (``is_home=0``) results.
    """
    row = df_standings.loc[df_standings["team"] == team]
    if row.empty:
        logger.warning("Team %r not found in standings; season totals set to 0.", team)
        season = {"goals_for": 0.0, "goals_against": 0.0, "played": 0.0}
    else:
        season = row.iloc[0]

    recent = recent_form(df_long, team, window)
    venue = df_long.loc[(df_long["team"] == team) & (df_long["is_home"] == is_home)]

    return TeamStats(
        goals_for=float(season["goals_for"]),
        goals_against=float(season["goals_against"]),
        matches_played=float(season["played"]),
        recent_goals_for=recent.goals_for,
        recent_goals_against=recent.goals_against,
        recent_matches=recent.matches,
        venue_goals_for=float(venue["goals_for"].sum()),
        venue_goals_against=float(venue["goals_against"].sum()),
        venue_matches=len(venue),
    )


def venue_stats(df_long: pd.DataFrame, team: str) -> VenueStats:
    """Home record of ``team`` from the long results view."""
    home = df_long.loc[(df_long["team"] == team) & (df_long["is_home"] == 1)]
    counts = home["result"].value_counts()
    return VenueStats(
        home_wins=int(counts.get("win", 0)),
        home_draws=int(counts.get("draw", 0)),
        home_losses=int(counts.get("loss", 0)),
        home_goals_for=float(home["goals_for"].sum()),
        home_goals_against=float(home["goals_against"].sum()),
        total_home_matches=len(home),
    )


def form_ratings(
    averages: LeagueAverages,
    home_form: RecentForm,
    away_form: RecentForm,
) -> Ratings:
    """
    Ratings from recent form relative to the league baseline, clamped.

    Attack is goals per game over the league goals-for average; defense is
    goals conceded per game over the league goals-against average, so a
    higher defense rating means a leakier side.
    """
    gf_base = max(averages.goals_for, MIN_AVERAGE_DIVISOR)
    ga_base = max(averages.goals_against, MIN_AVERAGE_DIVISOR)

    def _rate(value: float, base: float) -> float:
        # Clamp still needs a positive input; zero scoring maps to the lower bound.
        return max(value, MIN_AVERAGE_DIVISOR) / base

    ratings = Ratings(
        home_attack=_rate(home_form.goals_per_game, gf_base),
        home_defense=_rate(home_form.conceded_per_game, ga_base),
        away_attack=_rate(away_form.goals_per_game, gf_base),
        away_defense=_rate(away_form.conceded_per_game, ga_base),
    )
    return clamp_ratings(ratings)


def blend_ratings(
    averages: LeagueAverages,
    home_stats: TeamStats,
    away_stats: TeamStats,
) -> Ratings:
    """
    Blended estimator ratings rescaled to the league baseline, clamped.

    ``estimate_ratings`` yields goals per game; dividing by the league
    goals-for / goals-against averages makes a league-average side rate 1.0,
    the same scale ``form_ratings`` produces.
    """
    gf_base = max(averages.goals_for, MIN_AVERAGE_DIVISOR)
    ga_base = max(averages.goals_against, MIN_AVERAGE_DIVISOR)

    raw = estimate_ratings(home_stats, away_stats, clamp=False)
    ratings = Ratings(
        home_attack=raw.home_attack / gf_base,
        home_defense=raw.home_defense / ga_base,
        away_attack=raw.away_attack / gf_base,
        away_defense=raw.away_defense / ga_base,
    )
    return clamp_ratings(ratings)


def build_fixture_inputs(
    df_standings: pd.DataFrame,
    df_results: pd.DataFrame,
    home_team: str,
    away_team: str,
    config: FormConfig | None = None,
    base_params: ModelParameters | None = None,
) -> Tuple[Ratings, ModelParameters]:
    """
    Derive ratings and model parameters for a fixture from league tables.

    Parameters
    ----------
    df_standings : pandas.DataFrame
        Validated standings table.
    df_results : pandas.DataFrame
        Validated results table.
    home_team, away_team : str
        Team names as they appear in both tables.
    config : FormConfig | None
        Window and rating method. If None, uses defaults from config.py.
    base_params : ModelParameters | None
        Parameters whose rho and max_goals are kept; home advantage and league
        average are replaced with values derived from the tables.

    Returns
    -------
    (ratings, params)
        Clamped ratings and the fixture's model parameters.
    """
    if config is None:
        config = FormConfig()
    if base_params is None:
        base_params = ModelParameters()

    df_long = build_long_team_view(df_results)
    averages = league_averages(df_standings)

    if config.method == "form":
        ratings = form_ratings(
            averages,
            recent_form(df_long, home_team, config.recent_form_window),
            recent_form(df_long, away_team, config.recent_form_window),
        )
    else:
        ratings = blend_ratings(
            averages,
            team_stats(df_standings, df_long, home_team, 1, config.recent_form_window),
            team_stats(df_standings, df_long, away_team, 0, config.recent_form_window),
        )

    params = dataclasses.replace(
        base_params,
        home_advantage=home_advantage(venue_stats(df_long, home_team)),
        league_average=max(averages.goals_for, MIN_LEAGUE_AVERAGE),
    )

    logger.info(
        "%s vs %s (%s): ratings=%s home_advantage=%.2f league_average=%.2f",
        home_team,
        away_team,
        config.method,
        ratings.as_dict(),
        params.home_advantage,
        params.league_average,
    )
    return ratings, params
