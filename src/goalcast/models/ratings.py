"""
Rating estimation for the Dixon-Coles goal model.

Turns raw observed team statistics into the four dimensionless ratings the
goal model consumes, and derives a venue-adjusted home-advantage factor:

- ``attack_rating`` / ``defense_rating`` blend recent form, season and
  venue-specific per-game rates, then apply a floor.
- ``home_advantage`` nudges a base multiplier up or down from the team's home
  record.
- ``clamp_rating`` / ``clamp_ratings`` bound ratings before model use.

None of the constants involved are fitted from data; they live in
``goalcast.config`` as tunable policy.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from goalcast.config import (
    DOMINANT_HOME_GOAL_DIFF,
    GOAL_DIFF_STEP,
    HOME_ADVANTAGE_BASE,
    HOME_ADVANTAGE_MAX,
    HOME_ADVANTAGE_MIN,
    POOR_HOME_GOAL_DIFF,
    RATING_CLAMP_MAX,
    RATING_CLAMP_MIN,
    RATING_FLOOR,
    RECENT_FORM_WEIGHT,
    SEASON_WEIGHT,
    STRONG_HOME_WIN_RATE,
    VENUE_WEIGHT,
    WEAK_HOME_WIN_RATE,
    WIN_RATE_STEP,
)
from goalcast.models.validation import check_finite, check_non_negative, check_positive


def _coerce_counts(instance: Any) -> None:
    """Replace None with 0.0 and validate every field of a stats dataclass."""
    for field in fields(instance):
        value = getattr(instance, field.name)
        if value is None:
            value = 0.0
        object.__setattr__(instance, field.name, check_non_negative(field.name, value))


def _from_mapping(cls, data: Mapping[str, Any]):
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in names})


@dataclass(frozen=True)
class TeamStats:
    """
    Raw scoring statistics for one team.

    The ``venue_*`` fields hold the home split for the home side of a fixture
    and the away split for the away side. Missing values count as zero.
    """

    goals_for: float = 0.0
    goals_against: float = 0.0
    matches_played: float = 0.0
    recent_goals_for: float = 0.0
    recent_goals_against: float = 0.0
    recent_matches: float = 0.0
    venue_goals_for: float = 0.0
    venue_goals_against: float = 0.0
    venue_matches: float = 0.0

    def __post_init__(self) -> None:
        _coerce_counts(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TeamStats":
        """Build from a dict, ignoring keys that are not stats fields."""
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class VenueStats:
    """Home record of a team, used to tune its home advantage."""

    home_wins: float = 0.0
    home_draws: float = 0.0
    home_losses: float = 0.0
    home_goals_for: float = 0.0
    home_goals_against: float = 0.0
    total_home_matches: float = 0.0

    def __post_init__(self) -> None:
        _coerce_counts(self)

    @property
    def matches(self) -> float:
        # Fall back to the W/D/L tally when no explicit total is recorded.
        if self.total_home_matches > 0:
            return self.total_home_matches
        return self.home_wins + self.home_draws + self.home_losses

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VenueStats":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class Ratings:
    """Attack/defense ratings for both sides of a fixture. All strictly positive."""

    home_attack: float
    home_defense: float
    away_attack: float
    away_defense: float

    def __post_init__(self) -> None:
        for field in fields(self):
            value = check_positive(field.name, getattr(self, field.name))
            object.__setattr__(self, field.name, value)

    def swapped(self) -> "Ratings":
        """Return the ratings with home and away sides exchanged."""
        return Ratings(
            home_attack=self.away_attack,
            home_defense=self.away_defense,
            away_attack=self.home_attack,
            away_defense=self.home_defense,
        )

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def per_game(goals: float, matches: float) -> float:
    """Goals per game; fewer than one match counts as one."""
    return goals / max(matches, 1)


def _blend(recent: float, season: float, venue: float) -> float:
    rating = (
        recent * RECENT_FORM_WEIGHT
        + season * SEASON_WEIGHT
        + venue * VENUE_WEIGHT
    )
    return max(rating, RATING_FLOOR)


def attack_rating(stats: TeamStats) -> float:
    """
    Weighted blend of scoring rates, floored at ``RATING_FLOOR``.

    Parameters
    ----------
    stats : TeamStats
        Season, recent-form and venue-specific goals scored.

    Returns
    -------
    float
        40% recent form + 35% season + 25% venue goals per game.
    """
    return _blend(
        per_game(stats.recent_goals_for, stats.recent_matches),
        per_game(stats.goals_for, stats.matches_played),
        per_game(stats.venue_goals_for, stats.venue_matches),
    )


def defense_rating(stats: TeamStats) -> float:
    """Same blend as ``attack_rating`` over goals conceded (higher = leakier)."""
    return _blend(
        per_game(stats.recent_goals_against, stats.recent_matches),
        per_game(stats.goals_against, stats.matches_played),
        per_game(stats.venue_goals_against, stats.venue_matches),
    )


def home_advantage(venue_stats: VenueStats) -> float:
    """
    Venue-adjusted home advantage multiplier.

    Starts at ``HOME_ADVANTAGE_BASE``, moves by ``WIN_RATE_STEP`` for a strong
    or weak home win rate and by ``GOAL_DIFF_STEP`` for a dominant or poor home
    goal difference per game, then clamps to
    ``[HOME_ADVANTAGE_MIN, HOME_ADVANTAGE_MAX]``.
    """
    matches = max(venue_stats.matches, 1)
    win_rate = venue_stats.home_wins / matches
    goal_diff = (venue_stats.home_goals_for - venue_stats.home_goals_against) / matches

    advantage = HOME_ADVANTAGE_BASE
    if win_rate > STRONG_HOME_WIN_RATE:
        advantage += WIN_RATE_STEP
    elif win_rate < WEAK_HOME_WIN_RATE:
        advantage -= WIN_RATE_STEP

    if goal_diff > DOMINANT_HOME_GOAL_DIFF:
        advantage += GOAL_DIFF_STEP
    elif goal_diff < POOR_HOME_GOAL_DIFF:
        advantage -= GOAL_DIFF_STEP

    return max(min(advantage, HOME_ADVANTAGE_MAX), HOME_ADVANTAGE_MIN)


def clamp_rating(
    value: float,
    low: float = RATING_CLAMP_MIN,
    high: float = RATING_CLAMP_MAX,
) -> float:
    """Bound a single rating to ``[low, high]``."""
    value = check_finite("rating", value)
    return max(min(value, high), low)


def clamp_ratings(ratings: Ratings) -> Ratings:
    """Return ``ratings`` with every component bounded by ``clamp_rating``."""
    return Ratings(**{name: clamp_rating(v) for name, v in ratings.as_dict().items()})


def estimate_ratings(
    home_stats: TeamStats,
    away_stats: TeamStats,
    clamp: bool = True,
) -> Ratings:
    """
    Estimate fixture ratings from the statistics of both teams.

    Home attack/defense come from ``home_stats`` and away attack/defense from
    ``away_stats``; when ``clamp`` is set the result is bounded by
    ``clamp_ratings`` so it is ready for the goal model.
    """
    ratings = Ratings(
        home_attack=attack_rating(home_stats),
        home_defense=defense_rating(home_stats),
        away_attack=attack_rating(away_stats),
        away_defense=defense_rating(away_stats),
    )
    return clamp_ratings(ratings) if clamp else ratings
