import math

import pytest

from goalcast.config import HOME_ADVANTAGE_MAX, HOME_ADVANTAGE_MIN, RATING_FLOOR
from goalcast.errors import InvalidParameterError
from goalcast.models.ratings import (
    Ratings,
    TeamStats,
    VenueStats,
    attack_rating,
    clamp_rating,
    clamp_ratings,
    defense_rating,
    estimate_ratings,
    home_advantage,
    per_game,
)


def _stats(**overrides) -> TeamStats:
    base = dict(
        goals_for=30,
        goals_against=15,
        matches_played=15,
        recent_goals_for=10,
        recent_goals_against=5,
        recent_matches=5,
        venue_goals_for=12,
        venue_goals_against=8,
        venue_matches=8,
    )
    base.update(overrides)
    return TeamStats(**base)


def test_attack_rating_blends_recent_season_and_venue_rates():
    # 0.40 * 2.0 + 0.35 * 2.0 + 0.25 * 1.5
    assert attack_rating(_stats()) == pytest.approx(1.875)


def test_defense_rating_blends_goals_conceded():
    assert defense_rating(_stats()) == pytest.approx(1.0)


def test_ratings_are_floored_for_teams_without_goals():
    assert attack_rating(TeamStats()) == RATING_FLOOR
    assert defense_rating(TeamStats()) == RATING_FLOOR


def test_zero_matches_never_divides_by_zero():
    stats = TeamStats(goals_for=3, matches_played=0)
    assert per_game(3, 0) == 3
    assert attack_rating(stats) == pytest.approx(max(0.35 * 3, RATING_FLOOR))


def test_missing_stats_count_as_zero():
    stats = TeamStats(goals_for=None, recent_goals_for=None)
    assert stats.goals_for == 0.0
    assert stats.recent_goals_for == 0.0


def test_team_stats_from_mapping_ignores_unknown_keys():
    stats = TeamStats.from_mapping({"goals_for": 12, "team": "Arsenal"})
    assert stats.goals_for == 12.0
    assert stats.matches_played == 0.0


@pytest.mark.parametrize("value", [-1, float("nan"), float("inf")])
def test_invalid_team_stats_are_rejected(value):
    with pytest.raises(InvalidParameterError):
        TeamStats(goals_for=value)


def test_home_advantage_rewards_strong_home_record():
    venue = VenueStats(
        home_wins=8, home_draws=1, home_losses=1,
        home_goals_for=25, home_goals_against=5, total_home_matches=10,
    )
    assert home_advantage(venue) == pytest.approx(1.60)


def test_home_advantage_penalizes_poor_home_record():
    venue = VenueStats(
        home_wins=2, home_draws=3, home_losses=5,
        home_goals_for=5, home_goals_against=15, total_home_matches=10,
    )
    assert home_advantage(venue) == pytest.approx(1.10)


def test_home_advantage_is_base_for_average_record():
    venue = VenueStats(
        home_wins=5, home_draws=3, home_losses=2,
        home_goals_for=12, home_goals_against=12, total_home_matches=10,
    )
    assert home_advantage(venue) == pytest.approx(1.35)


def test_home_advantage_counts_matches_from_record_when_total_missing():
    venue = VenueStats(home_wins=7, home_draws=2, home_losses=1)
    assert venue.matches == 10
    assert home_advantage(venue) == pytest.approx(1.50)


def test_home_advantage_without_data_stays_in_bounds():
    value = home_advantage(VenueStats())
    assert value == pytest.approx(1.20)
    assert HOME_ADVANTAGE_MIN <= value <= HOME_ADVANTAGE_MAX


@pytest.mark.parametrize(
    "value, expected",
    [(0.2, 0.6), (0.6, 0.6), (1.1, 1.1), (2.5, 2.5), (7.0, 2.5)],
)
def test_clamp_rating(value, expected):
    assert clamp_rating(value) == expected


def test_clamp_rating_rejects_nan():
    with pytest.raises(InvalidParameterError):
        clamp_rating(math.nan)


def test_clamp_ratings_bounds_every_component():
    clamped = clamp_ratings(Ratings(0.1, 3.0, 1.2, 2.6))
    assert clamped == Ratings(0.6, 2.5, 1.2, 2.5)


@pytest.mark.parametrize("value", [0, -0.5, float("nan")])
def test_ratings_must_be_positive_and_finite(value):
    with pytest.raises(InvalidParameterError):
        Ratings(home_attack=value, home_defense=1.0, away_attack=1.0, away_defense=1.0)


def test_ratings_swapped_exchanges_sides():
    ratings = Ratings(1.8, 1.2, 1.1, 0.9)
    assert ratings.swapped() == Ratings(1.1, 0.9, 1.8, 1.2)
    assert ratings.swapped().swapped() == ratings


def test_estimate_ratings_uses_home_and_away_stats():
    home = _stats()
    away = TeamStats()
    ratings = estimate_ratings(home, away, clamp=False)
    assert ratings.home_attack == pytest.approx(1.875)
    assert ratings.home_defense == pytest.approx(1.0)
    assert ratings.away_attack == RATING_FLOOR
    assert ratings.away_defense == RATING_FLOOR

    clamped = estimate_ratings(home, away)
    assert clamped.away_attack == 0.6
    assert clamped.away_defense == 0.6
