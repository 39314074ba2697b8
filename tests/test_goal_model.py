import math

import numpy as np
import pytest

from goalcast.config import MAX_GOALS_LIMIT
from goalcast.errors import InvalidParameterError
from goalcast.models.goal_model import (
    FACTORIALS,
    GoalExpectation,
    ModelParameters,
    correlation_correction,
    expected_goals,
    poisson_pmf,
    score_matrix,
)
from goalcast.models.ratings import Ratings


def test_expected_goals_formula():
    ratings = Ratings(home_attack=1.8, home_defense=1.2, away_attack=1.1, away_defense=0.9)
    params = ModelParameters(home_advantage=1.35, league_average=1.4, rho=0.1, max_goals=6)

    goals = expected_goals(ratings, params)

    assert goals.lambda_home == pytest.approx(1.8 * 0.9 * 1.35 * 1.4)
    assert goals.lambda_home == pytest.approx(3.0618)
    assert goals.lambda_away == pytest.approx(1.848)


def test_model_parameters_defaults():
    params = ModelParameters()
    assert params.home_advantage == 1.35
    assert params.league_average == 1.4
    assert params.rho == 0.1
    assert params.max_goals == 6


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_goals": -1},
        {"max_goals": MAX_GOALS_LIMIT + 1},
        {"max_goals": 2.5},
        {"max_goals": True},
        {"home_advantage": 0.0},
        {"league_average": -1.4},
        {"rho": float("nan")},
        {"home_advantage": float("inf")},
    ],
)
def test_model_parameters_reject_invalid_values(kwargs):
    with pytest.raises(InvalidParameterError):
        ModelParameters(**kwargs)


def test_model_parameters_accept_integral_float_max_goals():
    assert ModelParameters(max_goals=6.0).max_goals == 6


def test_goal_expectation_rejects_negative_rates():
    with pytest.raises(InvalidParameterError):
        GoalExpectation(lambda_home=-0.1, lambda_away=1.0)


def test_factorial_table():
    assert FACTORIALS[0] == 1.0
    assert FACTORIALS[10] == 3628800.0
    assert len(FACTORIALS) == MAX_GOALS_LIMIT + 1


def test_poisson_pmf_matches_closed_form():
    expected = math.exp(-1.5) * 1.5**2 / 2
    assert poisson_pmf(1.5, 2) == pytest.approx(expected, rel=1e-12)


def test_poisson_pmf_zero_rate():
    assert poisson_pmf(0.0, 0) == 1.0
    assert poisson_pmf(0.0, 3) == 0.0


def test_poisson_pmf_sums_to_one_over_table():
    total = sum(poisson_pmf(2.0, k) for k in range(MAX_GOALS_LIMIT + 1))
    assert total == pytest.approx(1.0, abs=1e-12)


def test_poisson_pmf_huge_rate_underflows_to_zero():
    assert poisson_pmf(1e6, MAX_GOALS_LIMIT) == 0.0


@pytest.mark.parametrize("k", [-1, MAX_GOALS_LIMIT + 1])
def test_poisson_pmf_rejects_k_outside_table(k):
    with pytest.raises(InvalidParameterError):
        poisson_pmf(1.0, k)


def test_poisson_pmf_rejects_negative_rate():
    with pytest.raises(InvalidParameterError):
        poisson_pmf(-1.0, 0)


@pytest.mark.parametrize(
    "home, away, expected",
    [
        (0, 0, 1 - 1.5 * 1.2 * 0.1),
        (1, 0, 1 + 1.2 * 0.1),
        (0, 1, 1 + 1.5 * 0.1),
        (1, 1, 1 - 0.1),
        (2, 0, 1.0),
        (0, 2, 1.0),
        (2, 1, 1.0),
        (5, 5, 1.0),
    ],
)
def test_correlation_correction_cells(home, away, expected):
    assert correlation_correction(home, away, 1.5, 1.2, 0.1) == pytest.approx(expected)


def test_correlation_correction_is_identity_without_rho():
    for i in range(4):
        for j in range(4):
            assert correlation_correction(i, j, 1.5, 1.2, 0.0) == 1.0


def test_score_matrix_shape_and_cells():
    matrix = score_matrix(1.5, 1.2, rho=0.1, max_goals=6)
    assert matrix.shape == (7, 7)

    independent = np.outer(
        [poisson_pmf(1.5, k) for k in range(7)],
        [poisson_pmf(1.2, k) for k in range(7)],
    )
    assert matrix[0, 0] == pytest.approx(independent[0, 0] * (1 - 1.5 * 1.2 * 0.1))
    assert matrix[1, 0] == pytest.approx(independent[1, 0] * (1 + 1.2 * 0.1))
    assert matrix[0, 1] == pytest.approx(independent[0, 1] * (1 + 1.5 * 0.1))
    assert matrix[1, 1] == pytest.approx(independent[1, 1] * 0.9)
    np.testing.assert_allclose(matrix[2:, :], independent[2:, :])
    np.testing.assert_allclose(matrix[:, 2:], independent[:, 2:])


def test_score_matrix_rows_are_home_goals():
    matrix = score_matrix(3.0, 0.5, rho=0.0, max_goals=6)
    # A strong home side puts more mass below the diagonal.
    assert np.tril(matrix, k=-1).sum() > np.triu(matrix, k=1).sum()


def test_score_matrix_without_rho_is_independent_poisson():
    matrix = score_matrix(1.7, 0.8, rho=0.0, max_goals=8)
    independent = np.outer(
        [poisson_pmf(1.7, k) for k in range(9)],
        [poisson_pmf(0.8, k) for k in range(9)],
    )
    np.testing.assert_array_equal(matrix, independent)


def test_score_matrix_single_cell():
    matrix = score_matrix(1.0, 1.0, rho=0.1, max_goals=0)
    assert matrix.shape == (1, 1)
    assert matrix[0, 0] == pytest.approx(math.exp(-2.0))


def test_score_matrix_mass_is_close_to_one_for_wide_bound():
    matrix = score_matrix(1.4, 1.1, rho=0.0, max_goals=MAX_GOALS_LIMIT)
    assert matrix.sum() == pytest.approx(1.0, abs=1e-12)


@pytest.mark.parametrize(
    "lambda_home, lambda_away, rho",
    [
        (3.0, 3.0, 0.2),   # 0-0 factor 1 - 9 * 0.2 < 0
        (1.0, 1.0, 1.5),   # 1-1 factor 1 - 1.5 < 0
        (1.0, 2.0, -1.0),  # 1-0 factor 1 + 2 * -1 < 0
    ],
)
def test_score_matrix_floors_negative_corrections(lambda_home, lambda_away, rho):
    matrix = score_matrix(lambda_home, lambda_away, rho=rho, max_goals=6)

    assert (matrix >= 0).all()
    assert matrix.sum() > 0
    for i in (0, 1):
        for j in (0, 1):
            if correlation_correction(i, j, lambda_home, lambda_away, rho) < 0:
                assert matrix[i, j] == 0.0


def test_score_matrix_high_scoring_fixture_with_default_rho():
    # 4.25 * 3.15 * 0.1 > 1, so the 0-0 cell is emptied.
    matrix = score_matrix(4.25, 3.15, rho=0.1, max_goals=6)
    independent = np.outer(
        [poisson_pmf(4.25, k) for k in range(7)],
        [poisson_pmf(3.15, k) for k in range(7)],
    )

    assert matrix[0, 0] == 0.0
    assert matrix[1, 0] == pytest.approx(independent[1, 0] * (1 + 3.15 * 0.1))
    np.testing.assert_allclose(matrix[2:, :], independent[2:, :])


def test_score_matrix_accepts_small_negative_rho():
    matrix = score_matrix(1.4, 1.1, rho=-0.05, max_goals=6)
    assert (matrix >= 0).all()
    assert matrix[0, 0] > score_matrix(1.4, 1.1, rho=0.0, max_goals=6)[0, 0]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"lambda_home": -1.0, "lambda_away": 1.0},
        {"lambda_home": 1.0, "lambda_away": float("nan")},
        {"lambda_home": 1.0, "lambda_away": 1.0, "max_goals": -2},
        {"lambda_home": 1.0, "lambda_away": 1.0, "rho": float("inf")},
    ],
)
def test_score_matrix_rejects_invalid_inputs(kwargs):
    with pytest.raises(InvalidParameterError):
        score_matrix(**kwargs)
