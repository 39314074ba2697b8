import pytest
from fastapi.testclient import TestClient

from goalcast.api.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_predict_endpoint():
    response = client.post(
        "/predict",
        json={
            "home_attack": 1.8,
            "home_defense": 1.2,
            "away_attack": 1.1,
            "away_defense": 0.9,
        },
    )
    assert response.status_code == 200
    body = response.json()

    assert body["expected_goals_home"] == pytest.approx(3.0618)
    assert body["expected_goals_away"] == pytest.approx(1.848)
    assert body["p_home"] + body["p_draw"] + body["p_away"] == pytest.approx(1.0, abs=1e-9)
    assert body["p_home"] > body["p_away"] > body["p_draw"]
    assert body["model_parameters"]["home_advantage"] == 1.35


def test_predict_lambdas_endpoint():
    response = client.post("/predict/lambdas", json={"lambda_home": 1.5, "lambda_away": 1.2})
    assert response.status_code == 200
    body = response.json()

    assert body["expected_goals_home"] == 1.5
    assert body["model_parameters"]["home_advantage"] == 1.0


def test_invalid_rating_is_rejected():
    response = client.post(
        "/predict",
        json={
            "home_attack": -1.0,
            "home_defense": 1.2,
            "away_attack": 1.1,
            "away_defense": 0.9,
        },
    )
    assert response.status_code == 422
    assert "home_attack" in response.json()["detail"]


def test_high_scoring_ratings_are_accepted():
    response = client.post(
        "/predict",
        json={
            "home_attack": 2.0,
            "home_defense": 1.5,
            "away_attack": 1.5,
            "away_defense": 1.5,
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["p_home"] + body["p_draw"] + body["p_away"] == pytest.approx(1.0, abs=1e-9)


def test_max_goals_above_limit_is_rejected():
    response = client.post(
        "/predict/lambdas",
        json={"lambda_home": 1.5, "lambda_away": 1.2, "max_goals": 30},
    )
    assert response.status_code == 422


def test_missing_field_is_rejected():
    response = client.post("/predict", json={"home_attack": 1.0})
    assert response.status_code == 422


def test_normalization_failure_is_server_error():
    response = client.post(
        "/predict/lambdas",
        json={"lambda_home": 1000.0, "lambda_away": 1000.0, "rho": 0.0},
    )
    assert response.status_code == 500
    assert "normalize" in response.json()["detail"]
