"""
Goal model, prediction and evaluation for GoalCast.

- `ratings` estimates attack/defense ratings and home advantage.
- `goal_model` computes expected goals and the Dixon-Coles score matrix.
- `aggregator` reduces the score matrix to outcome probabilities.
- `predictor` exposes the `predict` / `predict_from_lambdas` entry points.
- `predict_fixtures` scores a fixtures table (CLI).
- `metrics` and `evaluate_predictions` score stored predictions.
"""
