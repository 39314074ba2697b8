# path: src/goalcast/models/metrics.py
"""
Metrics utilities for scoring GoalCast predictions against settled results.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, log_loss

from goalcast.config import CLASS_LABELS


def brier_score(y_true: np.ndarray, y_proba: np.ndarray) -> float:
    """
    Multi-class Brier score: mean squared distance to the one-hot outcome.

    Ranges from 0 (perfect) to 2 (all mass on a wrong outcome).
    """
    y_true = np.asarray(y_true, dtype=int)
    y_proba = np.asarray(y_proba, dtype=float)
    one_hot = np.eye(y_proba.shape[1])[y_true]
    return float(np.mean(np.sum((y_proba - one_hot) ** 2, axis=1)))


def compute_prediction_metrics(
    y_true: np.ndarray,
    y_proba: np.ndarray,
    labels: list[str] | None = None,
) -> Dict[str, Any]:
    """
    Compute a set of basic probabilistic classification metrics.

    Parameters
    ----------
    y_true : np.ndarray
        True class indices (0..n_classes-1), ordered like ``labels``.
    y_proba : np.ndarray
        Predicted probabilities with shape (n_samples, n_classes).
    labels : list[str] | None
        Class label strings (defaults to CLASS_LABELS); fixes the size of the
        confusion matrix and the log-loss label set.

    Returns
    -------
    dict
        {
          "n_matches": int,
          "accuracy": float,
          "log_loss": float,
          "brier_score": float,
          "baseline_accuracy": float,
          "confusion_matrix": list[list[int]],
        }
    """
    if labels is None:
        labels = CLASS_LABELS

    y_true = np.asarray(y_true, dtype=int)
    y_proba = np.asarray(y_proba, dtype=float)
    if len(y_true) == 0:
        raise ValueError("Cannot compute metrics without any settled predictions.")

    num_classes = len(labels)
    y_pred = np.argmax(y_proba, axis=1)

    acc = accuracy_score(y_true, y_pred)

    # Majority-class baseline accuracy
    counts = np.bincount(y_true, minlength=num_classes)
    baseline_acc = counts.max() / counts.sum()

    ll = log_loss(y_true, y_proba, labels=np.arange(num_classes))

    cm = confusion_matrix(
        y_true,
        y_pred,
        labels=np.arange(num_classes),
    )

    return {
        "n_matches": int(len(y_true)),
        "accuracy": float(acc),
        "log_loss": float(ll),
        "brier_score": brier_score(y_true, y_proba),
        "baseline_accuracy": float(baseline_acc),
        "confusion_matrix": cm.tolist(),
    }
