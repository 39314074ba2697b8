# path: src/goalcast/models/evaluate_predictions.py
"""
Evaluate stored predictions against settled results.

Usage:

    python -m goalcast.models.evaluate_predictions

This will:
- Load data/processed/predictions.csv and data/raw/results.csv
- Join them on fixture_id and label each settled match
- Compute accuracy, log loss, Brier score, baseline accuracy, confusion matrix
- Save confusion matrix and home-win calibration plots to plots/
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from goalcast.config import CLASS_LABELS, PLOTS_DIR
from goalcast.data.data_loader import load_predictions, load_results
from goalcast.features.form import compute_outcome_label
from goalcast.models.metrics import compute_prediction_metrics
from goalcast.utils.logging_utils import get_logger

logger = get_logger(__name__)

PROBABILITY_COLUMNS = ["p_home", "p_draw", "p_away"]


def join_predictions_with_results(
    df_predictions: pd.DataFrame,
    df_results: pd.DataFrame,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Match predictions to settled results on ``fixture_id``.

    Returns
    -------
    (y_true, y_proba)
        Outcome indices ordered like CLASS_LABELS and the predicted
        probabilities of the matched fixtures.
    """
    if "fixture_id" not in df_results.columns:
        raise ValueError("Results table needs a 'fixture_id' column for evaluation.")

    merged = df_predictions.merge(
        df_results[["fixture_id", "home_score", "away_score"]],
        on="fixture_id",
        how="inner",
    )
    unmatched = len(df_predictions) - len(merged)
    if unmatched:
        logger.info("%d predictions have no settled result yet.", unmatched)

    label_to_idx = {lab: i for i, lab in enumerate(CLASS_LABELS)}
    labels = [
        compute_outcome_label(h, a)
        for h, a in zip(merged["home_score"], merged["away_score"], strict=True)
    ]
    y_true = np.array([label_to_idx[lab] for lab in labels], dtype=int)
    y_proba = merged[PROBABILITY_COLUMNS].to_numpy(dtype=float)
    return y_true, y_proba


def outcome_shares(cm: np.ndarray) -> np.ndarray:
    """Row-normalize a confusion matrix; rows with no matches stay zero."""
    cm = np.asarray(cm, dtype=float)
    totals = cm.sum(axis=1, keepdims=True)
    return np.divide(cm, totals, out=np.zeros_like(cm), where=totals > 0)


def _plot_confusion_matrix(cm: np.ndarray, plots_dir: Path) -> Path:
    """
    Heatmap of how each actual outcome was called.

    Colors are the share of each actual outcome's matches (row-normalized)
    so rare draws stay readable; cells are annotated with share and count.
    """
    plots_dir.mkdir(parents=True, exist_ok=True)
    out_path = plots_dir / "confusion_matrix.png"
    shares = outcome_shares(cm)
    ticks = np.arange(len(CLASS_LABELS))

    fig, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(shares, vmin=0.0, vmax=1.0, cmap="Blues")
    fig.colorbar(im, ax=ax, label="Share of actual outcome")
    ax.set(
        xticks=ticks,
        yticks=ticks,
        xticklabels=CLASS_LABELS,
        yticklabels=CLASS_LABELS,
        xlabel="Most likely predicted outcome",
        ylabel="Actual outcome",
        title="Outcome Confusion Matrix",
    )

    for (i, j), share in np.ndenumerate(shares):
        ax.text(
            j,
            i,
            f"{share:.0%}\n({int(cm[i, j])})",
            ha="center",
            va="center",
            color="white" if share > 0.5 else "black",
        )

    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    logger.info("Saved confusion matrix plot to %s", out_path)
    return out_path


def _plot_calibration(
    y_true: np.ndarray,
    y_proba: np.ndarray,
    plots_dir: Path,
    n_bins: int = 10,
) -> Path:
    """Plot predicted home-win probability against the observed frequency."""
    plots_dir.mkdir(parents=True, exist_ok=True)
    out_path = plots_dir / "home_win_calibration.png"

    p_home = y_proba[:, 0]
    observed = (y_true == 0).astype(float)
    bins = np.linspace(0.0, 1.0, n_bins + 1)
    idx = np.clip(np.digitize(p_home, bins) - 1, 0, n_bins - 1)

    xs, ys = [], []
    for b in range(n_bins):
        mask = idx == b
        if mask.any():
            xs.append(p_home[mask].mean())
            ys.append(observed[mask].mean())

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot([0, 1], [0, 1], linestyle="--", color="grey")
    ax.plot(xs, ys, marker="o")
    ax.set_xlabel("Predicted home-win probability")
    ax.set_ylabel("Observed home-win frequency")
    ax.set_title("Home Win Calibration")

    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    logger.info("Saved calibration plot to %s", out_path)
    return out_path


def run_evaluation(
    predictions_path: Optional[Path | str] = None,
    results_path: Optional[Path | str] = None,
    plots_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Main evaluation routine."""
    df_predictions = load_predictions(predictions_path)
    df_results = load_results(results_path)

    y_true, y_proba = join_predictions_with_results(df_predictions, df_results)
    metrics = compute_prediction_metrics(y_true, y_proba, labels=CLASS_LABELS)
    logger.info("Evaluation metrics: %s", metrics)

    plots_dir = plots_dir if plots_dir is not None else PLOTS_DIR
    _plot_confusion_matrix(np.array(metrics["confusion_matrix"], dtype=int), plots_dir)
    _plot_calibration(y_true, y_proba, plots_dir)
    return metrics


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Evaluate stored GoalCast predictions against results."
    )
    parser.add_argument("--predictions", type=str, default=None)
    parser.add_argument("--results", type=str, default=None)
    args = parser.parse_args()
    metrics = run_evaluation(args.predictions, args.results)

    # Print a concise summary to stdout as well
    print("Evaluation metrics:")
    for k in ("accuracy", "log_loss", "brier_score", "baseline_accuracy"):
        print(f"  {k}: {metrics[k]:.4f}")


if __name__ == "__main__":
    main()
