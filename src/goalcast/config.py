"""
Global configuration for the GoalCast project.

This module centralizes model defaults, rating guardrails and paths so you can
tweak them in one place. The estimator weights, floors, clamps and
home-advantage steps are empirical guardrails against small-sample noise, not
fitted constants: treat them as tunable policy.
"""

import os
from pathlib import Path

# Project root = folder that contains "src", "data", "plots", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Logging
LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_LEVEL: str = os.environ.get("GOALCAST_LOG_LEVEL", "INFO").upper()

# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DATA_DIR: Path = DATA_DIR / "raw"
PROCESSED_DATA_DIR: Path = DATA_DIR / "processed"

# Default input / output tables for the batch pipeline
FIXTURES_FILENAME: str = "fixtures.csv"
STANDINGS_FILENAME: str = "standings.csv"
RESULTS_FILENAME: str = "results.csv"
PREDICTIONS_FILENAME: str = "predictions.csv"

# Plot output directory (for evaluation)
PLOTS_DIR: Path = PROJECT_ROOT / "plots"

# Tag written next to every stored prediction
MODEL_VERSION: str = "dc-v1"

# ---------------------------------------------------------------------------
# Goal model defaults
# ---------------------------------------------------------------------------
DEFAULT_HOME_ADVANTAGE: float = 1.35
DEFAULT_LEAGUE_AVERAGE: float = 1.4
DEFAULT_RHO: float = 0.1
DEFAULT_MAX_GOALS: int = 6

# Upper bound for max_goals; also the size of the factorial table.
MAX_GOALS_LIMIT: int = 25

# ---------------------------------------------------------------------------
# Rating estimator
# ---------------------------------------------------------------------------
RECENT_FORM_WEIGHT: float = 0.40
SEASON_WEIGHT: float = 0.35
VENUE_WEIGHT: float = 0.25

# A team is never modeled as scoring (or conceding) less than this.
RATING_FLOOR: float = 0.5

# Bounds applied by callers before ratings reach the goal model.
RATING_CLAMP_MIN: float = 0.6
RATING_CLAMP_MAX: float = 2.5

# Home advantage policy
HOME_ADVANTAGE_BASE: float = 1.35
HOME_ADVANTAGE_MIN: float = 1.0
HOME_ADVANTAGE_MAX: float = 1.8
STRONG_HOME_WIN_RATE: float = 0.6
WEAK_HOME_WIN_RATE: float = 0.3
WIN_RATE_STEP: float = 0.15
DOMINANT_HOME_GOAL_DIFF: float = 1.0
POOR_HOME_GOAL_DIFF: float = -0.5
GOAL_DIFF_STEP: float = 0.10

# ---------------------------------------------------------------------------
# Form layer
# ---------------------------------------------------------------------------
RECENT_FORM_WINDOW: int = 5  # number of previous matches to consider for form

# Per-game rate assumed for a team with no recent matches.
DEFAULT_FORM_RATE: float = 1.0

# Lower bound on league / per-game averages used as divisors.
MIN_AVERAGE_DIVISOR: float = 0.1

# The league baseline handed to the goal model never drops below this.
MIN_LEAGUE_AVERAGE: float = 1.0

# Outcome labels, from the home team's perspective
CLASS_LABELS = ["home_win", "draw", "away_win"]
