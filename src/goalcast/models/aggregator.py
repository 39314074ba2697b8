"""
Reduce a score matrix to the home/draw/away outcome distribution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np

from goalcast.config import CLASS_LABELS
from goalcast.errors import InvalidParameterError, NormalizationError


@dataclass(frozen=True)
class OutcomeDistribution:
    """Normalized probabilities of a home win, a draw and an away win."""

    p_home: float
    p_draw: float
    p_away: float

    def as_dict(self) -> Dict[str, float]:
        return {"p_home": self.p_home, "p_draw": self.p_draw, "p_away": self.p_away}

    def as_array(self) -> np.ndarray:
        """Probabilities ordered like ``CLASS_LABELS``."""
        return np.array([self.p_home, self.p_draw, self.p_away], dtype=float)

    @property
    def most_likely(self) -> str:
        return CLASS_LABELS[int(np.argmax(self.as_array()))]


def aggregate(matrix: np.ndarray) -> OutcomeDistribution:
    """
    Sum a score matrix into outcome probabilities and normalize them.

    Cells below the diagonal (home goals > away goals) are home wins, the
    diagonal holds draws and cells above it are away wins. The three sums are
    divided by their total, which absorbs the truncation loss and the mass
    drift introduced by the correlation correction.

    Parameters
    ----------
    matrix : np.ndarray
        Square matrix of joint scoreline probabilities, rows = home goals.

    Returns
    -------
    OutcomeDistribution
        Probabilities summing to one.

    Raises
    ------
    InvalidParameterError
        If the matrix is not square or holds negative cells.
    NormalizationError
        If the total mass is zero or not finite.
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.size == 0:
        raise InvalidParameterError(
            f"Score matrix must be a non-empty square 2D array, got shape {matrix.shape}"
        )
    if (matrix < 0).any():
        raise InvalidParameterError("Score matrix contains negative probabilities.")

    p_home = float(np.tril(matrix, k=-1).sum())
    p_draw = float(np.trace(matrix))
    p_away = float(np.triu(matrix, k=1).sum())

    total = p_home + p_draw + p_away
    if not math.isfinite(total) or total <= 0:
        raise NormalizationError(
            f"Cannot normalize score matrix with total mass {total!r}; "
            "the expected goal rates are outside the range the model can evaluate."
        )

    return OutcomeDistribution(
        p_home=p_home / total,
        p_draw=p_draw / total,
        p_away=p_away / total,
    )
