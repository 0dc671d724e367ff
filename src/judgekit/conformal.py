"""Split-conformal calibration.

A :class:`CalibrationSet` holds the sorted non-conformity scores of a
held-out calibration sample and turns a significance level alpha into a
threshold. For exchangeable calibration and test scores the threshold
satisfies the finite-sample marginal guarantee

    P(test_score <= quantile(alpha)) >= 1 - alpha.

The guarantee depends on the (n + 1) correction and on rounding the rank
up, so the index arithmetic below must not be "simplified".
"""

import logging
import math
from collections.abc import Iterable

import numpy as np

from .exceptions import EmptyInputError, InvalidSignificanceLevelError

__all__ = [
    "CalibrationSet",
    "check_alpha",
]

logger = logging.getLogger(__name__)


def check_alpha(alpha: float) -> float:
    """Validate a significance level, returning it as ``float``.

    Raises
    ------
    InvalidSignificanceLevelError
        If ``alpha`` is not strictly between 0 and 1 (NaN included).
    """
    alpha = float(alpha)
    if not (0.0 < alpha < 1.0):
        raise InvalidSignificanceLevelError(alpha)
    return alpha


class CalibrationSet:
    """Sorted non-conformity scores with conformal quantile lookup.

    Parameters
    ----------
    scores : array-like of float
        Non-conformity scores of the calibration sample. The measure itself
        is up to the caller (e.g. ``1 - p(true class)`` or an absolute
        residual); larger means less conforming.

    Raises
    ------
    EmptyInputError
        If no scores are given.
    ValueError
        If scores are not one-dimensional or contain NaN.

    Examples
    --------
    >>> cal = CalibrationSet([0.3, 0.1, 0.2, 0.5, 0.4])
    >>> cal.quantile(0.2)
    0.5
    """

    __slots__ = ("_scores",)

    def __init__(self, scores: Iterable[float]):
        arr = np.array(scores if isinstance(scores, np.ndarray) else list(scores), dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError(f"scores must be 1D, got shape {arr.shape}")
        if arr.size == 0:
            raise EmptyInputError("calibration set requires at least one score")
        if np.isnan(arr).any():
            raise ValueError("scores must not contain NaN")

        arr.sort()
        arr.flags.writeable = False
        self._scores = arr

    @property
    def scores(self) -> np.ndarray:
        """Ascending, read-only view of the calibration scores."""
        return self._scores

    @property
    def n(self) -> int:
        return int(self._scores.size)

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n}, min={self._scores[0]!r}, max={self._scores[-1]!r})"

    def quantile_rank(self, alpha: float) -> int:
        """1-indexed order-statistic rank ``ceil((n + 1) * (1 - alpha))``.

        The rank is returned unclamped; it exceeds ``n`` when alpha is too
        small for the calibration size to certify (alpha < 1 / (n + 1)).
        """
        alpha = check_alpha(alpha)
        # Round off float noise first: 10 * (1 - 0.7) is 3.0000000000000004, not 3
        return math.ceil(round((self.n + 1) * (1.0 - alpha), 9))

    def quantile(self, alpha: float) -> float:
        """Conformal threshold for significance level ``alpha``.

        Parameters
        ----------
        alpha : float
            Target miscoverage rate in (0, 1)

        Returns
        -------
        float
            The score at 1-indexed rank ``k = ceil((n + 1) * (1 - alpha))``,
            clamped to the largest score when ``k > n``

        Raises
        ------
        InvalidSignificanceLevelError
            If alpha is outside (0, 1).

        Notes
        -----
        When ``k > n`` the clamp returns the maximum calibration score. The
        marginal guarantee then no longer strictly holds; a calibration set
        of size ``n`` can only certify ``alpha >= 1 / (n + 1)``.
        """
        k = self.quantile_rank(alpha)
        index = min(k, self.n) - 1
        threshold = float(self._scores[index])
        logger.debug("conformal quantile: n=%d alpha=%r rank=%d threshold=%r", self.n, alpha, k, threshold)
        return threshold

    def contains(self, score: float, alpha: float) -> bool:
        """Whether a test score falls inside the conformal set at level ``alpha``."""
        return bool(float(score) <= self.quantile(alpha))

    def prediction_interval(self, prediction: float, alpha: float) -> tuple[float, float]:
        """Symmetric interval ``(prediction - q, prediction + q)``.

        Valid when the scores are absolute residuals ``|y - y_hat|``.

        Raises
        ------
        ValueError
            If the threshold is negative, i.e. the scores are not absolute
            residuals.
        """
        q = self.quantile(alpha)
        if q < 0:
            raise ValueError(f"prediction intervals need non-negative scores, threshold is {q!r}")
        prediction = float(prediction)
        return (prediction - q, prediction + q)
