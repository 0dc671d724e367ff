"""Chi-squared goodness-of-fit statistic.

Only the statistic is computed; converting it to a p-value is left to the
caller.
"""

import logging
from collections.abc import Sequence

import numpy as np

from .exceptions import ShapeMismatchError

__all__ = [
    "chi_squared",
    "degrees_of_freedom",
]

logger = logging.getLogger(__name__)


def _as_table(values: Sequence[float] | np.ndarray) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"frequency table must be 1D, got shape {arr.shape}")
    return arr


def chi_squared(observed: Sequence[float] | np.ndarray, expected: Sequence[float] | np.ndarray) -> float:
    """Pearson chi-squared statistic ``sum((o - e)^2 / e)``.

    Parameters
    ----------
    observed : array-like of float
        Observed frequencies per category
    expected : array-like of float
        Expected frequencies, positionally aligned with ``observed``

    Returns
    -------
    float
        The statistic (0.0 for empty tables)

    Raises
    ------
    ShapeMismatchError
        If the two tables have different lengths.

    Notes
    -----
    Categories with ``e == 0`` contribute 0 instead of dividing by zero. The
    textbook statistic is undefined for such cells; skipping them keeps the
    result finite for empty expected categories, at the cost of ignoring any
    observations that landed there.
    """
    obs = _as_table(observed)
    exp = _as_table(expected)
    if obs.shape != exp.shape:
        raise ShapeMismatchError(obs.size, exp.size)

    nonzero = exp != 0.0
    n_skipped = int(obs.size - np.count_nonzero(nonzero))
    if n_skipped:
        logger.debug("chi_squared: skipping %d zero-expectation categories", n_skipped)

    o = obs[nonzero]
    e = exp[nonzero]
    return float(np.sum((o - e) ** 2 / e))


def degrees_of_freedom(expected: Sequence[float] | np.ndarray) -> int:
    """Goodness-of-fit degrees of freedom for ``expected``.

    Counts only categories that contribute to :func:`chi_squared`, minus one,
    floored at zero.
    """
    exp = _as_table(expected)
    return max(int(np.count_nonzero(exp)) - 1, 0)
