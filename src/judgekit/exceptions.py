"""Error taxonomy for judgekit.

All errors derive from ``ValueError`` so that callers who already guard
statistics calls with ``except ValueError`` keep working.
"""

__all__ = [
    "JudgeError",
    "EmptyInputError",
    "InvalidSignificanceLevelError",
    "ShapeMismatchError",
    "DimensionMismatchError",
]


class JudgeError(ValueError):
    """Base class for all judgekit precondition failures."""


class EmptyInputError(JudgeError):
    """A statistic was requested on a collection with no samples."""


class InvalidSignificanceLevelError(JudgeError):
    """Significance level alpha lies outside the open interval (0, 1)."""

    def __init__(self, alpha: float):
        self.alpha = alpha
        super().__init__(f"alpha must be in (0,1), got {alpha!r}")


class ShapeMismatchError(JudgeError):
    """Observed and expected frequency tables are not positionally aligned."""

    def __init__(self, n_observed: int, n_expected: int):
        self.n_observed = n_observed
        self.n_expected = n_expected
        super().__init__(f"observed has {n_observed} categories but expected has {n_expected}")


class DimensionMismatchError(JudgeError):
    """Vectors that should share a dimensionality do not."""
