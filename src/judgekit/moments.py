"""One-pass moment estimation (mean, variance, standard deviation).

All estimators are computed with Welford's algorithm. The textbook
``E[x^2] - E[x]^2`` shortcut is never used: it cancels catastrophically when
the samples share a large common offset (e.g. values near 1e16 that differ
in the last few digits).

Insufficient data is reported as ``None`` rather than ``nan`` so that
"no result" stays distinguishable from a computed zero.

Non-finite input is not rejected. Any ``inf`` or ``nan`` in the sample may
turn every estimate into ``nan``: the running update subtracts the running
mean, so e.g. ``mean([inf, 1.0])`` is ``nan`` rather than ``inf``.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "MomentAccumulator",
    "MomentSummary",
    "mean",
    "variance_population",
    "variance_sample",
    "stddev_population",
    "stddev_sample",
    "describe",
]

logger = logging.getLogger(__name__)


@dataclass
class MomentAccumulator:
    """Running Welford state.

    Attributes
    ----------
    count : int
        Number of samples seen so far
    mean : float
        Running arithmetic mean (0.0 while empty)
    m2 : float
        Running sum of squared deviations from the running mean
    """

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    def update(self, x: float) -> None:
        """Fold a single value into the running moments.

        A non-finite ``x`` poisons the state; later estimates may be ``nan``.
        """
        x = float(x)
        self.count += 1
        delta = x - self.mean
        self.mean += delta / self.count
        delta2 = x - self.mean
        self.m2 += delta * delta2

    def extend(self, xs: Iterable[float]) -> "MomentAccumulator":
        """Fold every value of ``xs`` in order. Returns ``self`` for chaining."""
        for x in xs:
            self.update(x)
        return self

    def merge(self, other: "MomentAccumulator") -> "MomentAccumulator":
        """Combine two partial accumulators into a new one.

        Uses the pairwise update of Chan, Golub and LeVeque, so moments of
        independently accumulated chunks can be combined without revisiting
        the data.

        Parameters
        ----------
        other : MomentAccumulator
            Accumulator over a disjoint chunk of the same sample

        Returns
        -------
        MomentAccumulator
            Accumulator equivalent to a single pass over both chunks
        """
        if other.count == 0:
            return MomentAccumulator(self.count, self.mean, self.m2)
        if self.count == 0:
            return MomentAccumulator(other.count, other.mean, other.m2)

        n = self.count + other.count
        delta = other.mean - self.mean
        merged_mean = self.mean + delta * other.count / n
        merged_m2 = self.m2 + other.m2 + delta * delta * self.count * other.count / n
        return MomentAccumulator(n, merged_mean, merged_m2)

    @property
    def mean_or_none(self) -> float | None:
        return self.mean if self.count > 0 else None

    @property
    def variance_population(self) -> float | None:
        if self.count < 1:
            return None
        # Rounding can leave m2 a hair below zero
        return max(self.m2 / self.count, 0.0)

    @property
    def variance_sample(self) -> float | None:
        if self.count < 2:
            return None
        return max(self.m2 / (self.count - 1), 0.0)

    @property
    def stddev_population(self) -> float | None:
        var = self.variance_population
        return None if var is None else math.sqrt(var)

    @property
    def stddev_sample(self) -> float | None:
        var = self.variance_sample
        return None if var is None else math.sqrt(var)


@dataclass(frozen=True)
class MomentSummary:
    """All moment estimates of a sample, ``None`` where undefined."""

    count: int
    mean: float | None
    variance_population: float | None
    variance_sample: float | None
    stddev_population: float | None
    stddev_sample: float | None


def _accumulate(xs: Iterable[float]) -> MomentAccumulator:
    return MomentAccumulator().extend(xs)


def mean(xs: Iterable[float]) -> float | None:
    """Arithmetic mean of ``xs``, or ``None`` if ``xs`` is empty."""
    return _accumulate(xs).mean_or_none


def variance_population(xs: Iterable[float]) -> float | None:
    """Population variance (divide by ``n``). ``None`` if ``xs`` is empty."""
    return _accumulate(xs).variance_population


def variance_sample(xs: Iterable[float]) -> float | None:
    """Bessel-corrected sample variance (divide by ``n - 1``).

    Returns ``None`` when fewer than two values are given.
    """
    return _accumulate(xs).variance_sample


def stddev_population(xs: Iterable[float]) -> float | None:
    """Population standard deviation. ``None`` if ``xs`` is empty."""
    return _accumulate(xs).stddev_population


def stddev_sample(xs: Iterable[float]) -> float | None:
    """Sample standard deviation. ``None`` when fewer than two values are given."""
    return _accumulate(xs).stddev_sample


def describe(xs: Iterable[float]) -> MomentSummary:
    """Compute every moment estimate from a single pass over ``xs``.

    Parameters
    ----------
    xs : iterable of float
        Sample values; consumed once, in order

    Returns
    -------
    MomentSummary
        Count, mean, population/sample variance and standard deviation

    Examples
    --------
    >>> summary = describe([1.0, 2.0, 3.0, 4.0])
    >>> summary.mean, summary.variance_population
    (2.5, 1.25)
    """
    acc = _accumulate(xs)
    logger.debug("described sample: count=%d mean=%r m2=%r", acc.count, acc.mean, acc.m2)
    return MomentSummary(
        count=acc.count,
        mean=acc.mean_or_none,
        variance_population=acc.variance_population,
        variance_sample=acc.variance_sample,
        stddev_population=acc.stddev_population,
        stddev_sample=acc.stddev_sample,
    )
