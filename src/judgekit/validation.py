"""Empirical checks of the conformal coverage guarantee.

These helpers measure how often held-out scores fall under a
:class:`~judgekit.conformal.CalibrationSet` threshold, either on data the
caller already has (:func:`empirical_coverage`, :func:`coverage_curve`) or on
repeated synthetic draws (:func:`simulate_coverage`).
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from joblib import Parallel, delayed

from .conformal import CalibrationSet, check_alpha

__all__ = [
    "CoverageSimulationResult",
    "coverage_curve",
    "empirical_coverage",
    "simulate_coverage",
]

logger = logging.getLogger(__name__)

Sampler = Callable[[np.random.Generator, int], np.ndarray]


@dataclass(frozen=True)
class CoverageSimulationResult:
    """Outcome of repeated calibrate-then-test trials.

    Attributes
    ----------
    alpha : float
        Significance level used for every trial
    n_calibration : int
        Calibration set size per trial
    n_test : int
        Number of test scores per trial
    n_trials : int
        Number of independent trials
    coverages : np.ndarray
        Fraction of test scores covered in each trial
    mean_coverage : float
        Average of ``coverages``
    target_coverage : float
        Nominal coverage ``1 - alpha``
    """

    alpha: float
    n_calibration: int
    n_test: int
    n_trials: int
    coverages: np.ndarray
    mean_coverage: float
    target_coverage: float


def _abs_normal(rng: np.random.Generator, size: int) -> np.ndarray:
    return np.abs(rng.standard_normal(size))


def _safe_parallel_map(n_jobs: int, func, iterable):
    """Run jobs through joblib, falling back to in-process execution.

    Process-based backends can be unavailable in sandboxes (e.g. loky fails
    with PermissionError); in that case the jobs are re-run serially.
    """
    jobs = list(iterable)
    try:
        return Parallel(n_jobs=n_jobs)(delayed(func)(*args) for args in jobs)
    except (OSError, NotImplementedError) as exc:
        logger.warning("parallel execution unavailable (%s), running %d jobs serially", exc, len(jobs))
        return [func(*args) for args in jobs]


def empirical_coverage(
    calibration_scores: Iterable[float],
    test_scores: Sequence[float] | np.ndarray,
    alpha: float,
) -> dict:
    """Fraction of test scores covered by the conformal threshold.

    Parameters
    ----------
    calibration_scores : array-like of float
        Non-conformity scores used to build the calibration set
    test_scores : array-like of float
        Held-out non-conformity scores
    alpha : float
        Target miscoverage rate in (0, 1)

    Returns
    -------
    dict
        Keys ``threshold``, ``coverage``, ``target_coverage``,
        ``n_calibration``, ``n_test``, ``n_covered``. ``coverage`` is NaN
        when ``test_scores`` is empty.
    """
    alpha = check_alpha(alpha)
    cal = calibration_scores if isinstance(calibration_scores, CalibrationSet) else CalibrationSet(calibration_scores)
    test = np.asarray(test_scores, dtype=np.float64).ravel()

    threshold = cal.quantile(alpha)
    n_covered = int(np.sum(test <= threshold))
    n_test = int(test.size)

    return {
        "threshold": threshold,
        "coverage": n_covered / n_test if n_test > 0 else float("nan"),
        "target_coverage": 1.0 - alpha,
        "n_calibration": cal.n,
        "n_test": n_test,
        "n_covered": n_covered,
    }


def coverage_curve(
    calibration_scores: Iterable[float],
    test_scores: Sequence[float] | np.ndarray,
    alphas: Sequence[float] | np.ndarray,
) -> dict[str, np.ndarray]:
    """Empirical coverage across a grid of significance levels.

    Returns
    -------
    dict
        Arrays ``alphas``, ``thresholds``, ``coverage`` and
        ``target_coverage``, aligned by position.
    """
    cal = calibration_scores if isinstance(calibration_scores, CalibrationSet) else CalibrationSet(calibration_scores)
    alpha_values = np.asarray(alphas, dtype=np.float64).ravel()

    thresholds = []
    coverage = []
    for alpha in alpha_values:
        result = empirical_coverage(cal, test_scores, alpha)
        thresholds.append(result["threshold"])
        coverage.append(result["coverage"])

    return {
        "alphas": alpha_values,
        "thresholds": np.array(thresholds),
        "coverage": np.array(coverage),
        "target_coverage": 1.0 - alpha_values,
    }


def _run_trial(trial_seed: int, n_calibration: int, n_test: int, alpha: float, sampler: Sampler) -> float:
    rng = np.random.default_rng(trial_seed)
    cal_scores = sampler(rng, n_calibration)
    test_scores = sampler(rng, n_test)
    return empirical_coverage(cal_scores, test_scores, alpha)["coverage"]


def simulate_coverage(
    n_calibration: int,
    alpha: float,
    n_trials: int = 1000,
    n_test: int = 1,
    sampler: Sampler | None = None,
    seed: int | None = None,
    n_jobs: int = 1,
) -> CoverageSimulationResult:
    """Monte-Carlo estimate of conformal coverage under exchangeability.

    Each trial draws ``n_calibration`` calibration scores and ``n_test`` test
    scores i.i.d. from ``sampler``, calibrates, and records the covered
    fraction. Averaged over trials the coverage should be at least
    ``1 - alpha`` (and at most ``1 - alpha + 1 / (n_calibration + 1)`` for
    continuous scores).

    Parameters
    ----------
    n_calibration : int
        Calibration set size per trial (>= 1)
    alpha : float
        Target miscoverage rate in (0, 1)
    n_trials : int, default=1000
        Number of independent trials
    n_test : int, default=1
        Test scores per trial
    sampler : callable, optional
        ``sampler(rng, size) -> np.ndarray`` drawing non-conformity scores.
        Defaults to absolute standard-normal residuals.
    seed : int, optional
        Base seed; trial ``i`` is seeded from ``(seed, i)`` so results do not
        depend on ``n_jobs``
    n_jobs : int, default=1
        Number of parallel jobs (-1 = all cores)

    Returns
    -------
    CoverageSimulationResult
    """
    alpha = check_alpha(alpha)
    if n_calibration < 1:
        raise ValueError(f"n_calibration must be >= 1, got {n_calibration}")
    if n_trials < 1:
        raise ValueError(f"n_trials must be >= 1, got {n_trials}")
    if n_test < 1:
        raise ValueError(f"n_test must be >= 1, got {n_test}")
    if sampler is None:
        sampler = _abs_normal

    seed_seq = np.random.SeedSequence(seed)
    trial_seeds = [int(s.generate_state(1)[0]) for s in seed_seq.spawn(n_trials)]

    logger.debug(
        "simulating coverage: n_calibration=%d n_test=%d alpha=%r n_trials=%d n_jobs=%d",
        n_calibration,
        n_test,
        alpha,
        n_trials,
        n_jobs,
    )
    coverages = _safe_parallel_map(
        n_jobs,
        _run_trial,
        ((s, n_calibration, n_test, alpha, sampler) for s in trial_seeds),
    )
    coverages_arr = np.asarray(coverages, dtype=np.float64)

    return CoverageSimulationResult(
        alpha=alpha,
        n_calibration=n_calibration,
        n_test=n_test,
        n_trials=n_trials,
        coverages=coverages_arr,
        mean_coverage=float(coverages_arr.mean()),
        target_coverage=1.0 - alpha,
    )
