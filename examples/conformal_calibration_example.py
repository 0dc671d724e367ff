"""Example: Split-Conformal Calibration.

This example calibrates a conformal threshold on absolute residuals of a
noisy regressor, attaches prediction intervals to new predictions, and
checks the coverage guarantee empirically.
"""

import numpy as np

from judgekit import CalibrationSet, coverage_curve, describe, simulate_coverage


def main():
    """Run conformal calibration examples."""

    print("=" * 80)
    print("SPLIT-CONFORMAL CALIBRATION")
    print("=" * 80)

    rng = np.random.default_rng(42)

    # ========== Example 1: Threshold from residuals ==========
    print("\n" + "=" * 60)
    print("Example 1: Calibration on n=200 absolute residuals")
    print("=" * 60)

    y_true = rng.normal(size=400) * 3.0
    y_pred = y_true + rng.normal(scale=1.5, size=400)
    residuals = np.abs(y_true - y_pred)

    cal = CalibrationSet(residuals[:200])
    summary = describe(residuals[:200])

    print("\nCalibration residuals:")
    print(f"  n:       {summary.count}")
    print(f"  mean:    {summary.mean:.4f}")
    print(f"  std:     {summary.stddev_sample:.4f}")

    for alpha in [0.05, 0.10, 0.20]:
        print(f"  α={alpha:.2f}: rank={cal.quantile_rank(alpha):3d}, threshold={cal.quantile(alpha):.4f}")

    # ========== Example 2: Prediction intervals ==========
    print("\n" + "=" * 60)
    print("Example 2: 90% prediction intervals on held-out points")
    print("=" * 60)

    covered = 0
    for yt, yp in zip(y_true[200:], y_pred[200:], strict=False):
        low, high = cal.prediction_interval(yp, alpha=0.10)
        covered += low <= yt <= high
    print(f"\n  Held-out coverage: {covered / 200:.3f} (target ≥ 0.900)")

    # ========== Example 3: Coverage curve ==========
    print("\n" + "=" * 60)
    print("Example 3: Coverage across α")
    print("=" * 60)

    curve = coverage_curve(cal, residuals[200:], [0.05, 0.10, 0.20, 0.30])
    for alpha, cov in zip(curve["alphas"], curve["coverage"], strict=False):
        print(f"  α={alpha:.2f}: coverage={cov:.3f}, target={1 - alpha:.3f}")

    # ========== Example 4: Monte-Carlo check ==========
    print("\n" + "=" * 60)
    print("Example 4: Simulated coverage (n=50, α=0.10, 1000 trials)")
    print("=" * 60)

    sim = simulate_coverage(n_calibration=50, alpha=0.10, n_trials=1000, n_test=20, seed=0, n_jobs=-1)
    print(f"\n  Mean coverage: {sim.mean_coverage:.4f}")
    print(f"  Target:        {sim.target_coverage:.4f}")
    print(f"  Upper bound:   {sim.target_coverage + 1 / (sim.n_calibration + 1):.4f}")


if __name__ == "__main__":
    main()
