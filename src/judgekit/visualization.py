"""Plots for conformal calibration diagnostics."""

import numpy as np

__all__ = [
    "plot_coverage_curve",
]


def plot_coverage_curve(curve: dict, ax=None):
    """Plot empirical coverage against the nominal ``1 - alpha``.

    Parameters
    ----------
    curve : dict
        Output of :func:`judgekit.validation.coverage_curve`
    ax : matplotlib axes, optional
        Axes to plot on. If None, creates new figure.

    Returns
    -------
    ax : matplotlib axes
        The axes object with the plot
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    target = np.asarray(curve["target_coverage"])
    coverage = np.asarray(curve["coverage"])
    order = np.argsort(target)

    ax.plot(
        target[order],
        coverage[order],
        marker="o",
        linewidth=2,
        label="Empirical coverage",
    )

    # Guarantee holds on or above the diagonal
    finite = coverage[np.isfinite(coverage)]
    lo = float(min(target.min(), finite.min())) if finite.size else float(target.min())
    ax.plot([lo, 1.0], [lo, 1.0], color="green", linestyle=":", linewidth=2, label="Target: 1 - α")

    ax.set_xlabel("Target Coverage (1 - α)")
    ax.set_ylabel("Empirical Coverage")
    ax.set_title("Conformal Coverage Calibration")
    ax.legend()
    ax.grid(True, alpha=0.3)

    return ax
