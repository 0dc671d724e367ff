"""Top-level package for judgekit (distribution-free statistical judgments)."""

import logging
from importlib.metadata import version

__version__ = version("judgekit")  # Read from package metadata (pyproject.toml)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Conformal calibration
from .conformal import (
    CalibrationSet,
)

# Embedding drift
from .drift import (
    mean_drift,
    mean_vector,
)

# Errors
from .exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidSignificanceLevelError,
    JudgeError,
    ShapeMismatchError,
)

# Moments
from .moments import (
    MomentAccumulator,
    MomentSummary,
    describe,
    mean,
    stddev_population,
    stddev_sample,
    variance_population,
    variance_sample,
)

# Significance
from .significance import (
    chi_squared,
    degrees_of_freedom,
)

# Coverage validation
from .validation import (
    CoverageSimulationResult,
    coverage_curve,
    empirical_coverage,
    simulate_coverage,
)

# Visualization
from .visualization import (
    plot_coverage_curve,
)

__all__ = [
    # Moments
    "MomentAccumulator",
    "MomentSummary",
    "describe",
    "mean",
    "stddev_population",
    "stddev_sample",
    "variance_population",
    "variance_sample",
    # Conformal
    "CalibrationSet",
    # Significance
    "chi_squared",
    "degrees_of_freedom",
    # Drift
    "mean_drift",
    "mean_vector",
    # Validation
    "CoverageSimulationResult",
    "coverage_curve",
    "empirical_coverage",
    "simulate_coverage",
    # Visualization
    "plot_coverage_curve",
    # Errors
    "JudgeError",
    "EmptyInputError",
    "InvalidSignificanceLevelError",
    "ShapeMismatchError",
    "DimensionMismatchError",
]
