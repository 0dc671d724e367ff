"""Example: Embedding Drift and Chi-Squared Goodness of Fit.

Compares a reference window of embeddings against a drifted window and
checks a categorical distribution against its expected frequencies.
"""

import numpy as np

from judgekit import chi_squared, degrees_of_freedom, mean_drift


def main():
    """Run drift and significance examples."""

    print("=" * 80)
    print("EMBEDDING DRIFT & CHI-SQUARED")
    print("=" * 80)

    rng = np.random.default_rng(7)
    reference = rng.normal(size=(500, 32)).astype(np.float32)

    print("\nMean drift against reference window (32-dim):")
    for shift in [0.0, 0.05, 0.1, 0.25]:
        current = (rng.normal(size=(500, 32)) + shift).astype(np.float32)
        print(f"  shift={shift:.2f}: drift={mean_drift(reference, current):.4f}")
    print(f"  empty window: drift={mean_drift(reference, []):.4f}")

    observed = [48.0, 35.0, 17.0, 0.0]
    expected = [50.0, 30.0, 20.0, 0.0]
    print("\nChi-squared goodness of fit:")
    print(f"  observed: {observed}")
    print(f"  expected: {expected}")
    print(f"  χ²:       {chi_squared(observed, expected):.4f}")
    print(f"  dof:      {degrees_of_freedom(expected)}")


if __name__ == "__main__":
    main()
