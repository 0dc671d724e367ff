"""Tests for significance module."""

import numpy as np
import pytest
from scipy import stats

from judgekit import ShapeMismatchError, chi_squared, degrees_of_freedom


class TestChiSquared:
    """Test chi_squared function."""

    def test_perfect_fit_is_zero(self):
        """Test identical observed and expected tables."""
        assert chi_squared([10.0, 20.0], [10.0, 20.0]) == 0.0

    def test_known_value(self):
        """Test a hand-computed statistic."""
        # (12-10)^2/10 + (18-20)^2/20 = 0.4 + 0.2
        np.testing.assert_allclose(chi_squared([12.0, 18.0], [10.0, 20.0]), 0.6, rtol=1e-12)

    def test_zero_expected_cell_is_skipped(self):
        """Test that zero-expectation categories contribute nothing."""
        # Only the second cell counts: (0 - 10)^2 / 10 = 10
        result = chi_squared([10.0, 0.0], [0.0, 10.0])

        assert result == 10.0
        assert np.isfinite(result)

    def test_all_expected_zero(self):
        """Test that an all-zero expected table gives zero rather than NaN."""
        assert chi_squared([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0

    def test_empty_tables(self):
        """Test that empty tables give a zero statistic."""
        assert chi_squared([], []) == 0.0

    def test_matches_scipy(self):
        """Test agreement with scipy when no expected cell is zero."""
        observed = np.array([18.0, 22.0, 31.0, 29.0])
        expected = np.array([25.0, 25.0, 25.0, 25.0])

        reference = stats.chisquare(observed, expected).statistic

        np.testing.assert_allclose(chi_squared(observed, expected), reference, rtol=1e-12)

    def test_accepts_integer_counts(self):
        """Test that integer frequency tables are accepted."""
        assert chi_squared([5, 5], [5, 5]) == 0.0

    def test_returns_python_float(self):
        """Test return type."""
        assert isinstance(chi_squared([1.0, 2.0], [2.0, 1.0]), float)

    def test_length_mismatch_raises(self):
        """Test that misaligned tables are rejected."""
        with pytest.raises(ShapeMismatchError) as excinfo:
            chi_squared([1.0, 2.0, 3.0], [1.0, 2.0])

        assert excinfo.value.n_observed == 3
        assert excinfo.value.n_expected == 2

    def test_non_1d_raises(self):
        """Test that contingency matrices are rejected."""
        with pytest.raises(ValueError, match="1D"):
            chi_squared(np.ones((2, 2)), np.ones((2, 2)))


class TestDegreesOfFreedom:
    """Test degrees_of_freedom function."""

    def test_counts_nonzero_categories(self):
        """Test that only contributing categories are counted."""
        assert degrees_of_freedom([10.0, 20.0, 30.0]) == 2
        assert degrees_of_freedom([10.0, 0.0, 30.0]) == 1

    def test_floored_at_zero(self):
        """Test degenerate tables."""
        assert degrees_of_freedom([]) == 0
        assert degrees_of_freedom([0.0, 0.0]) == 0
        assert degrees_of_freedom([5.0]) == 0
