"""Tests for drift module."""

import numpy as np
import pytest

from judgekit import DimensionMismatchError, EmptyInputError, mean_drift, mean_vector


@pytest.fixture
def embedding_windows():
    """Two windows of 16-dim embeddings, the second shifted along every axis."""
    rng = np.random.default_rng(42)
    reference = rng.normal(size=(200, 16)).astype(np.float32)
    current = (rng.normal(size=(150, 16)) + 0.5).astype(np.float32)
    return reference, current


class TestMeanDrift:
    """Test mean_drift function."""

    def test_identical_samples(self):
        """Test that a sample has no drift from itself."""
        assert mean_drift([[1.0, 1.0]], [[1.0, 1.0]]) == 0.0

    def test_known_distance(self):
        """Test a 3-4-5 triangle between the means."""
        a = [[0.0, 0.0], [2.0, 0.0]]
        b = [[4.0, 4.0], [4.0, 4.0], [4.0, 4.0]]

        # mean(a) = (1, 0), mean(b) = (4, 4)
        np.testing.assert_allclose(mean_drift(a, b), 5.0, rtol=1e-12)

    def test_empty_sample_is_no_drift(self):
        """Test that missing data is reported as zero drift."""
        assert mean_drift([], [[1.0, 1.0]]) == 0.0
        assert mean_drift([[1.0, 1.0]], []) == 0.0
        assert mean_drift([], []) == 0.0
        assert mean_drift(np.empty((0, 3)), np.ones((4, 3))) == 0.0

    def test_symmetry(self, embedding_windows):
        """Test mean_drift(a, b) == mean_drift(b, a)."""
        reference, current = embedding_windows

        assert mean_drift(reference, current) == mean_drift(current, reference)

    def test_matches_numpy_norm(self, embedding_windows):
        """Test agreement with a direct numpy computation."""
        reference, current = embedding_windows
        expected = np.linalg.norm(reference.astype(np.float64).mean(axis=0) - current.astype(np.float64).mean(axis=0))

        np.testing.assert_allclose(mean_drift(reference, current), expected, rtol=1e-10)

    def test_dtype_invariance(self, embedding_windows):
        """Test that float32 and float64 inputs give the same drift."""
        reference, current = embedding_windows

        drift32 = mean_drift(reference, current)
        drift64 = mean_drift(reference.astype(np.float64), current.astype(np.float64))

        np.testing.assert_allclose(drift32, drift64, rtol=1e-12)

    def test_detects_shift(self, embedding_windows):
        """Test that a 0.5 shift on 16 axes is detected (expected distance 2.0)."""
        reference, current = embedding_windows

        assert 1.5 < mean_drift(reference, current) < 2.5

    def test_accepts_nested_lists(self):
        """Test list-of-lists input."""
        assert mean_drift([[0.0], [2.0]], [[4.0]]) == 3.0

    def test_returns_python_float(self):
        """Test return type."""
        assert isinstance(mean_drift([[0.0, 1.0]], [[1.0, 0.0]]), float)

    def test_ragged_vectors_raise(self):
        """Test that mixed dimensionality within a sample is rejected."""
        with pytest.raises(DimensionMismatchError):
            mean_drift([[1.0, 2.0], [1.0]], [[1.0, 2.0]])

        with pytest.raises(DimensionMismatchError):
            mean_drift([[1.0, 2.0]], [[1.0, 2.0], [1.0, 2.0, 3.0]])

    def test_flat_list_raises(self):
        """Test that a flat list of scalars is not mistaken for a vector sample."""
        with pytest.raises(DimensionMismatchError, match="1D vectors"):
            mean_drift([1.0, 2.0], [[1.0]])

        with pytest.raises(DimensionMismatchError):
            mean_vector([[1.0], 2.0])

    def test_cross_sample_dimension_mismatch_raises(self):
        """Test that samples of different dimensionality are rejected."""
        with pytest.raises(DimensionMismatchError, match="dimension"):
            mean_drift([[1.0, 2.0]], [[1.0, 2.0, 3.0]])

    def test_1d_array_raises(self):
        """Test that a flat array is not mistaken for a vector sample."""
        with pytest.raises(DimensionMismatchError):
            mean_drift(np.array([1.0, 2.0]), np.ones((2, 2)))


class TestMeanVector:
    """Test mean_vector function."""

    def test_per_dimension_mean(self):
        """Test the mean of each coordinate."""
        np.testing.assert_allclose(mean_vector([[1.0, 10.0], [3.0, 20.0]]), [2.0, 15.0])

    def test_empty_raises(self):
        """Test that an empty collection has no mean."""
        with pytest.raises(EmptyInputError):
            mean_vector([])
