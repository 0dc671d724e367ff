"""Embedding drift between two samples of vectors."""

import logging
from collections.abc import Sequence

import numpy as np
from scipy.spatial.distance import euclidean

from .exceptions import DimensionMismatchError, EmptyInputError

__all__ = [
    "mean_drift",
    "mean_vector",
]

logger = logging.getLogger(__name__)

VectorSample = Sequence[Sequence[float]] | np.ndarray


def _as_matrix(vectors: VectorSample, name: str) -> np.ndarray:
    """Stack ``vectors`` into an ``(n, dim)`` float64 matrix.

    Accumulation is always done in float64, including for float32 embeddings.
    """
    if isinstance(vectors, np.ndarray):
        if vectors.ndim != 2:
            if vectors.size == 0:
                return np.empty((0, 0), dtype=np.float64)
            raise DimensionMismatchError(f"{name} must be 2D (n_vectors, dim), got shape {vectors.shape}")
        return vectors.astype(np.float64, copy=False)

    rows = list(vectors)
    if not rows:
        return np.empty((0, 0), dtype=np.float64)
    if any(np.ndim(v) != 1 for v in rows):
        raise DimensionMismatchError(f"{name} must be a collection of 1D vectors")
    dims = {len(v) for v in rows}
    if len(dims) > 1:
        raise DimensionMismatchError(f"vectors in {name} have mixed dimensionality {sorted(dims)}")
    return np.asarray(rows, dtype=np.float64).reshape(len(rows), dims.pop())


def mean_vector(vectors: VectorSample) -> np.ndarray:
    """Per-dimension arithmetic mean of a collection of vectors.

    Raises
    ------
    EmptyInputError
        If ``vectors`` is empty.
    DimensionMismatchError
        If the vectors do not share a dimensionality.
    """
    mat = _as_matrix(vectors, "vectors")
    if mat.shape[0] == 0:
        raise EmptyInputError("mean of an empty vector collection is undefined")
    return mat.mean(axis=0)


def mean_drift(a: VectorSample, b: VectorSample) -> float:
    """Euclidean distance between the mean vectors of ``a`` and ``b``.

    Parameters
    ----------
    a, b : array-like of shape (n, dim)
        Two samples of equal-dimension vectors (e.g. embeddings from a
        reference window and a current window)

    Returns
    -------
    float
        ``||mean(a) - mean(b)||_2``. If either sample is empty the result is
        0.0: no data is treated as no evidence of drift.

    Raises
    ------
    DimensionMismatchError
        If vectors within a sample, or the two samples, differ in
        dimensionality.

    Examples
    --------
    >>> mean_drift([[0.0, 0.0], [2.0, 0.0]], [[1.0, 3.0]])
    3.0
    """
    mat_a = _as_matrix(a, "a")
    mat_b = _as_matrix(b, "b")
    if mat_a.shape[0] == 0 or mat_b.shape[0] == 0:
        logger.debug("mean_drift: empty sample (n_a=%d, n_b=%d), reporting no drift", mat_a.shape[0], mat_b.shape[0])
        return 0.0
    if mat_a.shape[1] != mat_b.shape[1]:
        raise DimensionMismatchError(f"a has dimension {mat_a.shape[1]} but b has dimension {mat_b.shape[1]}")
    if mat_a.shape[1] == 0:
        return 0.0

    return float(euclidean(mat_a.mean(axis=0), mat_b.mean(axis=0)))
