# src/diagonals/numerics/diagonal.py
"""Element-wise algebra on diagonal matrices stored as their diagonal vector."""

from __future__ import annotations

import numpy as np

from diagonals.config import NumericsConfig
from diagonals.exceptions import ShapeMismatchError, SingularMatrixError
from diagonals.typing import FloatArray, FloatDType, VectorLike

from ._validate import as_vector, check_size

__all__ = [
    "diag_sum",
    "diag_product",
    "diag_inverse",
    "diag_example_matrix",
    "diag_to_dense",
]


def _pair(
    A: VectorLike, B: VectorLike, config: NumericsConfig | None
) -> tuple[FloatArray, FloatArray]:
    a = as_vector(A, "A", config=config)
    b = as_vector(B, "B", config=config)
    if a.shape != b.shape:
        raise ShapeMismatchError(
            f"diagonals must have equal length, got {a.shape[0]} and {b.shape[0]}"
        )
    return a, b


def diag_sum(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray:
    a, b = _pair(A, B, config)
    return a + b


def diag_product(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray:
    a, b = _pair(A, B, config)
    return a * b


def diag_inverse(
    A: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray:
    """
    Inverse of a diagonal matrix.

    An exactly zero entry makes the matrix singular and raises
    :class:`SingularMatrixError`; no inf values are produced. Tiny nonzero
    entries are inverted as they are.
    """
    a = as_vector(A, "A", config=config)
    zero = np.flatnonzero(a == 0.0)
    if zero.size:
        i = int(zero[0])
        raise SingularMatrixError(f"Zero diagonal entry at index {i}", row=i)
    return 1.0 / a


def diag_example_matrix(n: int = 4) -> FloatArray:
    """Deterministic diagonal fixture ``[1, 2, ..., n]``."""
    n = check_size(n)
    return np.arange(1, n + 1, dtype=FloatDType)


def diag_to_dense(A: VectorLike) -> FloatArray:
    return np.diag(as_vector(A, "A"))
