"""Pytest helpers for the diagonals library."""

from __future__ import annotations

import numpy as np
import pytest

from diagonals.numerics.tridiag import Tridiag


def make_diag_dominant_tridiag(
    rng: np.random.Generator, M: int, scale: float = 1.0
) -> Tridiag:
    """Create a random *strictly diagonally dominant* tridiagonal system."""
    if M < 1:
        raise ValueError("M must be >= 1")

    if M == 1:
        lower = np.array([], dtype=float)
        upper = np.array([], dtype=float)
        diag = np.array([1.0 + abs(rng.normal())], dtype=float) * scale
        return Tridiag(lower=lower, diag=diag, upper=upper)

    lower = rng.normal(size=M - 1) * scale
    upper = rng.normal(size=M - 1) * scale

    diag = (1.0 + np.abs(rng.normal(size=M))) * scale
    diag[0] += np.abs(upper[0])
    diag[-1] += np.abs(lower[-1])
    if M > 2:
        diag[1:-1] += np.abs(lower[:-1]) + np.abs(upper[1:])

    return Tridiag(lower=lower, diag=diag, upper=upper)


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def diag_dominant():
    """Factory fixture for random diagonally dominant tridiagonals."""
    return make_diag_dominant_tridiag
