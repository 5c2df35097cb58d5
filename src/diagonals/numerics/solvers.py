# src/diagonals/numerics/solvers.py
from __future__ import annotations

import logging
from typing import cast

import numpy as np
from numpy.typing import NDArray

from diagonals.config import DEFAULT_NUMERICS, NumericsConfig
from diagonals.exceptions import ShapeMismatchError, SingularMatrixError
from diagonals.typing import FloatArray, FloatDType, VectorLike

from ._validate import as_vector
from .tridiag import TridiagLike, as_tridiag

__all__ = [
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "residual_norm",
]

logger = logging.getLogger(__name__)


def _rhs_for(rhs: VectorLike, n: int, config: NumericsConfig) -> FloatArray:
    d = as_vector(rhs, "rhs", config=config)
    if d.shape != (n,):
        raise ShapeMismatchError(f"rhs must have shape {(n,)} got {d.shape}")
    return d


def _pivot(denom: float, row: int, tol: float) -> float:
    if abs(denom) <= tol:
        logger.debug("Thomas elimination hit pivot %.3e at row %d", denom, row)
        raise SingularMatrixError(f"Near-zero pivot at row {row}", row=row)
    return denom


def solve_tridiag_thomas(
    A: TridiagLike,
    rhs: VectorLike,
    *,
    config: NumericsConfig | None = None,
) -> FloatArray:
    """
    Solve A x = rhs for tridiagonal A.

    Notes:
    - Uses a Thomas algorithm (no pivoting). Prefer diagonally-dominant systems.
    - Raises SingularMatrixError when abs(pivot) <= config.pivot_tol.
    - Works on copies; A and rhs are never modified.
    """
    cfg = DEFAULT_NUMERICS if config is None else config
    T, _ = as_tridiag(A, config=cfg)
    M = T.n
    d = _rhs_for(rhs, M, cfg)
    tol = cfg.pivot_tol

    lower, diag, upper = T.lower, T.diag, T.upper

    if M == 1:
        denom = _pivot(diag[0], 0, tol)
        return cast(NDArray[np.floating], d / denom)

    # Forward sweep (modified upper cp and rhs dp)
    cp = np.empty(M - 1, dtype=FloatDType)
    dp = np.empty(M, dtype=FloatDType)

    denom = _pivot(diag[0], 0, tol)
    cp[0] = upper[0] / denom
    dp[0] = d[0] / denom

    for i in range(1, M - 1):
        denom = _pivot(diag[i] - lower[i - 1] * cp[i - 1], i, tol)
        cp[i] = upper[i] / denom
        dp[i] = (d[i] - lower[i - 1] * dp[i - 1]) / denom

    denom = _pivot(diag[M - 1] - lower[M - 2] * cp[M - 2], M - 1, tol)
    dp[M - 1] = (d[M - 1] - lower[M - 2] * dp[M - 2]) / denom

    # Back substitution
    x = np.empty(M, dtype=FloatDType)
    x[M - 1] = dp[M - 1]
    for i in range(M - 2, -1, -1):
        x[i] = dp[i] - cp[i] * x[i + 1]
    return x


def solve_tridiag_scipy(
    A: TridiagLike,
    rhs: VectorLike,
    *,
    config: NumericsConfig | None = None,
) -> FloatArray:
    """
    Reference solve through SciPy's banded LU (with partial pivoting).

    Accepts the same inputs as :func:`solve_tridiag_thomas`. SciPy is imported
    lazily; a singular matrix surfaces as SciPy's ``LinAlgError``.
    """
    from scipy.linalg import (
        solve_banded,  # local import to avoid import-time dependency
    )

    cfg = DEFAULT_NUMERICS if config is None else config
    T, _ = as_tridiag(A, config=cfg)
    d = _rhs_for(rhs, T.n, cfg)

    # (u + 1 + l, n) ordered storage: super, main, sub
    ab = np.zeros((3, T.n), dtype=FloatDType)
    ab[0, 1:] = T.upper
    ab[1, :] = T.diag
    ab[2, :-1] = T.lower

    res = solve_banded((1, 1), ab, d)
    # scipy stubs often return Any; cast back to an NDArray
    return cast(NDArray[np.floating], np.asarray(res))


def residual_norm(A: TridiagLike, x: VectorLike, rhs: VectorLike) -> float:
    """max |A x - rhs|"""
    T, _ = as_tridiag(A)
    r = T.mv(as_vector(x, "x")) - _rhs_for(rhs, T.n, DEFAULT_NUMERICS)
    return float(np.max(np.abs(r)))
