"""Flat entry points that report rejected input as ``None``.

Every function here wraps a kernel from :mod:`diagonals.numerics`. Kernel
failures of type :class:`~diagonals.exceptions.DiagonalsError` become the
no-result sentinel ``None``; the ``try_*`` variants return an
:class:`Outcome` carrying the :class:`~diagonals.exceptions.ErrorKind`
instead. Matrices use the band-row layout ``rows[i] = [a_i, b_i, c_i]``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from diagonals.config import NumericsConfig
from diagonals.exceptions import DiagonalsError, ErrorKind
from diagonals.numerics import diagonal as _diag
from diagonals.numerics import ode as _ode
from diagonals.numerics import solvers as _solvers
from diagonals.numerics import tridiag as _tri
from diagonals.typing import BandRowsLike, FloatArray, RhsFn, VectorLike

__all__ = [
    "Outcome",
    "sum",
    "product",
    "inverse",
    "diagonal_example_matrix",
    "example_matrix",
    "is_valid_tridiagonal",
    "tridiagonal_sum",
    "product_with_diagonal",
    "linear_solve",
    "solve",
    "try_sum",
    "try_product",
    "try_inverse",
    "try_tridiagonal_sum",
    "try_product_with_diagonal",
    "try_linear_solve",
    "try_solve",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Outcome:
    value: FloatArray | float | None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


def _attempt(name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    try:
        value = fn(*args, **kwargs)
    except DiagonalsError as e:
        logger.debug("%s rejected input (%s): %s", name, e.kind.value, e)
        return Outcome(value=None, error=e.kind, message=str(e))
    if isinstance(value, _tri.Tridiag):
        value = value.to_rows()
    return Outcome(value=value)


# ---------------------------
# Diagonal algebra
# ---------------------------


def try_sum(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> Outcome:
    return _attempt("sum", _diag.diag_sum, A, B, config=config)


def try_product(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> Outcome:
    return _attempt("product", _diag.diag_product, A, B, config=config)


def try_inverse(A: VectorLike, *, config: NumericsConfig | None = None) -> Outcome:
    return _attempt("inverse", _diag.diag_inverse, A, config=config)


def sum(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    return try_sum(A, B, config=config).value


def product(
    A: VectorLike, B: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    return try_product(A, B, config=config).value


def inverse(
    A: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    """Reciprocal of each entry; ``None`` if any entry is zero."""
    return try_inverse(A, config=config).value


def diagonal_example_matrix(n: int = 4) -> FloatArray | None:
    return _attempt("diagonal_example_matrix", _diag.diag_example_matrix, n).value


# ---------------------------
# Tridiagonal storage / algebra
# ---------------------------


def example_matrix(n: int) -> FloatArray | None:
    return _attempt("example_matrix", _tri.example_matrix, n).value


def is_valid_tridiagonal(
    rows: BandRowsLike, *, config: NumericsConfig | None = None
) -> bool:
    return _tri.is_valid_tridiagonal(rows, config=config)


def try_tridiagonal_sum(
    M1: BandRowsLike, M2: BandRowsLike, *, config: NumericsConfig | None = None
) -> Outcome:
    return _attempt("tridiagonal_sum", _tri.tridiag_sum, M1, M2, config=config)


def try_product_with_diagonal(
    D: VectorLike, M: BandRowsLike, *, config: NumericsConfig | None = None
) -> Outcome:
    return _attempt(
        "product_with_diagonal",
        _tri.tridiag_product_with_diagonal,
        D,
        M,
        config=config,
    )


def tridiagonal_sum(
    M1: BandRowsLike, M2: BandRowsLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    return try_tridiagonal_sum(M1, M2, config=config).value


def product_with_diagonal(
    D: VectorLike, M: BandRowsLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    return try_product_with_diagonal(D, M, config=config).value


# ---------------------------
# Solver
# ---------------------------


def try_linear_solve(
    M: BandRowsLike, rhs: VectorLike, *, config: NumericsConfig | None = None
) -> Outcome:
    return _attempt(
        "linear_solve", _solvers.solve_tridiag_thomas, M, rhs, config=config
    )


def linear_solve(
    M: BandRowsLike, rhs: VectorLike, *, config: NumericsConfig | None = None
) -> FloatArray | None:
    """Solve M x = rhs by the Thomas algorithm; ``None`` if no solution is produced."""
    return try_linear_solve(M, rhs, config=config).value


# ---------------------------
# ODE
# ---------------------------


def try_solve(
    initial_value: float,
    step_size: float,
    step_count: int,
    *,
    rhs: RhsFn | None = None,
    method: str | _ode.OneStepMethod | None = None,
) -> Outcome:
    return _attempt(
        "solve",
        _ode.ode_solve,
        initial_value,
        step_size,
        step_count,
        rhs=rhs,
        method=method,
    )


def solve(
    initial_value: float,
    step_size: float,
    step_count: int,
    *,
    rhs: RhsFn | None = None,
    method: str | _ode.OneStepMethod | None = None,
) -> float | None:
    """Final value after ``step_count`` fixed steps; ``None`` on rejected input."""
    return try_solve(
        initial_value, step_size, step_count, rhs=rhs, method=method
    ).value
