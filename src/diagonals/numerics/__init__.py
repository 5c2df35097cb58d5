# src/diagonals/numerics/__init__.py
"""
Numerical kernels (advanced API).

Top-level package `diagonals` exposes the flat, sentinel-returning API.
This subpackage exposes the raising kernels it is built on.
"""

from .diagonal import (
    diag_example_matrix,
    diag_inverse,
    diag_product,
    diag_sum,
    diag_to_dense,
)
from .ode import (
    ODEResult,
    OneStepMethod,
    available_methods,
    ode_integrate,
    ode_solve,
    register_method,
    resolve_method,
)
from .solvers import residual_norm, solve_tridiag_scipy, solve_tridiag_thomas
from .tridiag import (
    Tridiag,
    check_tridiagonal,
    example_matrix,
    is_valid_tridiagonal,
    tridiag_mv,
    tridiag_product_diagonal_right,
    tridiag_product_with_diagonal,
    tridiag_scale,
    tridiag_sum,
    tridiag_to_dense,
)

__all__ = [
    # Diagonal
    "diag_sum",
    "diag_product",
    "diag_inverse",
    "diag_example_matrix",
    "diag_to_dense",
    # Tridiagonal storage / algebra
    "Tridiag",
    "check_tridiagonal",
    "is_valid_tridiagonal",
    "example_matrix",
    "tridiag_mv",
    "tridiag_to_dense",
    "tridiag_sum",
    "tridiag_scale",
    "tridiag_product_with_diagonal",
    "tridiag_product_diagonal_right",
    # Solvers
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "residual_norm",
    # ODE
    "OneStepMethod",
    "ODEResult",
    "register_method",
    "available_methods",
    "resolve_method",
    "ode_integrate",
    "ode_solve",
]
