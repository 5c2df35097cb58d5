"""
diagonals

Diagonal and tridiagonal linear algebra plus a fixed-step ODE integrator.

The package root exposes the flat API, where rejected input yields ``None``:

    from diagonals import example_matrix, linear_solve

The raising kernels live in :mod:`diagonals.numerics`.
"""

import logging

from .api import (
    Outcome,
    diagonal_example_matrix,
    example_matrix,
    inverse,
    is_valid_tridiagonal,
    linear_solve,
    product,
    product_with_diagonal,
    solve,
    tridiagonal_sum,
    try_inverse,
    try_linear_solve,
    try_product,
    try_product_with_diagonal,
    try_solve,
    try_sum,
    try_tridiagonal_sum,
)
from .api import sum as diagonal_sum
from .config import DEFAULT_NUMERICS, DEFAULT_ODE, NumericsConfig, ODEConfig
from .exceptions import (
    DiagonalsError,
    ErrorKind,
    InvalidStructureError,
    NullInputError,
    ShapeMismatchError,
    SingularMatrixError,
)
from .numerics.tridiag import Tridiag

logging.getLogger(__name__).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the 'diagonals' logger (once) and set its level."""
    logger = logging.getLogger(__name__)
    logger.setLevel(level)

    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    ):
        ch = logging.StreamHandler()
        ch.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(ch)
    for h in logger.handlers:
        h.setLevel(level)
    return logger


__all__ = [
    # Types
    "Tridiag",
    "Outcome",
    "ErrorKind",
    # Config
    "NumericsConfig",
    "ODEConfig",
    "DEFAULT_NUMERICS",
    "DEFAULT_ODE",
    # Errors
    "DiagonalsError",
    "NullInputError",
    "ShapeMismatchError",
    "InvalidStructureError",
    "SingularMatrixError",
    # Diagonal algebra
    "diagonal_sum",
    "product",
    "inverse",
    "diagonal_example_matrix",
    "try_sum",
    "try_product",
    "try_inverse",
    # Tridiagonal
    "example_matrix",
    "is_valid_tridiagonal",
    "tridiagonal_sum",
    "product_with_diagonal",
    "try_tridiagonal_sum",
    "try_product_with_diagonal",
    "linear_solve",
    "try_linear_solve",
    # ODE
    "solve",
    "try_solve",
    # Logging
    "configure_logging",
]
