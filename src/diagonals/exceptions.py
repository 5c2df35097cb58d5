from __future__ import annotations

from enum import Enum

import numpy as np


class ErrorKind(str, Enum):
    """Why an operation produced no result."""

    NULL_INPUT = "null_input"
    SHAPE_MISMATCH = "shape_mismatch"
    INVALID_STRUCTURE = "invalid_structure"
    SINGULAR = "singular"


class DiagonalsError(Exception):
    """Base class for rejected inputs in the numerical kernels."""

    kind: ErrorKind


class NullInputError(DiagonalsError, TypeError):
    """Raised when a required operand is ``None``."""

    kind = ErrorKind.NULL_INPUT


class ShapeMismatchError(DiagonalsError, ValueError):
    """Raised when operand lengths or dimensions disagree."""

    kind = ErrorKind.SHAPE_MISMATCH


class InvalidStructureError(DiagonalsError, ValueError):
    """Raised when an input is not a well-formed diagonal/tridiagonal matrix.

    For the band-row layout this covers wrong rank or width, ``n == 0``,
    non-finite entries and non-zero corner cells.
    """

    kind = ErrorKind.INVALID_STRUCTURE


class SingularMatrixError(DiagonalsError, np.linalg.LinAlgError):
    """Raised on a (near-)zero pivot or a zero entry that must be inverted."""

    kind = ErrorKind.SINGULAR

    def __init__(self, message: str, *, row: int | None = None) -> None:
        super().__init__(message)
        self.row = row
