from __future__ import annotations

from numbers import Integral
from typing import Any

import numpy as np

from diagonals.config import DEFAULT_NUMERICS, NumericsConfig
from diagonals.exceptions import InvalidStructureError, NullInputError
from diagonals.typing import FloatArray, FloatDType


def as_vector(
    x: Any, name: str, *, config: NumericsConfig | None = None
) -> FloatArray:
    """Return ``x`` as a fresh 1D float64 array or raise."""
    cfg = DEFAULT_NUMERICS if config is None else config
    if x is None:
        raise NullInputError(f"{name} is None")
    try:
        arr = np.array(x, dtype=FloatDType)
    except (TypeError, ValueError) as e:
        raise InvalidStructureError(f"{name} is not a real vector") from e
    if arr.ndim != 1:
        raise InvalidStructureError(f"{name} must be 1D, got ndim={arr.ndim}")
    if cfg.check_finite and not np.all(np.isfinite(arr)):
        raise InvalidStructureError(f"{name} contains non-finite entries")
    return arr


def check_size(n: Any) -> int:
    """Return ``n`` as an int >= 1 or raise."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidStructureError(f"n must be an integer, got {n!r}")
    if n < 1:
        raise InvalidStructureError(f"n must be >= 1, got {n}")
    return int(n)
