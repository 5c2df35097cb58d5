from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from diagonals.typing import FloatDType


def _default_pivot_tol() -> float:
    return 100.0 * float(np.finfo(FloatDType).eps)


@dataclass(frozen=True, slots=True)
class NumericsConfig:
    """Tolerances shared by the diagonal and tridiagonal kernels.

    Parameters
    ----------
    pivot_tol : float
        Absolute threshold at or below which a Thomas elimination pivot is
        treated as zero.
    check_finite : bool
        Reject NaN/inf entries as an invalid structure.
    """

    pivot_tol: float = field(default_factory=_default_pivot_tol)
    check_finite: bool = True

    def __post_init__(self) -> None:
        if not np.isfinite(self.pivot_tol) or self.pivot_tol < 0:
            raise ValueError("pivot_tol must be finite and >= 0")


@dataclass(frozen=True, slots=True)
class ODEConfig:
    method: str = "euler"
    t0: float = 0.0

    def __post_init__(self) -> None:
        if not str(self.method).strip():
            raise ValueError("method cannot be empty")
        if not np.isfinite(self.t0):
            raise ValueError("t0 must be finite")


DEFAULT_NUMERICS: NumericsConfig = NumericsConfig()
DEFAULT_ODE: ODEConfig = ODEConfig()
