# src/diagonals/numerics/tridiag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias, cast

import numpy as np
from numpy.typing import NDArray

from diagonals.config import DEFAULT_NUMERICS, NumericsConfig
from diagonals.exceptions import (
    DiagonalsError,
    InvalidStructureError,
    NullInputError,
    ShapeMismatchError,
)
from diagonals.typing import BandRowsLike, FloatArray, FloatDType, VectorLike

from ._validate import as_vector, check_size

__all__ = [
    "Tridiag",
    "TridiagLike",
    "check_tridiagonal",
    "is_valid_tridiagonal",
    "example_matrix",
    "tridiag_mv",
    "tridiag_to_dense",
    "tridiag_sum",
    "tridiag_scale",
    "tridiag_product_with_diagonal",
    "tridiag_product_diagonal_right",
]


@dataclass(frozen=True, slots=True)
class Tridiag:
    """Tridiagonal matrix as three bands.

    ``diag`` has length n >= 1, ``lower`` and ``upper`` have length n - 1:
    ``lower[i] = T[i+1, i]`` and ``upper[i] = T[i, i+1]``.
    """

    lower: NDArray[np.floating]
    diag: NDArray[np.floating]
    upper: NDArray[np.floating]

    def check(self, *, config: NumericsConfig | None = None) -> int:
        """Validate internal shapes and return n (system size)."""
        cfg = DEFAULT_NUMERICS if config is None else config
        if self.lower is None or self.diag is None or self.upper is None:
            raise NullInputError("Tridiag bands cannot be None")

        try:
            lower = np.asarray(self.lower, dtype=FloatDType)
            diag = np.asarray(self.diag, dtype=FloatDType)
            upper = np.asarray(self.upper, dtype=FloatDType)
        except (TypeError, ValueError) as e:
            raise InvalidStructureError("Tridiag bands are not real arrays") from e

        if diag.ndim != 1:
            raise InvalidStructureError("diag must be 1D")

        n = int(diag.shape[0])
        if n == 0:
            raise InvalidStructureError("Tridiag must have at least one row")

        if lower.shape != (n - 1,) or upper.shape != (n - 1,):
            raise InvalidStructureError(
                f"lower/upper must have shape {(n - 1,)}, "
                f"got {lower.shape} and {upper.shape}"
            )

        if cfg.check_finite:
            for band in (lower, diag, upper):
                if not np.all(np.isfinite(band)):
                    raise InvalidStructureError("Tridiag contains non-finite entries")
        return n

    @property
    def n(self) -> int:
        return int(np.asarray(self.diag).shape[0])

    def mv(self, u: VectorLike) -> FloatArray:
        n = self.check()
        u = np.asarray(u, dtype=FloatDType)
        if u.shape != (n,):
            raise ShapeMismatchError(f"u must have shape {(n,)} got {u.shape}")
        return tridiag_mv(Bl=self.lower, Bd=self.diag, Bu=self.upper, u=u)

    def copy(self) -> Tridiag:
        return Tridiag(
            lower=np.array(self.lower, dtype=FloatDType),
            diag=np.array(self.diag, dtype=FloatDType),
            upper=np.array(self.upper, dtype=FloatDType),
        )

    @classmethod
    def from_rows(
        cls, rows: BandRowsLike, *, config: NumericsConfig | None = None
    ) -> Tridiag:
        """Build from the band-row layout ``rows[i] = [a_i, b_i, c_i]``."""
        r = check_tridiagonal(rows, config=config)
        return cls(lower=r[1:, 0].copy(), diag=r[:, 1].copy(), upper=r[:-1, 2].copy())

    def to_rows(self) -> FloatArray:
        """Band-row layout with the unused corner cells set to 0."""
        n = self.check()
        rows = np.zeros((n, 3), dtype=FloatDType)
        rows[1:, 0] = self.lower
        rows[:, 1] = self.diag
        rows[:-1, 2] = self.upper
        return rows


TridiagLike: TypeAlias = Tridiag | BandRowsLike


def check_tridiagonal(
    rows: BandRowsLike, *, config: NumericsConfig | None = None
) -> FloatArray:
    """
    Validate the band-row layout and return it as a fresh (n, 3) float array.

    Requirements:
      - 2D with exactly 3 columns and n >= 1 rows
      - finite entries (unless ``config.check_finite`` is False)
      - corner cells rows[0, 0] and rows[n-1, 2] equal to 0
    """
    cfg = DEFAULT_NUMERICS if config is None else config
    if rows is None:
        raise NullInputError("tridiagonal matrix is None")
    if isinstance(rows, Tridiag):
        rows.check(config=cfg)
        return rows.to_rows()
    try:
        r = np.array(rows, dtype=FloatDType)
    except (TypeError, ValueError) as e:
        raise InvalidStructureError("tridiagonal rows are not a real array") from e

    if r.ndim != 2 or r.shape[1] != 3:
        raise InvalidStructureError(f"rows must have shape (n, 3), got {r.shape}")
    n = int(r.shape[0])
    if n == 0:
        raise InvalidStructureError("tridiagonal matrix must have at least one row")
    if cfg.check_finite and not np.all(np.isfinite(r)):
        raise InvalidStructureError("rows contain non-finite entries")
    if r[0, 0] != 0.0 or r[n - 1, 2] != 0.0:
        raise InvalidStructureError(
            "corner cells rows[0, 0] and rows[n-1, 2] must be 0"
        )
    return r


def is_valid_tridiagonal(
    rows: BandRowsLike, *, config: NumericsConfig | None = None
) -> bool:
    try:
        check_tridiagonal(rows, config=config)
    except DiagonalsError:
        return False
    return True


def example_matrix(n: int) -> FloatArray:
    """
    Canonical n x n fixture in band-row layout: the 1D discrete Laplacian
    (-1, 2, -1), corners 0. Non-singular for every n >= 1.
    """
    n = check_size(n)
    rows = np.empty((n, 3), dtype=FloatDType)
    rows[:, 0] = -1.0
    rows[:, 1] = 2.0
    rows[:, 2] = -1.0
    rows[0, 0] = 0.0
    rows[n - 1, 2] = 0.0
    return rows


def as_tridiag(
    M: Any, *, config: NumericsConfig | None = None
) -> tuple[Tridiag, bool]:
    """Return ``(validated copy, given_as_rows)`` for either representation."""
    if isinstance(M, Tridiag):
        M.check(config=config)
        return M.copy(), False
    return Tridiag.from_rows(M, config=config), True


def _wrap(T: Tridiag, as_rows: bool) -> Tridiag | FloatArray:
    return T.to_rows() if as_rows else T


def tridiag_mv(
    Bl: NDArray[np.floating],  # (M-1,)
    Bd: NDArray[np.floating],  # (M,)
    Bu: NDArray[np.floating],  # (M-1,)
    u: NDArray[np.floating],  # (M,)
) -> NDArray[np.floating]:
    """
    Compute y = T u where T is tridiagonal with diagonals (Bl,Bd,Bu).

    Convention (for M>=2):
      y[0]   = Bd[0]*u[0] + Bu[0]*u[1]
      y[j]   = Bl[j-1]*u[j-1] + Bd[j]*u[j] + Bu[j]*u[j+1]   for 1<=j<=M-2
      y[M-1] = Bl[M-2]*u[M-2] + Bd[M-1]*u[M-1]

    For M==1: y[0] = Bd[0]*u[0].
    """
    Bd = np.asarray(Bd, dtype=FloatDType)
    Bl = np.asarray(Bl, dtype=FloatDType)
    Bu = np.asarray(Bu, dtype=FloatDType)
    u = np.asarray(u, dtype=FloatDType)

    if Bd.ndim != 1:
        raise InvalidStructureError("Bd must be 1D")

    M = int(Bd.shape[0])

    if u.shape != (M,):
        raise ShapeMismatchError(f"u must have shape {(M,)} got {u.shape}")

    if Bl.shape != (max(M - 1, 0),) or Bu.shape != (max(M - 1, 0),):
        raise InvalidStructureError(
            f"Bl,Bu must have shape {(M - 1,)} got {Bl.shape}, {Bu.shape}"
        )

    y = Bd * u
    y[1:] += Bl * u[:-1]
    y[:-1] += Bu * u[1:]
    return cast(NDArray[np.floating], y)


def tridiag_to_dense(M: TridiagLike) -> FloatArray:
    """Convert a tridiagonal (either representation) to a dense matrix."""
    T, _ = as_tridiag(M)
    n = T.n
    A = np.zeros((n, n), dtype=FloatDType)
    A[np.arange(n), np.arange(n)] = T.diag
    A[np.arange(1, n), np.arange(n - 1)] = T.lower
    A[np.arange(n - 1), np.arange(1, n)] = T.upper
    return A


# ---------------------------
# Algebra
# ---------------------------


def tridiag_sum(
    M1: TridiagLike, M2: TridiagLike, *, config: NumericsConfig | None = None
) -> Tridiag | FloatArray:
    """Band-wise sum of two tridiagonals of equal size."""
    A, rows_a = as_tridiag(M1, config=config)
    B, rows_b = as_tridiag(M2, config=config)
    if A.n != B.n:
        raise ShapeMismatchError(f"sizes differ: {A.n} and {B.n}")
    out = Tridiag(
        lower=A.lower + B.lower, diag=A.diag + B.diag, upper=A.upper + B.upper
    )
    return _wrap(out, rows_a or rows_b)


def tridiag_scale(
    M: TridiagLike, alpha: float, *, config: NumericsConfig | None = None
) -> Tridiag | FloatArray:
    T, as_rows = as_tridiag(M, config=config)
    alpha = float(alpha)
    out = Tridiag(lower=alpha * T.lower, diag=alpha * T.diag, upper=alpha * T.upper)
    return _wrap(out, as_rows)


def _diagonal_for(
    D: VectorLike, n: int, config: NumericsConfig | None
) -> FloatArray:
    d = as_vector(D, "D", config=config)
    if d.shape != (n,):
        raise ShapeMismatchError(
            f"diagonal length {d.shape[0]} does not match matrix size {n}"
        )
    return d


def tridiag_product_with_diagonal(
    D: VectorLike, M: TridiagLike, *, config: NumericsConfig | None = None
) -> Tridiag | FloatArray:
    """
    D @ M for diagonal D: row i of M is scaled by D[i].

      lower[i-1] (row i)  -> D[i]   * lower[i-1]
      diag[i]             -> D[i]   * diag[i]
      upper[i]   (row i)  -> D[i]   * upper[i]
    """
    T, as_rows = as_tridiag(M, config=config)
    d = _diagonal_for(D, T.n, config)
    out = Tridiag(lower=d[1:] * T.lower, diag=d * T.diag, upper=d[:-1] * T.upper)
    return _wrap(out, as_rows)


def tridiag_product_diagonal_right(
    M: TridiagLike, D: VectorLike, *, config: NumericsConfig | None = None
) -> Tridiag | FloatArray:
    """M @ D for diagonal D: column j of M is scaled by D[j]."""
    T, as_rows = as_tridiag(M, config=config)
    d = _diagonal_for(D, T.n, config)
    out = Tridiag(lower=d[:-1] * T.lower, diag=d * T.diag, upper=d[1:] * T.upper)
    return _wrap(out, as_rows)
