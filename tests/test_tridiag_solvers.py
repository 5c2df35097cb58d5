# tests/test_tridiag_solvers.py
import numpy as np
import pytest

from diagonals.config import NumericsConfig
from diagonals.exceptions import (
    InvalidStructureError,
    NullInputError,
    ShapeMismatchError,
    SingularMatrixError,
)
from diagonals.numerics.solvers import (
    residual_norm,
    solve_tridiag_scipy,
    solve_tridiag_thomas,
)
from diagonals.numerics.tridiag import Tridiag, example_matrix, tridiag_to_dense


@pytest.mark.parametrize("M", [1, 2, 3, 10, 50, 200])
def test_thomas_matches_scipy_on_diag_dominant_random(diag_dominant, M: int) -> None:
    rng = np.random.default_rng(12345 + M)
    A = diag_dominant(rng, M, scale=1.0)
    rhs = rng.normal(size=M)

    x_thomas = solve_tridiag_thomas(A, rhs)
    x_scipy = solve_tridiag_scipy(A, rhs)

    np.testing.assert_allclose(x_thomas, x_scipy, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("M", [1, 2, 10, 80])
def test_solutions_match_dense_solve(diag_dominant, M: int) -> None:
    rng = np.random.default_rng(777 + M)
    A_tri = diag_dominant(rng, M, scale=2.0)
    rhs = rng.normal(size=M)

    x_dense = np.linalg.solve(tridiag_to_dense(A_tri), rhs)
    x_thomas = solve_tridiag_thomas(A_tri, rhs)

    np.testing.assert_allclose(x_thomas, x_dense, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("M", [1, 4, 25, 120])
def test_round_trip_residual(diag_dominant, M: int) -> None:
    rng = np.random.default_rng(31 + M)
    A = diag_dominant(rng, M)
    rows = A.to_rows()
    d = rng.uniform(-10.0, 10.0, size=M)

    x = solve_tridiag_thomas(rows, d)

    np.testing.assert_allclose(A.mv(x), d, rtol=0.0, atol=1e-9)
    assert residual_norm(rows, x, d) <= 1e-9


def test_identity_like_system() -> None:
    M = [[0.0, 1.0, 0.0], [0.0, 1.0, 0.0], [0.0, 1.0, 0.0]]
    np.testing.assert_array_equal(solve_tridiag_thomas(M, [2.0, 4.0, 6.0]), [2.0, 4.0, 6.0])


@pytest.mark.parametrize("n", [1, 2, 8, 64])
def test_example_matrix_is_solvable(n: int) -> None:
    d = np.ones(n)
    x = solve_tridiag_thomas(example_matrix(n), d)
    np.testing.assert_allclose(tridiag_to_dense(example_matrix(n)) @ x, d, atol=1e-9)


def test_singular_first_pivot() -> None:
    with pytest.raises(SingularMatrixError) as exc:
        solve_tridiag_thomas([[0.0, 0.0, 1.0], [1.0, 1.0, 0.0]], [1.0, 1.0])
    assert exc.value.row == 0


def test_singular_interior_pivot() -> None:
    # b_1 - a_1 * c_0 / b_0 = 1 - 1 * 1 / 1 = 0
    M = [[0.0, 1.0, 1.0], [1.0, 1.0, 1.0], [1.0, 3.0, 0.0]]
    with pytest.raises(SingularMatrixError) as exc:
        solve_tridiag_thomas(M, [1.0, 2.0, 3.0])
    assert exc.value.row == 1


def test_singular_last_pivot() -> None:
    M = [[0.0, 2.0, 1.0], [4.0, 2.0, 0.0]]
    with pytest.raises(SingularMatrixError) as exc:
        solve_tridiag_thomas(M, [1.0, 1.0])
    assert exc.value.row == 1


def test_near_zero_pivot_uses_configured_tolerance() -> None:
    M = [[0.0, 1e-15, 0.0]]
    with pytest.raises(SingularMatrixError):
        solve_tridiag_thomas(M, [1.0])
    x = solve_tridiag_thomas(M, [1.0], config=NumericsConfig(pivot_tol=0.0))
    assert x[0] == pytest.approx(1e15)


@pytest.mark.parametrize("M", [2, 5, 30])
def test_inputs_not_modified(diag_dominant, M: int) -> None:
    rng = np.random.default_rng(999 + M)
    A = diag_dominant(rng, M, scale=1.0)
    rhs = rng.normal(size=M)
    rows = A.to_rows()

    lower0 = A.lower.copy()
    diag0 = A.diag.copy()
    upper0 = A.upper.copy()
    rhs0 = rhs.copy()
    rows0 = rows.copy()

    _ = solve_tridiag_thomas(A, rhs)
    _ = solve_tridiag_thomas(rows, rhs)
    np.testing.assert_array_equal(A.lower, lower0)
    np.testing.assert_array_equal(A.diag, diag0)
    np.testing.assert_array_equal(A.upper, upper0)
    np.testing.assert_array_equal(rhs, rhs0)
    np.testing.assert_array_equal(rows, rows0)


def test_shape_errors(diag_dominant) -> None:
    rng = np.random.default_rng(0)
    M = 5
    A = diag_dominant(rng, M)
    rhs = rng.normal(size=M)

    # wrong lower shape: should be (M-1,)
    A_bad_lower = Tridiag(lower=A.lower[:-1], diag=A.diag, upper=A.upper)
    with pytest.raises(InvalidStructureError):
        _ = solve_tridiag_thomas(A_bad_lower, rhs)

    # wrong rhs shape
    with pytest.raises(ShapeMismatchError):
        _ = solve_tridiag_thomas(A, rhs[:-1])

    with pytest.raises(NullInputError):
        _ = solve_tridiag_thomas(A, None)

    # SciPy solver shares the validation
    with pytest.raises(InvalidStructureError):
        _ = solve_tridiag_scipy(A_bad_lower, rhs)
    with pytest.raises(ShapeMismatchError):
        _ = solve_tridiag_scipy(A.to_rows(), rhs[:-1])


def test_scipy_accepts_band_rows() -> None:
    rows = example_matrix(6)
    d = np.arange(6.0)
    np.testing.assert_allclose(
        solve_tridiag_scipy(rows, d), solve_tridiag_thomas(rows, d), atol=1e-12
    )
