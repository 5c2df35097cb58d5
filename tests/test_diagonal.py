# tests/test_diagonal.py
import numpy as np
import pytest

from diagonals.config import NumericsConfig
from diagonals.exceptions import (
    InvalidStructureError,
    NullInputError,
    ShapeMismatchError,
    SingularMatrixError,
)
from diagonals.numerics.diagonal import (
    diag_example_matrix,
    diag_inverse,
    diag_product,
    diag_sum,
    diag_to_dense,
)


def test_sum_concrete() -> None:
    np.testing.assert_array_equal(diag_sum([1.0, 2.0], [3.0, 4.0]), [4.0, 6.0])


@pytest.mark.parametrize("n", [1, 3, 17])
def test_sum_elementwise_and_commutative(rng, n: int) -> None:
    g = rng(100 + n)
    A = g.normal(size=n)
    B = g.normal(size=n)

    C = diag_sum(A, B)
    for i in range(n):
        assert C[i] == A[i] + B[i]
    np.testing.assert_array_equal(C, diag_sum(B, A))


@pytest.mark.parametrize("n", [1, 4, 9])
def test_product_matches_dense(rng, n: int) -> None:
    g = rng(200 + n)
    A = g.normal(size=n)
    B = g.normal(size=n)

    dense = diag_to_dense(A) @ diag_to_dense(B)
    np.testing.assert_allclose(diag_to_dense(diag_product(A, B)), dense)


def test_inverse_is_reciprocal() -> None:
    A = np.array([2.0, -4.0, 0.5])
    inv = diag_inverse(A)
    np.testing.assert_allclose(inv, [0.5, -0.25, 2.0])
    np.testing.assert_allclose(diag_product(A, inv), np.ones(3))


def test_inverse_rejects_zero_entry() -> None:
    with pytest.raises(SingularMatrixError) as exc:
        diag_inverse([1.0, 0.0, 3.0])
    assert exc.value.row == 1


def test_inverse_of_tiny_entries() -> None:
    inv = diag_inverse([1e-15, -1e-300, 2.0])
    assert inv[0] == pytest.approx(1e15)
    assert inv[1] == pytest.approx(-1e300)
    assert np.all(np.isfinite(inv))


def test_inverse_ignores_pivot_tolerance() -> None:
    A = [1e-3, 4.0]
    inv = diag_inverse(A, config=NumericsConfig(pivot_tol=1.0))
    np.testing.assert_allclose(inv, [1e3, 0.25])


def test_length_mismatch() -> None:
    with pytest.raises(ShapeMismatchError):
        diag_sum([1.0, 2.0], [1.0])
    with pytest.raises(ShapeMismatchError):
        diag_product([1.0], [1.0, 2.0])


def test_null_and_malformed_inputs() -> None:
    with pytest.raises(NullInputError):
        diag_sum(None, [1.0])
    with pytest.raises(NullInputError):
        diag_inverse(None)
    with pytest.raises(InvalidStructureError):
        diag_sum([[1.0, 2.0]], [[1.0, 2.0]])
    with pytest.raises(InvalidStructureError):
        diag_sum([1.0, np.nan], [1.0, 2.0])


def test_inputs_not_modified() -> None:
    A = np.array([1.0, 2.0, 3.0])
    B = np.array([4.0, 5.0, 6.0])
    C = diag_sum(A, B)
    C[0] = 100.0
    np.testing.assert_array_equal(A, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(B, [4.0, 5.0, 6.0])


def test_example_matrix() -> None:
    np.testing.assert_array_equal(diag_example_matrix(), [1.0, 2.0, 3.0, 4.0])
    assert diag_example_matrix(1).shape == (1,)
    with pytest.raises(InvalidStructureError):
        diag_example_matrix(0)
    with pytest.raises(InvalidStructureError):
        diag_example_matrix(2.5)
