"""Tests for the matrix value model."""

import math

import pytest

from matcalc.exceptions import (
    DimensionMismatchException,
    DivisionByZeroException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    NotSquareException,
    SingularMatrixException,
)
from matcalc.matrix import (
    Matrix,
    add,
    binary_op,
    divide,
    format_value,
    multiply,
    negate,
    power,
)
from matcalc.operations import Op


def m(rows):
    return Matrix.from_rows(rows)


def test_element_count_must_match_shape():
    with pytest.raises(ValueError):
        Matrix(2, 2, [1, 2, 3])


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(DimensionMismatchException):
        m([[1, 2], [3]])


def test_get_is_zero_based_and_bounds_checked():
    a = m([[1, 2], [3, 4]])
    assert a.get(1, 0) == 3.0
    with pytest.raises(IndexOutOfRangeException):
        a.get(2, 0)


def test_elementwise_add_and_subtract():
    a = m([[1, 2], [3, 4]])
    b = m([[10, 20], [30, 40]])
    assert add(a, b) == m([[11, 22], [33, 44]])
    assert binary_op(Op.SUB, b, a) == m([[9, 18], [27, 36]])


def test_add_requires_equal_shapes():
    with pytest.raises(DimensionMismatchException) as exc:
        add(m([[1, 2]]), m([[1, 2, 3]]))
    assert exc.value.shape_a == (1, 2)
    assert exc.value.shape_b == (1, 3)
    assert str(exc.value) == "Can't add 1x2 and 1x3"


def test_scalar_plus_matrix_is_not_broadcast():
    with pytest.raises(DimensionMismatchException):
        add(1.0, m([[1, 2]]))


def test_scalar_plus_one_by_one_matrix():
    assert add(2.0, m([[3]])) == m([[5]])


def test_matrix_product():
    a = m([[1, 2], [3, 4]])
    b = m([[5, 6], [7, 8]])
    assert multiply(a, b) == m([[19, 22], [43, 50]])
    assert multiply(m([[1, 2, 3]]), m([[1], [1], [1]])) == m([[6]])


def test_matrix_product_requires_inner_dimensions_to_agree():
    with pytest.raises(DimensionMismatchException):
        multiply(m([[1, 2, 3], [4, 5, 6]]), m([[1, 2, 3], [4, 5, 6]]))


def test_scaling_and_negation():
    a = m([[1, -2]])
    assert multiply(2.0, a) == m([[2, -4]])
    assert multiply(a, 3.0) == m([[3, -6]])
    assert negate(a) == m([[-1, 2]])
    assert negate(4.0) == -4.0


def test_division_by_zero():
    with pytest.raises(DivisionByZeroException):
        divide(1.0, 0.0)
    with pytest.raises(DivisionByZeroException):
        divide(m([[1, 2]]), 0.0)


def test_division_by_matrix_uses_inverse():
    a = m([[4, 7], [2, 6]])
    assert divide(a, a).data == pytest.approx([1, 0, 0, 1])
    assert divide(1.0, a).data == pytest.approx([0.6, -0.7, -0.2, 0.4])
    with pytest.raises(NotSquareException):
        divide(a, m([[1, 2]]))
    with pytest.raises(SingularMatrixException):
        divide(a, m([[1, 2], [2, 4]]))


def test_transpose():
    assert m([[1, 2, 3], [4, 5, 6]]).transpose() == m([[1, 4], [2, 5], [3, 6]])


def test_determinant():
    assert m([[1, 2], [3, 4]]).determinant() == pytest.approx(-2.0)
    assert m([[6, 1, 1], [4, -2, 5], [2, 8, 7]]).determinant() == pytest.approx(-306.0)
    assert m([[1, 2], [2, 4]]).determinant() == 0.0


def test_determinant_of_non_square_matrix():
    with pytest.raises(NotSquareException) as exc:
        m([[1, 2, 3]]).determinant()
    # NotSquare is a kind of singular-matrix error
    assert isinstance(exc.value, SingularMatrixException)
    assert exc.value.kind == "NotSquare"


def test_inverse():
    inv = m([[4, 7], [2, 6]]).inverse()
    assert inv.shape == (2, 2)
    assert inv.data == pytest.approx([0.6, -0.7, -0.2, 0.4])


def test_inverse_needs_pivoting():
    inv = m([[0, 1], [1, 0]]).inverse()
    assert inv == m([[0, 1], [1, 0]])


def test_singular_inverse():
    with pytest.raises(SingularMatrixException) as exc:
        m([[1, 2], [2, 4]]).inverse()
    assert exc.value.kind == "SingularMatrix"


def test_near_singular_below_tolerance():
    with pytest.raises(SingularMatrixException):
        m([[1, 1], [1, 1 + 1e-12]]).inverse()
    assert m([[1, 1], [1, 1 + 1e-6]]).inverse().shape == (2, 2)


def test_rank_rref_and_trace():
    assert m([[1, 2], [2, 4]]).rank() == 1
    assert Matrix.identity(3).rank() == 3
    assert m([[1, 2, 3], [4, 5, 6]]).rref().data == pytest.approx([1, 0, -1, 0, 1, 2])
    assert m([[1, 2], [3, 4]]).trace() == 5.0


def test_solve():
    x = m([[2, 1], [1, 3]]).solve(m([[3], [5]]))
    assert x.shape == (2, 1)
    assert x.data == pytest.approx([0.8, 1.4])
    with pytest.raises(DimensionMismatchException):
        m([[2, 1], [1, 3]]).solve(m([[1, 2, 3]]))


def test_matrix_power():
    a = m([[1, 1], [0, 1]])
    assert power(a, 3.0) == m([[1, 3], [0, 1]])
    assert power(a, 0.0) == Matrix.identity(2)
    assert power(a, -1.0) == m([[1, -1], [0, 1]])
    with pytest.raises(InvalidArgumentException):
        power(a, 0.5)
    with pytest.raises(NotSquareException):
        power(m([[1, 2]]), 2.0)


def test_scalar_power():
    assert power(2.0, 10.0) == 1024.0
    assert power(-2.0, 3.0) == -8.0
    assert power(4.0, 0.5) == 2.0
    with pytest.raises(InvalidArgumentException):
        power(-8.0, 0.5)
    with pytest.raises(DivisionByZeroException):
        power(0.0, -1.0)
    with pytest.raises(InvalidArgumentException):
        power(10.0, 1000.0)


@pytest.mark.parametrize("value, text", [
    (5.0, "5"),
    (0.1 + 0.2, "0.3"),
    (-0.0, "0"),
    (2.5, "2.5"),
    (1e20, "1e+20"),
    (math.pi, "3.14159265359"),
    (m([[1, 2], [3, 4]]), "[1, 2; 3, 4]"),
    (m([[5]]), "[5]"),
    (m([[1], [-0.5]]), "[1; -0.5]"),
])
def test_format_value(value, text):
    assert format_value(value) == text


def test_one_by_one_matrix_equals_scalar():
    assert m([[5]]) == 5.0
    assert 5.0 == m([[5]])
    assert m([[5, 5]]) != 5.0
    assert str(m([[5]])) == "[5]"


def test_one_by_one_matrix_scales_like_a_scalar():
    assert multiply(m([[1, 2]]), m([[2]])) == m([[2, 4]])
    assert multiply(m([[2]]), m([[1], [3]])) == m([[2], [6]])
    assert multiply(m([[3]]), m([[2]])) == m([[6]])
    assert divide(m([[2, 4]]), m([[2]])) == m([[1, 2]])
    assert divide(3.0, m([[2]])) == m([[1.5]])


def test_division_by_one_by_one_zero():
    with pytest.raises(DivisionByZeroException):
        divide(1.0, m([[0]]))
    with pytest.raises(DivisionByZeroException):
        divide(m([[1, 2]]), m([[0]]))


def test_one_by_one_matrix_in_power():
    assert power(2.0, m([[3]])) == 8.0
    assert power(m([[4]]), 0.5) == 2.0
    assert power(m([[1, 1], [0, 1]]), m([[2]])) == m([[1, 2], [0, 1]])
    with pytest.raises(InvalidArgumentException):
        power(2.0, m([[1, 2]]))


@pytest.mark.parametrize("op, lhs, rhs", [
    (Op.MUL, 1e308, 10.0),
    (Op.ADD, 1e308, 1e308),
    (Op.DIV, 1e308, 1e-10),
    (Op.MUL, m([[1e308, 1.0]]), 10.0),
    (Op.MUL, m([[1e308, 1e308]]), m([[1], [1]])),
    (Op.MUL, m([[1e200, -1e200]]), m([[1e200], [1e200]])),
    (Op.POW, m([[1e200, 0], [0, 1]]), 2.0),
])
def test_overflow_is_an_error(op, lhs, rhs):
    with pytest.raises(InvalidArgumentException) as exc:
        binary_op(op, lhs, rhs)
    assert "result too large" in str(exc.value)


def test_nullspace():
    assert m([[1, 2], [2, 4]]).nullspace() == m([[-2], [1]])
    assert Matrix.identity(2).nullspace() == Matrix.zeros(2, 1)
    a = m([[1, 2, 3], [4, 5, 6]])
    basis = a.nullspace()
    assert basis.shape == (3, 1)
    assert basis.data == pytest.approx([1, -2, 1])
    assert a.matmul(basis).data == pytest.approx([0, 0], abs=1e-12)


def test_nullspace_of_zero_matrix_is_everything():
    assert Matrix.zeros(2, 2).nullspace() == Matrix.identity(2)


def test_concatenation():
    assert m([[1], [2]]).hcat(m([[3], [4]])) == m([[1, 3], [2, 4]])
    assert m([[1, 2]]).vcat(m([[3, 4]])) == m([[1, 2], [3, 4]])
    with pytest.raises(DimensionMismatchException):
        m([[1, 2]]).hcat(m([[1], [2]]))
    with pytest.raises(DimensionMismatchException):
        m([[1, 2]]).vcat(m([[1, 2, 3]]))
