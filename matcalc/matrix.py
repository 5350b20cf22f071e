"""Values.

Runtime values are either scalars (plain Python ``float``) or :class:`Matrix`
instances. This module holds the matrix type, the arithmetic shared by the
interpreter's operators, and the rules for printing values.

1. Operator Semantics
- Scalar with scalar is ordinary float arithmetic; dividing by zero raises
  ``DivisionByZeroException`` instead of producing an infinity.
- Scalar times matrix scales every element. Adding a scalar to a matrix is a
  dimension mismatch, except for 1x1 matrices which behave like scalars.
- Matrix plus matrix is elementwise and needs equal shapes; matrix times
  matrix is the matrix product.
- Dividing by a matrix multiplies by its inverse.
- Next to a larger matrix, or as a divisor or exponent, a 1x1 matrix acts
  like its element.
- A result that overflows to an infinity or NaN is an error.

2. Elimination
Determinant (LU), inverse (Gauss-Jordan), rank, reduced row echelon form and
linear solve all use partial pivoting. A pivot whose magnitude is below
``PIVOT_TOLERANCE`` counts as zero.

3. Formatting
Scalars print with 12 significant digits (``-0`` prints as ``0``) and
matrices as ``[a, b; c, d]``.


File: matrix.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math

from matcalc.exceptions import (
    DimensionMismatchException,
    DivisionByZeroException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    NotSquareException,
    SingularMatrixException,
)
from matcalc.operations import Op

PIVOT_TOLERANCE = 1e-10
DEFAULT_PRECISION = 12


class Matrix:
    """
    Dense row-major matrix of floats.
    """

    __slots__ = ("rows", "cols", "data")

    def __init__(self, rows: int, cols: int, data):
        """
        Initialize a matrix.

        Parameters:
            rows (int): Row count, at least 1.
            cols (int): Column count, at least 1.
            data (Iterable[float]): ``rows * cols`` elements in row-major order.

        Raises:
            ValueError: If the element count does not match the shape.
        """
        data = [float(v) for v in data]
        if rows < 1 or cols < 1 or len(data) != rows * cols:
            raise ValueError(
                f"Matrix of shape {rows}x{cols} can't hold {len(data)} elements"
            )
        self.rows = rows
        self.cols = cols
        self.data = data

    @classmethod
    def from_rows(cls, rows: list[list[float]]) -> "Matrix":
        """
        Build a matrix from a list of equally long rows.
        """
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise DimensionMismatchException(
                    "stack rows of", (1, width), (1, len(row))
                )
        return cls(len(rows), width, [v for row in rows for v in row])

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """Return the n x n identity matrix."""
        return cls(n, n, [1.0 if i == j else 0.0 for i in range(n) for j in range(n)])

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Return a rows x cols matrix of zeros."""
        return cls(rows, cols, [0.0] * (rows * cols))

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def get(self, i: int, j: int) -> float:
        """
        Return element ``(i, j)`` (0-based).

        Raises:
            IndexOutOfRangeException: If the index is outside the matrix.
        """
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexOutOfRangeException((i, j), self.shape)
        return self.data[i * self.cols + j]

    def row(self, i: int) -> list[float]:
        return self.data[i * self.cols:(i + 1) * self.cols]

    def to_rows(self) -> list[list[float]]:
        return [self.row(i) for i in range(self.rows)]

    def map(self, func) -> "Matrix":
        """Apply ``func`` to every element."""
        return Matrix(self.rows, self.cols, [func(v) for v in self.data])

    def __eq__(self, other) -> bool:
        if isinstance(other, Matrix):
            return self.shape == other.shape and self.data == other.data
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.shape == (1, 1) and self.data[0] == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.rows}, {self.cols}, {self.data!r})"

    def __str__(self) -> str:
        return format_value(self)

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    def _require_square(self, op: str) -> None:
        if not self.is_square:
            raise NotSquareException(op, self.shape)

    def transpose(self) -> "Matrix":
        return Matrix(
            self.cols,
            self.rows,
            [self.data[i * self.cols + j] for j in range(self.cols) for i in range(self.rows)],
        )

    def trace(self) -> float:
        self._require_square("take the trace of")
        return sum(self.data[i * self.cols + i] for i in range(self.rows))

    def matmul(self, other: "Matrix") -> "Matrix":
        """
        Return the matrix product ``self * other``.

        Raises:
            DimensionMismatchException: If the inner dimensions differ.
        """
        if self.cols != other.rows:
            raise DimensionMismatchException("multiply", self.shape, other.shape)
        columns = other.transpose().to_rows()
        try:
            data = [
                math.fsum(a * b for a, b in zip(row, column))
                for row in self.to_rows()
                for column in columns
            ]
        except (OverflowError, ValueError) as e:
            # fsum rejects intermediate overflow and inf + -inf
            raise InvalidArgumentException("*", "result too large") from e
        return Matrix(self.rows, other.cols, data)

    def determinant(self, tolerance: float = PIVOT_TOLERANCE) -> float:
        """
        Calculate the determinant by LU decomposition with partial pivoting.

        Returns:
            float: The determinant, exactly ``0.0`` when a pivot vanishes.

        Raises:
            NotSquareException: If the matrix is not square.
        """
        self._require_square("take the determinant of")
        a = self.to_rows()
        n = self.rows
        det = 1.0
        for col in range(n):
            pivot = max(range(col, n), key=lambda r: abs(a[r][col]))
            if abs(a[pivot][col]) < tolerance:
                return 0.0
            if pivot != col:
                a[col], a[pivot] = a[pivot], a[col]
                det = -det
            det *= a[col][col]
            for r in range(col + 1, n):
                factor = a[r][col] / a[col][col]
                if factor:
                    a[r] = [x - factor * y for x, y in zip(a[r], a[col])]
        return det

    def inverse(self, tolerance: float = PIVOT_TOLERANCE) -> "Matrix":
        """
        Invert the matrix by Gauss-Jordan elimination with partial pivoting.

        Raises:
            NotSquareException: If the matrix is not square.
            SingularMatrixException: If a pivot falls below ``tolerance``.
        """
        self._require_square("invert")
        n = self.rows
        identity = Matrix.identity(n)
        augmented = [self.row(i) + identity.row(i) for i in range(n)]
        _gauss_jordan(augmented, n, tolerance, "invert")
        return Matrix(n, n, [v for row in augmented for v in row[n:]])

    def solve(self, rhs: "Matrix", tolerance: float = PIVOT_TOLERANCE) -> "Matrix":
        """
        Solve ``self * x = rhs`` for a unique ``x``.

        Raises:
            NotSquareException: If the coefficient matrix is not square.
            DimensionMismatchException: If ``rhs`` has the wrong row count.
            SingularMatrixException: If there is no unique solution.
        """
        self._require_square("solve with")
        if rhs.rows != self.rows:
            raise DimensionMismatchException("solve", self.shape, rhs.shape)
        n = self.rows
        augmented = [self.row(i) + rhs.row(i) for i in range(n)]
        _gauss_jordan(augmented, n, tolerance, "solve with")
        return Matrix(n, rhs.cols, [v for row in augmented for v in row[n:]])

    def rref(self, tolerance: float = PIVOT_TOLERANCE) -> "Matrix":
        """
        Return the reduced row echelon form.
        """
        a, _ = _row_reduce(self.to_rows(), self.cols, tolerance)
        return Matrix(self.rows, self.cols, [v for row in a for v in row])

    def rank(self, tolerance: float = PIVOT_TOLERANCE) -> int:
        _, pivots = _row_reduce(self.to_rows(), self.cols, tolerance)
        return len(pivots)

    def nullspace(self, tolerance: float = PIVOT_TOLERANCE) -> "Matrix":
        """
        Return a basis of the null space, one basis vector per column.

        Each free column of the reduced row echelon form contributes one
        vector. When the null space is only ``{0}`` the result is a single
        zero column.
        """
        a, pivots = _row_reduce(self.to_rows(), self.cols, tolerance)
        free = [j for j in range(self.cols) if j not in pivots]
        if not free:
            return Matrix.zeros(self.cols, 1)
        basis = []
        for f in free:
            vector = [0.0] * self.cols
            vector[f] = 1.0
            for r, p in enumerate(pivots):
                vector[p] = -a[r][f]
            basis.append(vector)
        return Matrix(len(basis), self.cols, [v for vec in basis for v in vec]).transpose()

    def hcat(self, other: "Matrix") -> "Matrix":
        """
        Place ``other`` to the right of this matrix.

        Raises:
            DimensionMismatchException: If the row counts differ.
        """
        if self.rows != other.rows:
            raise DimensionMismatchException("hcat", self.shape, other.shape)
        return Matrix(
            self.rows,
            self.cols + other.cols,
            [v for i in range(self.rows) for v in self.row(i) + other.row(i)],
        )

    def vcat(self, other: "Matrix") -> "Matrix":
        """
        Place ``other`` below this matrix.

        Raises:
            DimensionMismatchException: If the column counts differ.
        """
        if self.cols != other.cols:
            raise DimensionMismatchException("vcat", self.shape, other.shape)
        return Matrix(self.rows + other.rows, self.cols, self.data + other.data)


def _gauss_jordan(a: list[list[float]], n: int, tolerance: float, op: str) -> None:
    """
    Reduce the left n x n block of ``a`` to the identity, in place.
    """
    for col in range(n):
        pivot = max(range(col, n), key=lambda r: abs(a[r][col]))
        if abs(a[pivot][col]) < tolerance:
            raise SingularMatrixException(op)
        a[col], a[pivot] = a[pivot], a[col]
        p = a[col][col]
        a[col] = [v / p for v in a[col]]
        for r in range(n):
            factor = a[r][col]
            if r != col and factor:
                a[r] = [x - factor * y for x, y in zip(a[r], a[col])]


def _row_reduce(a: list[list[float]], cols: int, tolerance: float):
    """
    Bring ``a`` to reduced row echelon form in place.

    Returns:
        tuple: The reduced rows and the list of pivot columns.
    """
    pivots = []
    for col in range(cols):
        pivot_row = len(pivots)
        if pivot_row == len(a):
            break
        pivot = max(range(pivot_row, len(a)), key=lambda r: abs(a[r][col]))
        if abs(a[pivot][col]) < tolerance:
            for r in range(pivot_row, len(a)):
                a[r][col] = 0.0
            continue
        a[pivot_row], a[pivot] = a[pivot], a[pivot_row]
        p = a[pivot_row][col]
        a[pivot_row] = [v / p for v in a[pivot_row]]
        for r in range(len(a)):
            factor = a[r][col]
            if r != pivot_row and factor:
                a[r] = [x - factor * y for x, y in zip(a[r], a[pivot_row])]
        pivots.append(col)
    for row in a:
        for j, v in enumerate(row):
            if abs(v) < tolerance:
                row[j] = 0.0
    return a, pivots


# ----------------------------------------------------------------------
# Operators
# ----------------------------------------------------------------------

def shape_of(value):
    """Return ``(rows, cols)`` for a matrix, ``None`` for a scalar."""
    return value.shape if isinstance(value, Matrix) else None


def _as_matrix(value) -> Matrix:
    if isinstance(value, Matrix):
        return value
    return Matrix(1, 1, [value])


def add(lhs, rhs, op: Op = Op.ADD):
    """
    Add or subtract two values elementwise.

    Raises:
        DimensionMismatchException: If the shapes differ.
    """
    sign = 1.0 if op == Op.ADD else -1.0
    if not isinstance(lhs, Matrix) and not isinstance(rhs, Matrix):
        return lhs + sign * rhs
    verb = "add" if op == Op.ADD else "subtract"
    # A 1x1 matrix stands in for a scalar
    if _scalar_like(lhs) and _scalar_like(rhs):
        lhs, rhs = _as_matrix(lhs), _as_matrix(rhs)
    if shape_of(lhs) != shape_of(rhs):
        raise DimensionMismatchException(verb, shape_of(lhs), shape_of(rhs))
    return Matrix(
        lhs.rows, lhs.cols, [a + sign * b for a, b in zip(lhs.data, rhs.data)]
    )


def _unwrap(value):
    """Return the element of a 1x1 matrix, anything else unchanged."""
    if isinstance(value, Matrix) and value.shape == (1, 1):
        return value.data[0]
    return value


def _scalar_like(value) -> bool:
    return shape_of(value) in (None, (1, 1))


def multiply(lhs, rhs):
    """
    Multiply two values.

    A scalar (or a 1x1 matrix next to a larger one) scales every element;
    two matrices form the matrix product.
    """
    if isinstance(lhs, Matrix) and isinstance(rhs, Matrix):
        if _scalar_like(lhs) != _scalar_like(rhs):
            lhs, rhs = _unwrap(lhs), _unwrap(rhs)
        else:
            return lhs.matmul(rhs)
    if isinstance(lhs, Matrix):
        return lhs.map(lambda v: v * rhs)
    if isinstance(rhs, Matrix):
        return rhs.map(lambda v: lhs * v)
    return lhs * rhs


def divide(lhs, rhs, tolerance: float = PIVOT_TOLERANCE):
    """
    Divide two values; division by a matrix multiplies by its inverse.

    A 1x1 divisor divides like its element.

    Raises:
        DivisionByZeroException: When dividing by a scalar zero.
        NotSquareException: When dividing by a non-square matrix.
        SingularMatrixException: When dividing by a singular matrix.
    """
    if isinstance(rhs, Matrix) and rhs.shape == (1, 1):
        if isinstance(lhs, Matrix):
            return divide(lhs, rhs.data[0])
        return _as_matrix(divide(lhs, rhs.data[0]))
    if isinstance(rhs, Matrix):
        return multiply(lhs, rhs.inverse(tolerance))
    if rhs == 0:
        raise DivisionByZeroException()
    if isinstance(lhs, Matrix):
        return lhs.map(lambda v: v / rhs)
    return lhs / rhs


def negate(value):
    if isinstance(value, Matrix):
        return value.map(lambda v: -v)
    return -value


def power(base, exponent, tolerance: float = PIVOT_TOLERANCE):
    """
    Raise ``base`` to ``exponent``.

    Scalars use real exponentiation. Square matrices accept integer
    exponents; negative exponents raise the inverse. A 1x1 matrix on either
    side is raised like its element.
    """
    if isinstance(exponent, Matrix):
        if exponent.shape != (1, 1):
            raise InvalidArgumentException("^", "exponent must be a scalar")
        result = power(base, exponent.data[0], tolerance)
        return result if isinstance(result, Matrix) else _as_matrix(result)

    if isinstance(base, Matrix) and base.shape == (1, 1):
        return _as_matrix(power(base.data[0], exponent, tolerance))

    if isinstance(base, Matrix):
        if not base.is_square:
            raise NotSquareException("raise to a power", base.shape)
        if not float(exponent).is_integer():
            raise InvalidArgumentException("^", "matrix exponent must be an integer")
        n = int(exponent)
        if n < 0:
            base, n = base.inverse(tolerance), -n
        result = Matrix.identity(base.rows)
        while n:
            if n & 1:
                result = result.matmul(base)
            n >>= 1
            if n:
                base = base.matmul(base)
        return result

    if base == 0 and exponent < 0:
        raise DivisionByZeroException()
    if base < 0 and not float(exponent).is_integer():
        raise InvalidArgumentException(
            "^", "negative base needs an integer exponent"
        )
    try:
        return math.pow(base, exponent)
    except OverflowError as e:
        raise InvalidArgumentException("^", "result too large") from e


def check_finite(value, op: str):
    """
    Reject results that overflowed to an infinity or NaN.

    Raises:
        InvalidArgumentException: If ``value`` (or any element) is not finite.
    """
    data = value.data if isinstance(value, Matrix) else (value,)
    if not all(math.isfinite(v) for v in data):
        raise InvalidArgumentException(op, "result too large")
    return value


def binary_op(op: Op, lhs, rhs, tolerance: float = PIVOT_TOLERANCE):
    """
    Dispatch a binary operator to its implementation.
    """
    match op:
        case Op.ADD | Op.SUB:
            result = add(lhs, rhs, op)
        case Op.MUL:
            result = multiply(lhs, rhs)
        case Op.DIV:
            result = divide(lhs, rhs, tolerance)
        case Op.POW:
            result = power(lhs, rhs, tolerance)
        case _:
            raise ValueError(f"Unknown binary operator '{op}'")
    return check_finite(result, op.symbol)


# ----------------------------------------------------------------------
# Formatting
# ----------------------------------------------------------------------

def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Format a scalar with ``precision`` significant digits.
    """
    if value == 0:
        value = 0.0
    return format(value, f".{precision}g")


def format_value(value, precision: int = DEFAULT_PRECISION) -> str:
    """
    Format a scalar as a plain number and a matrix as ``[a, b; c, d]``.
    """
    if isinstance(value, Matrix):
        rows = (
            ", ".join(format_number(v, precision) for v in row)
            for row in value.to_rows()
        )
        return "[" + "; ".join(rows) + "]"
    return format_number(value, precision)
