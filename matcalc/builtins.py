"""Built-in functions and constants.

The built-in table maps a function name to a :class:`BuiltinFunction`
holding its arity, implementation and help text. It is built once by
:func:`init` and exposed as a read-only mapping, so every session can share
it.

Each implementation receives the already evaluated argument list (the
interpreter has checked the arity) and the pivot tolerance, and raises
``InvalidArgumentException`` when an argument has the wrong kind.


File: builtins.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from matcalc.exceptions import InvalidArgumentException
from matcalc.matrix import Matrix, check_finite, divide, power

CONSTANTS: Mapping[str, float] = MappingProxyType({
    "e": math.e,
    "pi": math.pi,
})


@dataclass(frozen=True)
class BuiltinFunction:
    """Runtime representation of a built-in function."""
    name: str
    argn: int
    func: Callable
    help: str

    def __call__(self, args: list, tolerance: float):
        return check_finite(self.func(self.name, args, tolerance), f"{self.name}()")


def _matrix(name: str, value) -> Matrix:
    if not isinstance(value, Matrix):
        raise InvalidArgumentException(f"{name}()", "expects a matrix")
    return value


def _scalar(name: str, value) -> float:
    if isinstance(value, Matrix):
        if value.shape == (1, 1):
            return value.data[0]
        raise InvalidArgumentException(f"{name}()", "expects a number")
    return value


def _count(name: str, value) -> int:
    value = _scalar(name, value)
    if not float(value).is_integer() or value < 1:
        raise InvalidArgumentException(f"{name}()", "expects a positive integer")
    return int(value)


def _block(value) -> Matrix:
    if isinstance(value, Matrix):
        return value
    return Matrix(1, 1, [value])


def _index(name: str, value) -> int:
    value = _scalar(name, value)
    if not float(value).is_integer():
        raise InvalidArgumentException(f"{name}()", "indices must be integers")
    return int(value)


# ----------------------------------------------------------------------
# Matrix functions
# ----------------------------------------------------------------------

def _det(name, args, tolerance):
    return _matrix(name, args[0]).determinant(tolerance)


def _inv(name, args, tolerance):
    if isinstance(args[0], Matrix):
        return args[0].inverse(tolerance)
    return divide(1.0, args[0])


def _transpose(name, args, tolerance):
    if isinstance(args[0], Matrix):
        return args[0].transpose()
    return args[0]


def _trace(name, args, tolerance):
    return _matrix(name, args[0]).trace()


def _rank(name, args, tolerance):
    return float(_matrix(name, args[0]).rank(tolerance))


def _rref(name, args, tolerance):
    return _matrix(name, args[0]).rref(tolerance)


def _solve(name, args, tolerance):
    a = _matrix(name, args[0])
    return a.solve(_block(args[1]), tolerance)


def _nullspace(name, args, tolerance):
    return _matrix(name, args[0]).nullspace(tolerance)


def _hcat(name, args, tolerance):
    return _block(args[0]).hcat(_block(args[1]))


def _vcat(name, args, tolerance):
    return _block(args[0]).vcat(_block(args[1]))


def _identity(name, args, tolerance):
    return Matrix.identity(_count(name, args[0]))


def _zeros(name, args, tolerance):
    return Matrix.zeros(_count(name, args[0]), _count(name, args[1]))


def _get(name, args, tolerance):
    m = _matrix(name, args[0])
    return m.get(_index(name, args[1]), _index(name, args[2]))


def _rows(name, args, tolerance):
    return float(_matrix(name, args[0]).rows)


def _cols(name, args, tolerance):
    return float(_matrix(name, args[0]).cols)


# ----------------------------------------------------------------------
# Numeric functions
# ----------------------------------------------------------------------

def _abs(name, args, tolerance):
    if isinstance(args[0], Matrix):
        return args[0].map(abs)
    return abs(args[0])


def _sqrt(name, args, tolerance):
    x = _scalar(name, args[0])
    if x < 0:
        raise InvalidArgumentException(f"{name}()", "argument must not be negative")
    return math.sqrt(x)


def _exp(name, args, tolerance):
    try:
        return math.exp(_scalar(name, args[0]))
    except OverflowError as e:
        raise InvalidArgumentException(f"{name}()", "result too large") from e


def _log(name, args, tolerance):
    base, x = _scalar(name, args[0]), _scalar(name, args[1])
    if base <= 0 or base == 1 or x <= 0:
        raise InvalidArgumentException(
            f"{name}()", "needs a positive base other than 1 and a positive argument"
        )
    return math.log(x, base)


def _pow(name, args, tolerance):
    return power(args[0], args[1], tolerance)


_EXPORTS = [
    ("det", 1, _det, "Calculate the determinant of a square matrix."),
    ("inv", 1, _inv, "Calculate the inverse of an invertible matrix, or 1/x for a number."),
    ("transpose", 1, _transpose, "Transpose a matrix."),
    ("trace", 1, _trace, "Calculate the trace of a square matrix."),
    ("rank", 1, _rank, "Calculate the rank of a matrix."),
    ("rref", 1, _rref, "Calculate the reduced row echelon form of a matrix."),
    ("solve", 2, _solve, "Usage: solve(A, b). Solve the linear equation A x = b for a unique x."),
    ("nullspace", 1, _nullspace, "Return a basis of the null space of a matrix as columns, or a zero column if it is {0}."),
    ("hcat", 2, _hcat, "Usage: hcat(A, B). Place B to the right of A; numbers count as 1x1."),
    ("vcat", 2, _vcat, "Usage: vcat(A, B). Place B below A; numbers count as 1x1."),
    ("identity", 1, _identity, "Usage: identity(n). Return the n x n identity matrix."),
    ("zeros", 2, _zeros, "Usage: zeros(r, c). Return an r x c matrix of zeros."),
    ("get", 3, _get, "Usage: get(m, i, j). Get the (i, j) element of m, counting from 0."),
    ("rows", 1, _rows, "Return the number of rows of a matrix."),
    ("cols", 1, _cols, "Return the number of columns of a matrix."),
    ("abs", 1, _abs, "Absolute value of a number, or of every element of a matrix."),
    ("sqrt", 1, _sqrt, "Square root of a non-negative number."),
    ("exp", 1, _exp, "e raised to a number."),
    ("log", 2, _log, "Usage: log(b, x). Logarithm of x in base b."),
    ("pow", 2, _pow, "Usage: pow(x, n). Same as x ^ n."),
]

_TABLE: Mapping[str, BuiltinFunction] | None = None


def init() -> Mapping[str, BuiltinFunction]:
    """
    Build the built-in function table. Calling it again is a no-op.

    Returns:
        Mapping[str, BuiltinFunction]: The read-only table.
    """
    global _TABLE
    if _TABLE is None:
        _TABLE = MappingProxyType({
            name: BuiltinFunction(name, argn, func, help_text)
            for name, argn, func, help_text in _EXPORTS
        })
    return _TABLE


def builtin_table() -> Mapping[str, BuiltinFunction]:
    """Return the built-in table, building it on first use."""
    return _TABLE if _TABLE is not None else init()


def help_text() -> str:
    """
    Describe every built-in function and constant.
    """
    lines = ["BUILT-IN FUNCTIONS"]
    for fn in builtin_table().values():
        params = ", ".join("xyz"[i] for i in range(fn.argn))
        lines.append(f"    {fn.name}({params})")
        lines.append(f"        {fn.help}")
    lines.append("")
    lines.append("CONSTANTS")
    lines.append("    " + ", ".join(CONSTANTS))
    return "\n".join(lines)
