"""Errors.

Every error raised by the calculator derives from :class:`MatCalcError`. The
``kind`` attribute is the name shown to the user, so a session can report
``DimensionMismatch: ...`` without caring which Python class was raised.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


def _shape(shape) -> str:
    if shape is None:
        return "scalar"
    rows, cols = shape
    return f"{rows}x{cols}"


class MatCalcError(Exception):
    """
    Base class for calculator errors.
    """
    kind = "Error"

    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message += f" on line {line}"
        super().__init__(message)

    def with_line(self, line):
        """
        Attach a source line to an error raised without one.
        """
        if self.line is None and line is not None:
            self.line = line
            self.args = (f"{self.args[0]} on line {line}",)
        return self


class InvalidSyntaxException(MatCalcError):
    """
    Error for input that can never be completed into a statement.
    """
    kind = "SyntaxError"

    def __init__(self, reason, line=None, column=None):
        self.reason = reason
        self.column = column
        message = reason
        if line is not None and column is not None:
            message += f" (line {line}, column {column})"
        # Position is already part of the message
        super().__init__(message)
        self.line = line


class UnboundVariableException(MatCalcError):
    """
    Error for undefined variables.
    """
    kind = "UnboundVariable"

    def __init__(self, varname, line=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line)


class UnknownFunctionException(MatCalcError):
    """
    Error for calls to functions that are not built in.
    """
    kind = "UnknownFunction"

    def __init__(self, name, line=None):
        self.name = name
        super().__init__(f"Unknown function '{name}'", line)


class DimensionMismatchException(MatCalcError):
    """
    Error for operands whose shapes do not fit the operation.
    """
    kind = "DimensionMismatch"

    def __init__(self, op, shape_a=None, shape_b=None, line=None, message=None):
        self.op = op
        self.shape_a = shape_a
        self.shape_b = shape_b
        if message is None:
            message = f"Can't {op} {_shape(shape_a)} and {_shape(shape_b)}"
        super().__init__(message, line)


class SingularMatrixException(MatCalcError):
    """
    Error for matrices that have no inverse.
    """
    kind = "SingularMatrix"

    def __init__(self, op="invert", line=None):
        self.op = op
        super().__init__(f"Can't {op} a singular matrix", line)


class NotSquareException(SingularMatrixException):
    """
    Error for square-only operations applied to a non-square matrix.
    """
    kind = "NotSquare"

    def __init__(self, op, shape, line=None):
        self.op = op
        self.shape = shape
        MatCalcError.__init__(
            self, f"Can't {op} a non-square {_shape(shape)} matrix", line
        )


class DivisionByZeroException(MatCalcError):
    """
    Error for division by zero.
    """
    kind = "DivisionByZero"

    def __init__(self, line=None):
        super().__init__("Division by zero", line)


class ArityMismatchException(MatCalcError):
    """
    Error for calls with the wrong number of arguments.
    """
    kind = "ArityMismatch"

    def __init__(self, name, expected, got, line=None):
        self.name = name
        self.expected = expected
        self.got = got
        plural = "" if expected == 1 else "s"
        super().__init__(
            f"{name}() expects {expected} argument{plural}, got {got}", line
        )


class InvalidArgumentException(MatCalcError):
    """
    Error for operands of the wrong kind or outside an operation's domain.
    """
    kind = "InvalidArgument"

    def __init__(self, op, reason, line=None):
        self.op = op
        self.reason = reason
        super().__init__(f"{op}: {reason}", line)


class IncompleteInput(Exception):
    """
    Control flow handling for input that ends before a statement closes.

    Raised inside the parser's descent and turned into an ``Incomplete``
    outcome before the parser returns.
    """
    pass


class IndexOutOfRangeException(MatCalcError):
    """
    Error for matrix indices past the matrix bounds.
    """
    kind = "IndexOutOfRange"

    def __init__(self, index, shape, line=None):
        self.index = index
        self.shape = shape
        shown = ", ".join(str(i) for i in index)
        super().__init__(
            f"Index [{shown}] out of range for {_shape(shape)} matrix", line
        )


class RecursionLimitException(MatCalcError):
    """
    Error for expressions too deeply nested to evaluate.
    """
    kind = "RecursionError"

    def __init__(self, line=None):
        super().__init__("Expression nested too deeply to evaluate", line)
