"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the
parser.

1. Execution Model
Statements are executed via `execute()` and expressions are evaluated with
`eval_expr()`. Both operate over the tuples the parser builds, whose first
element names the node and whose last element is the source line. Children
are evaluated left to right, depth first, and the first error stops the
evaluation.

2. Environment
Variables live in a flat :class:`Environment`. An assignment evaluates its
right-hand side completely before binding, so a statement that fails leaves
the environment untouched.

3. Values
Scalars are floats and matrices are :class:`Matrix` instances. Operators are
delegated to `matcalc.matrix`; function calls go through the read-only
built-in table after their argument count is checked.

4. Error Handling
Runtime errors are the typed exceptions from `matcalc.exceptions`, carrying
the line of the node that failed.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from matcalc.builtins import builtin_table
from matcalc.config import Config
from matcalc.environment import Environment
from matcalc.exceptions import (
    ArityMismatchException,
    DimensionMismatchException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    MatCalcError,
    UnknownFunctionException,
)
from matcalc.matrix import Matrix, binary_op, format_number, negate
from matcalc.operations import Op


BINARY_OPS = (Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.POW)


def _left_spine(node) -> list:
    """
    Collect a chain of binary nodes nested through their left operand.

    ``1 + 2 + 3`` parses as ``((1 + 2) + 3)``. The chain is returned outermost
    first and is walked in a loop, so recursion depth does not grow with the
    number of terms.
    """
    spine = []
    while node[0] in BINARY_OPS:
        spine.append(node)
        node = node[1]
    return spine

def format_expr(node) -> str:
    """
    Convert an AST back to a readable string for debugging.

    Args:
        node (tuple): An expression or statement node.

    Returns:
        str: A fully parenthesized rendering of the node.
    """
    op = node[0]
    match op:
        case 'number':
            return format_number(node[1])
        case 'ident':
            return node[1]
        case 'matrix':
            rows = ('; '.join(', '.join(format_expr(e) for e in row) for row in node[1]))
            return f"[{rows}]"
        case 'unary':
            return f"(-{format_expr(node[2])})"
        case 'assign':
            return f"{node[1]} = {format_expr(node[2])}"
        case 'func_call':
            return f"{node[1]}({', '.join(format_expr(arg) for arg in node[2])})"
        case 'index':
            indices = ', '.join(format_expr(i) for i in node[2])
            return f"{format_expr(node[1])}[{indices}]"
        case Op.ADD | Op.SUB | Op.MUL | Op.DIV | Op.POW:
            spine = _left_spine(node)
            text = format_expr(spine[-1][1])
            for op, _, rhs, _ in reversed(spine):
                text = f"({text} {op.symbol} {format_expr(rhs)})"
            return text
        case _:
            return f"<expr {op}>"


class Interpreter:
    """Tree-walk interpreter for the matrix calculator."""

    def __init__(self, env: Environment | None = None, config: Config | None = None):
        """Initialize the interpreter."""
        self.env = env if env is not None else Environment()
        self.config = config or Config()
        self.builtins = builtin_table()

    def execute(self, stmt):
        """
        Execute a statement and return its value.

        Assignments return the assigned value, so ``a = b = 3`` yields 3 and
        binds both names.
        """
        if stmt[0] == 'assign':
            _, name, value_node, _ = stmt
            value = self.execute(value_node)
            self.env.set(name, value)
            return value
        return self.eval_expr(stmt)

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node, structured as a tuple.

        Returns:
            float | Matrix: The evaluated result of the expression.

        Raises:
            MatCalcError: On any runtime error.
        """
        op = node[0]
        line = node[-1]

        # Literals
        if op == 'number':
            return node[1]
        elif op == 'matrix':
            return self._eval_matrix(node[1], line)

        # Variables
        elif op == 'ident':
            return self.env.get(node[1], line)

        # Binary operations
        elif op in BINARY_OPS:
            spine = _left_spine(node)
            value = self.eval_expr(spine[-1][1])
            for op, _, rhs_node, line in reversed(spine):
                rhs = self.eval_expr(rhs_node)
                try:
                    value = binary_op(op, value, rhs, self.config.pivot_tolerance)
                except MatCalcError as e:
                    raise e.with_line(line)
            return value

        # Unary operator
        elif op == 'unary':
            return negate(self.eval_expr(node[2]))

        # Indexes
        elif op == 'index':
            return self._eval_index(node)

        # Function calls
        elif op == 'func_call':
            _, name, arg_nodes, _ = node
            func = self.builtins.get(name)
            if func is None:
                raise UnknownFunctionException(name, line)
            if len(arg_nodes) != func.argn:
                raise ArityMismatchException(name, func.argn, len(arg_nodes), line)
            args = [self.eval_expr(arg) for arg in arg_nodes]
            try:
                return func(args, self.config.pivot_tolerance)
            except MatCalcError as e:
                raise e.with_line(line)

        raise ValueError(f"Malformed AST node {node!r}")

    def _eval_matrix(self, row_nodes, line) -> Matrix:
        """
        Evaluate a matrix literal row by row.

        Elements must be scalars; a 1x1 matrix counts as its single element.
        """
        rows = []
        for row in row_nodes:
            values = []
            for elem in row:
                value = self.eval_expr(elem)
                if isinstance(value, Matrix):
                    if value.shape != (1, 1):
                        raise DimensionMismatchException(
                            "nest", value.shape, None, line,
                            message=(
                                f"Matrix element must be a number, "
                                f"got a {value.rows}x{value.cols} matrix"
                            ),
                        )
                    value = value.data[0]
                values.append(value)
            rows.append(values)
        try:
            return Matrix.from_rows(rows)
        except MatCalcError as e:
            raise e.with_line(line)

    def _eval_index(self, node):
        """
        Evaluate ``m[i, j]`` or ``m[i]`` with 0-based indices.

        A single index selects an element of a row or column vector and a
        row of any other matrix.
        """
        _, target_node, index_nodes, line = node
        target = self.eval_expr(target_node)
        indices = [self.eval_expr(i) for i in index_nodes]
        if not isinstance(target, Matrix):
            raise InvalidArgumentException(
                format_expr(node), "only matrices can be indexed", line
            )

        positions = []
        for index in indices:
            if isinstance(index, Matrix) and index.shape == (1, 1):
                index = index.data[0]
            if isinstance(index, Matrix) or not float(index).is_integer():
                raise InvalidArgumentException(
                    format_expr(node), "indices must be integers", line
                )
            positions.append(int(index))

        try:
            if len(positions) == 2:
                return target.get(*positions)
            (i,) = positions
            if target.rows == 1:
                return target.get(0, i)
            if target.cols == 1:
                return target.get(i, 0)
            if not 0 <= i < target.rows:
                raise IndexOutOfRangeException((i,), target.shape)
            return Matrix(1, target.cols, target.row(i))
        except MatCalcError as e:
            raise e.with_line(line)
