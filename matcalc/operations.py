"""Shared definitions for AST operation identifiers.

This module centralizes the constants used by the parser and interpreter to
label operator nodes in the abstract syntax tree. Keeping them in one place
prevents the two components from drifting apart when new operations are
added or existing ones are renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported AST operation names.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"

    # Unary
    NEG = "neg"

    @property
    def symbol(self) -> str:
        """
        Return the source spelling of the operator.
        """
        return _SYMBOLS[self]

    def __str__(self) -> str:
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


_SYMBOLS = {
    Op.ADD: "+",
    Op.SUB: "-",
    Op.MUL: "*",
    Op.DIV: "/",
    Op.POW: "^",
    Op.NEG: "-",
}


__all__ = ["Op"]
