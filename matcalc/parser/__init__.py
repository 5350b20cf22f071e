"""Parser package for the matrix calculator.

This package splits the parser functionality into multiple modules to
keep the code organized. The :class:`Parser` class and the parse outcome
types are exposed at the package level for convenience.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from .parser import Complete, Incomplete, Malformed, Parser, parse_program

__all__ = ["Complete", "Incomplete", "Malformed", "Parser", "parse_program"]
