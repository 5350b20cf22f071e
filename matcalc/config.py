"""Interpreter configuration.

Settings are plain dataclass fields with fixed defaults. ``Config.from_env``
overrides them from ``MATCALC_*`` environment variables.


File: config.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import os
from dataclasses import dataclass

from matcalc.matrix import DEFAULT_PRECISION, PIVOT_TOLERANCE


@dataclass(frozen=True)
class Config:
    """
    Interpreter settings.

    Attributes:
        precision (int): Significant digits used when printing numbers.
        pivot_tolerance (float): Pivots smaller than this count as zero.
        debug (bool): Print tokens and AST and log at DEBUG in the terminal host.
    """
    precision: int = DEFAULT_PRECISION
    pivot_tolerance: float = PIVOT_TOLERANCE
    debug: bool = False

    def __post_init__(self):
        if self.precision < 1:
            raise ValueError(f"precision must be at least 1, got {self.precision}")
        if self.pivot_tolerance < 0:
            raise ValueError(
                f"pivot_tolerance must not be negative, got {self.pivot_tolerance}"
            )

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        """
        Read settings from the environment.

        Recognised variables are ``MATCALC_PRECISION``,
        ``MATCALC_PIVOT_TOLERANCE`` and ``MATCALC_DEBUG`` (any non-empty value
        turns debugging on).

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        environ = os.environ if environ is None else environ
        precision = environ.get("MATCALC_PRECISION")
        tolerance = environ.get("MATCALC_PIVOT_TOLERANCE")
        return cls(
            precision=int(precision) if precision else DEFAULT_PRECISION,
            pivot_tolerance=float(tolerance) if tolerance else PIVOT_TOLERANCE,
            debug=bool(environ.get("MATCALC_DEBUG")),
        )
