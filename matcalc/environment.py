"""Variable environment.

A single flat namespace of session bindings. Names are case-sensitive and the
last assignment wins; there is no scoping and no deletion.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from matcalc.exceptions import UnboundVariableException


class Environment:
    """Mapping from variable names to values."""

    def __init__(self, bindings: dict | None = None):
        self.vars = dict(bindings or {})

    def get(self, name: str, line=None):
        """
        Look up a variable.

        Raises:
            UnboundVariableException: If ``name`` was never assigned.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise UnboundVariableException(name, line) from None

    def set(self, name: str, value) -> None:
        self.vars[name] = value

    def __contains__(self, name) -> bool:
        return name in self.vars

    def snapshot(self) -> dict:
        """Return a shallow copy of the bindings."""
        return dict(self.vars)
