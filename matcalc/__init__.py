"""Little Mat Calculator.

An interactive calculator language for scalar and matrix arithmetic, driven
one fragment of text at a time.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

__version__ = "0.1.0"

from matcalc.host import (  # noqa: E402
    evaluate,
    init,
    intp_eval,
    intp_init,
    new_session,
    standby_prompt,
    startup_text,
)
from matcalc.session import EvalResult, Session  # noqa: E402

__all__ = [
    "EvalResult",
    "Session",
    "evaluate",
    "init",
    "intp_eval",
    "intp_init",
    "new_session",
    "standby_prompt",
    "startup_text",
]
