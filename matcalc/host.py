"""Host entry points.

These are the functions a host (terminal, web page, test harness) calls:
``init`` once, ``startup_text`` and ``standby_prompt`` for display, and
``evaluate`` for every fragment of input. ``intp_init`` and ``intp_eval``
drive a single process-wide session for hosts that do not keep a session
object themselves.


File: host.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import platform

from matcalc import __version__, builtins
from matcalc.config import Config
from matcalc.session import STANDBY_PROMPT, EvalResult, Session

_STARTUP_TEXT = (
    f"Little Mat Calculator {__version__} "
    f"[Python {platform.python_version()}] on {platform.system() or 'unknown'}\n"
    "Type .help to get help"
)

_DEFAULT_SESSION: Session | None = None


def init() -> None:
    """
    Build the shared built-in function table. Safe to call more than once.
    """
    builtins.init()


def startup_text() -> str:
    """Return the banner shown when a host starts."""
    return _STARTUP_TEXT


def standby_prompt() -> str:
    """Return the prompt shown while no input is pending."""
    return STANDBY_PROMPT


def new_session(config: Config | None = None) -> Session:
    """Create an independent session."""
    init()
    return Session(config)


def evaluate(session: Session, fragment: str) -> EvalResult:
    """
    Feed one fragment of source text to ``session``.
    """
    return session.evaluate(fragment)


def intp_init() -> None:
    """
    Create (or recreate) the process-wide default session.
    """
    global _DEFAULT_SESSION
    init()
    _DEFAULT_SESSION = Session()


def intp_eval(src: str) -> EvalResult:
    """
    Evaluate ``src`` in the default session, creating it on first use.
    """
    if _DEFAULT_SESSION is None:
        intp_init()
    return _DEFAULT_SESSION.evaluate(src)
