"""REPL session.

A session owns one environment and a buffer of pending input fragments. It
is a two-state machine:

- ``IDLE``: the buffer is empty and the next fragment starts a statement.
- ``AWAITING``: the buffer holds a valid prefix that needs more input.

Every call to :meth:`Session.evaluate` appends the fragment to the buffer,
tokenizes and parses the whole buffer, then applies :meth:`Session.transition`
to the parse outcome:

- Incomplete: keep the buffer, return empty output and the continuation
  prompt.
- Malformed: clear the buffer, report the syntax error, return the standby
  prompt.
- Complete: clear the buffer, evaluate the statements in order and report
  one line per statement (or the first runtime error), return the standby
  prompt.


File: session.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from dataclasses import dataclass
from enum import Enum

from matcalc import builtins
from matcalc.config import Config
from matcalc.environment import Environment
from matcalc.exceptions import MatCalcError, RecursionLimitException
from matcalc.interpreter import Interpreter
from matcalc.lexer import tokenize
from matcalc.matrix import format_value
from matcalc.parser import Complete, Incomplete, Malformed, parse_program

logger = logging.getLogger(__name__)

STANDBY_PROMPT = "> "
PENDING_PROMPT = ". "
RESULT_PROMPT = "=> "
ERROR_PROMPT = "! "


class State(str, Enum):
    """
    Session states.
    """
    IDLE = "idle"
    AWAITING = "awaiting"


@dataclass(frozen=True)
class EvalResult:
    """
    Result of feeding one fragment to a session.

    Attributes:
        output (str): Text to show; empty while input is incomplete.
        prompt (str): Prompt to show before the next fragment.
        error (bool): True when ``output`` reports an error.
    """
    output: str
    prompt: str
    error: bool = False


def format_error(error: MatCalcError) -> str:
    """
    Render an error as ``Kind: message``.
    """
    return f"{error.kind}: {error}"


class Session:
    """One interpreter session spanning many evaluation calls."""

    def __init__(self, config: Config | None = None):
        builtins.init()
        self.config = config or Config()
        self.env = Environment(builtins.CONSTANTS)
        self.interpreter = Interpreter(self.env, self.config)
        self.buffer: list[str] = []

    @property
    def state(self) -> State:
        return State.AWAITING if self.buffer else State.IDLE

    @property
    def prompt(self) -> str:
        """Prompt matching the current state."""
        return PENDING_PROMPT if self.buffer else STANDBY_PROMPT

    def pending_source(self) -> str:
        return "\n".join(self.buffer)

    def reset(self) -> None:
        """
        Drop pending input and every binding except the constants.
        """
        self.buffer.clear()
        self.env = Environment(builtins.CONSTANTS)
        self.interpreter = Interpreter(self.env, self.config)

    def evaluate(self, fragment: str) -> EvalResult:
        """
        Feed one fragment of source text.

        Parameters:
            fragment (str): Text typed or pasted by the user. It is joined to
                pending input with a newline.

        Returns:
            EvalResult: The output and the prompt for the next fragment.
        """
        self.buffer.append(fragment)
        tokens = tokenize(self.pending_source())
        try:
            outcome = parse_program(tokens)
        except RecursionError:
            self.buffer.clear()
            error = RecursionLimitException(tokens[-1].line)
            return EvalResult(format_error(error), STANDBY_PROMPT, error=True)
        return self.transition(outcome)

    def transition(self, outcome: Complete | Incomplete | Malformed) -> EvalResult:
        """
        Apply a parse outcome of the pending buffer to the session.
        """
        match outcome:
            case Incomplete():
                logger.debug("%s -> awaiting (%d fragments)", self.state.value, len(self.buffer))
                return EvalResult("", PENDING_PROMPT)
            case Malformed():
                self.buffer.clear()
                error = outcome.to_exception()
                logger.debug("malformed input: %s", error)
                return EvalResult(format_error(error), STANDBY_PROMPT, error=True)
            case Complete(node=statements):
                self.buffer.clear()
                return self.run(statements)
        raise TypeError(f"Unknown parse outcome {outcome!r}")

    def run(self, statements: list) -> EvalResult:
        """
        Evaluate parsed statements in order, stopping at the first error.

        Statements evaluated before a failing one keep their effect.
        """
        lines = []
        for stmt in statements:
            try:
                value = self.interpreter.execute(stmt)
            except MatCalcError as e:
                error = e
            except RecursionError:
                error = RecursionLimitException(stmt[-1])
            else:
                lines.append(format_value(value, self.config.precision))
                continue
            logger.debug("evaluation failed: %s", error)
            lines.append(format_error(error))
            return EvalResult("\n".join(lines), STANDBY_PROMPT, error=True)
        return EvalResult("\n".join(lines), STANDBY_PROMPT)
