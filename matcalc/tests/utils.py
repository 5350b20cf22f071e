"""
Utility functions shared across matrix calculator tests.
"""
from pathlib import Path
import sys

from matcalc.interpreter import Interpreter
from matcalc.lexer import tokenize
from matcalc.parser import Complete, parse_program

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str):
    """
    Parse source code and return the list of statement nodes.
    """
    outcome = parse_program(tokenize(source))
    assert isinstance(outcome, Complete), outcome
    return outcome.node


def run_source(source: str, interpreter: Interpreter | None = None):
    """
    Execute every statement and return the value of the last one.
    """
    interpreter = interpreter or Interpreter()
    value = None
    for stmt in parse_source(source):
        value = interpreter.execute(stmt)
    return value
