"""
Main parser entry point for the matrix calculator.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`matcalc.parser.expressions` and `matcalc.parser.statements`.

A parse attempt has three outcomes, returned as values rather than raised:

- :class:`Complete` carries the AST and the tokens left after it.
- :class:`Incomplete` means the tokens are a valid prefix that ran out while
  a bracket was still open or an operand was still expected. A REPL should
  ask for more input.
- :class:`Malformed` means no amount of extra input can fix the tokens.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from matcalc.exceptions import IncompleteInput, InvalidSyntaxException
from matcalc.lexer import TOKEN_LITERALS, Token

from . import expressions as _expr
from . import statements as _stmt

# Deepest nesting of groups, unary minus, exponents and assignments
MAX_NESTING = 32


@dataclass(frozen=True)
class Complete:
    """A fully parsed statement (or program) and the tokens after it."""
    node: Any
    remaining: list = field(default_factory=list)


@dataclass(frozen=True)
class Incomplete:
    """The tokens end before the statement closes."""


@dataclass(frozen=True)
class Malformed:
    """The tokens can never form a valid statement."""
    position: tuple[int, int]
    reason: str

    def to_exception(self) -> InvalidSyntaxException:
        """
        Build the syntax error reported to the user.
        """
        line, column = self.position
        return InvalidSyntaxException(self.reason, line, column)


class Parser:
    """Matrix calculator parser."""

    def __init__(self, tokens: list[Token]):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with EOF.
        """
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        # Open groups: 'paren' ignores newlines, 'matrix' uses them as row breaks
        self.groups: list[str] = []
        self.depth = 0

    def advance(self) -> None:
        """
        Move to the next token, skipping newlines inside parentheses.
        """
        self.position += 1
        self.curr_token = self.tokens[self.position]
        if self.groups and self.groups[-1] == 'paren':
            self.skip('NEWLINE')

    def eat(self, token_type: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.

        Returns:
            Token: The consumed token.

        Raises:
            IncompleteInput: If input ended before the expected token.
            InvalidSyntaxException: If a different token was found.
        """
        tok = self.curr_token
        if tok.type == token_type:
            self.advance()
            return tok
        if tok.type == 'EOF':
            raise IncompleteInput()
        expected = TOKEN_LITERALS.get(token_type, token_type)
        raise self.error(f"Expected '{expected}' but got {self.describe(tok)}", tok)

    def skip(self, *token_types: str) -> None:
        """
        Consume any run of tokens of the given types.
        """
        while self.curr_token.type in token_types:
            self.position += 1
            self.curr_token = self.tokens[self.position]

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` places ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def expect_operand(self) -> None:
        """
        Skip newlines before an operand and report running out of input.
        """
        self.skip('NEWLINE')
        if self.curr_token.type == 'EOF':
            raise IncompleteInput()

    def enter(self, group: str) -> None:
        """
        Open a bracketed group.
        """
        self.groups.append(group)
        if group == 'paren':
            self.skip('NEWLINE')

    def leave(self) -> None:
        """
        Close the innermost bracketed group.
        """
        self.groups.pop()

    @contextmanager
    def nested(self):
        """
        Track one level of recursive descent.

        Raises:
            InvalidSyntaxException: Past ``MAX_NESTING`` levels.
        """
        self.depth += 1
        try:
            if self.depth > MAX_NESTING:
                raise self.error("Expression nested too deeply")
            yield
        finally:
            self.depth -= 1

    @staticmethod
    def describe(tok: Token) -> str:
        """
        Describe a token for an error message.
        """
        match tok.type:
            case 'EOF':
                return 'end of input'
            case 'NEWLINE':
                return 'newline'
            case 'NUMBER':
                return f"number {tok.value:g}"
            case 'ID':
                return f"identifier '{tok.value}'"
            case _:
                return f"'{tok.value}'"

    def error(self, reason: str, tok: Token | None = None) -> InvalidSyntaxException:
        """
        Build a syntax error positioned at ``tok`` (default: current token).
        """
        tok = tok or self.curr_token
        return InvalidSyntaxException(reason, tok.line, tok.column)

    # Expression wrappers
    def primary(self) -> tuple:
        """
        Parse a literal, variable, call, parenthesized group or matrix.
        """
        return _expr.parse_primary(self)

    def matrix(self) -> tuple:
        """
        Parse a matrix literal such as ``[1, 2; 3, 4]``.
        """
        return _expr.parse_matrix(self)

    def postfix(self) -> tuple:
        """
        Parse indexing applied to a primary.
        """
        return _expr.parse_postfix(self)

    def power(self) -> tuple:
        """
        Parse exponentiation.
        """
        return _expr.parse_power(self)

    def unary(self) -> tuple:
        """
        Parse unary minus.
        """
        with self.nested():
            return _expr.parse_unary(self)

    def term(self) -> tuple:
        """
        Parse a term in an expression, involving multiplication or division.
        """
        return _expr.parse_term(self)

    def expr(self) -> tuple:
        """
        Parse a full arithmetic expression.
        """
        return _expr.parse_expr(self)

    # Statement wrappers
    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        with self.nested():
            return _stmt.parse_statement(self)

    def parse_assignment(self) -> tuple:
        """
        Parse a variable assignment statement.
        """
        return _stmt.parse_assignment(self)

    def parse_statement(self) -> Complete | Incomplete | Malformed:
        """
        Parse one statement starting at the current token.

        Returns:
            Complete | Incomplete | Malformed: The parse outcome.
        """
        start = self.position
        try:
            node = self.statement()
            _stmt.expect_terminator(self)
        except IncompleteInput:
            self.position = start
            self.curr_token = self.tokens[start]
            self.groups.clear()
            return Incomplete()
        except InvalidSyntaxException as e:
            return Malformed((e.line, e.column), e.reason)
        return Complete(node, self.tokens[self.position:])

    def parse(self) -> Complete | Incomplete | Malformed:
        """
        Parse every statement in the token stream.

        Returns:
            Complete: With the list of statement nodes when all of them parse.
            Incomplete | Malformed: The first statement that does not.
        """
        statements = []
        while True:
            _stmt.skip_separators(self)
            if self.curr_token.type == 'EOF':
                break
            outcome = self.parse_statement()
            if not isinstance(outcome, Complete):
                return outcome
            statements.append(outcome.node)
        return Complete(statements, [])


def parse_program(tokens: list[Token]) -> Complete | Incomplete | Malformed:
    """
    Parse a whole buffer of tokens.
    """
    return Parser(tokens).parse()
