"""Lexer for the matrix calculator.

This lexer performs a single pass over the source text using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value and source position.

Tokenization never fails. A character the language does not know becomes an
``UNKNOWN`` token and a numeric literal with trailing garbage (``1.2.3``,
``1e``, ``2x``) or too large for a float (``1e400``) becomes a single
``INVALID`` token; the parser reports both as syntax errors. Comments start with
``#`` and run to the end of the line.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import math
import re


class Token:
    """
    Represents a lexical token with a type and value.
    """
    def __init__(self, type_, value, line, column=1):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): 1-based source line.
            column (int): 1-based source column.
        """
        self.type = type_
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value}, line={self.line}, col={self.column})"


TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',    r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?(?:[A-Za-z_.][A-Za-z0-9_.]*)?'),

    # Identifiers
    ('ID',        r'[A-Za-z][A-Za-z0-9_]*'),

    # Assignment
    ('ASSIGN',    r'='),

    # Delimiters
    ('LPAREN',    r'\('),
    ('RPAREN',    r'\)'),
    ('LBRACKET',  r'\['),
    ('RBRACKET',  r'\]'),
    ('COMMA',     r','),
    ('SEMICOLON', r';'),

    # Arithmetic operators
    ('PLUS',      r'\+'),
    ('MINUS',     r'-'),
    ('MUL',       r'\*'),
    ('DIV',       r'/'),
    ('CARET',     r'\^'),

    # Miscellaneous
    ('COMMENT',   r'\#[^\n]*'),
    ('NEWLINE',   r'\n'),
    ('SKIP',      r'[ \t\r]+'),
    ('UNKNOWN',   r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)

# Literal spelling of fixed tokens, used to phrase parser errors.
TOKEN_LITERALS: dict[str, str] = {
    'ASSIGN': '=',
    'LPAREN': '(',
    'RPAREN': ')',
    'LBRACKET': '[',
    'RBRACKET': ']',
    'COMMA': ',',
    'SEMICOLON': ';',
    'PLUS': '+',
    'MINUS': '-',
    'MUL': '*',
    'DIV': '/',
    'CARET': '^',
    'NEWLINE': 'newline',
    'EOF': 'end of input',
}


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: A list of Token instances terminated by an EOF token.
    """
    tokens = []
    line_num = 1
    line_start = 0

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        column = match_obj.start() - line_start + 1

        if kind == 'NEWLINE':
            tokens.append(Token('NEWLINE', value, line_num, column))
            line_num += 1
            line_start = match_obj.end()
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue

        if kind == 'NUMBER':
            # float() also accepts digit separators like 1_000 and overflows to inf
            try:
                number = float(value)
                if '_' in value or not math.isfinite(number):
                    raise ValueError(value)
                tokens.append(Token('NUMBER', number, line_num, column))
            except ValueError:
                tokens.append(Token('INVALID', value, line_num, column))
        else:
            tokens.append(Token(kind, value, line_num, column))

    tokens.append(Token('EOF', None, line_num, len(code) - line_start + 1))
    return tokens
