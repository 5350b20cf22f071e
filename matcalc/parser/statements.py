"""
Statement parsing utilities for the matrix calculator.

A statement is an assignment ``name = statement`` or a bare expression.
Statements are separated by newlines or ``;`` at the top level.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matcalc.parser import Parser


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    parser.expect_operand()
    tok = parser.curr_token
    if tok.type == 'ID' and parser.peek().type == 'ASSIGN':
        return parser.parse_assignment()

    node = parser.expr()
    if parser.curr_token.type == 'ASSIGN':
        raise parser.error("Can only assign to a bare identifier")
    return node


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse a right-associative variable assignment.

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('assign', name, value_node, line_number)
    """
    id_tok = parser.eat('ID')
    parser.eat('ASSIGN')
    value = parser.statement()
    return ('assign', id_tok.value, value, id_tok.line)


def expect_terminator(parser: 'Parser') -> None:
    """
    Require a statement to end at a separator or the end of input.
    """
    tok = parser.curr_token
    if tok.type in ('NEWLINE', 'SEMICOLON', 'EOF'):
        return
    if tok.type in ('RPAREN', 'RBRACKET'):
        raise parser.error(f"Unmatched '{tok.value}'")
    if tok.type == 'INVALID':
        raise parser.error(f"Invalid number literal '{tok.value}'")
    if tok.type == 'UNKNOWN':
        raise parser.error(f"Unexpected character '{tok.value}'")
    raise parser.error(f"Unexpected {parser.describe(tok)} after expression")


def skip_separators(parser: 'Parser') -> None:
    """
    Consume blank lines and empty statements between statements.
    """
    parser.skip('NEWLINE', 'SEMICOLON')
