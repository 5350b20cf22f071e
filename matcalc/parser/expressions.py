"""
Expression parsing utilities for the matrix calculator.

These functions operate on a `matcalc.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity:

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := '-' unary | power
    power   := postfix ('^' unary)?
    postfix := primary ('[' expr (',' expr)? ']')*
    primary := NUMBER | ID | ID '(' args ')' | '(' expr ')' | matrix
"""

from typing import TYPE_CHECKING

from matcalc.operations import Op

if TYPE_CHECKING:
    from matcalc.parser import Parser


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a number, variable, call, parenthesized expression or matrix."""
    parser.expect_operand()
    tok = parser.curr_token

    if tok.type == 'NUMBER':
        parser.eat('NUMBER')
        return ('number', tok.value, tok.line)

    if tok.type == 'ID':
        parser.eat('ID')
        if parser.curr_token.type == 'LPAREN':
            return ('func_call', tok.value, parse_arguments(parser), tok.line)
        return ('ident', tok.value, tok.line)

    if tok.type == 'LPAREN':
        parser.eat('LPAREN')
        parser.enter('paren')
        node = parser.expr()
        parser.leave()
        parser.eat('RPAREN')
        return node

    if tok.type == 'LBRACKET':
        return parser.matrix()

    if tok.type == 'INVALID':
        raise parser.error(f"Invalid number literal '{tok.value}'")
    if tok.type == 'UNKNOWN':
        raise parser.error(f"Unexpected character '{tok.value}'")
    if tok.type in ('RPAREN', 'RBRACKET') and not parser.groups:
        raise parser.error(f"Unmatched '{tok.value}'")
    raise parser.error(f"Expected an operand but got {parser.describe(tok)}")


def parse_arguments(parser: 'Parser') -> list:
    """Parse a parenthesized, comma separated argument list."""
    parser.eat('LPAREN')
    parser.enter('paren')
    args = []
    if parser.curr_token.type != 'RPAREN':
        args.append(parser.expr())
        while parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            args.append(parser.expr())
    parser.leave()
    parser.eat('RPAREN')
    return args


def parse_matrix(parser: 'Parser') -> tuple:
    """
    Parse a matrix literal.

    Columns are separated by ``,`` and rows by ``;`` or a newline. Runs of
    row separators count as one, so a row break may be written as ``;``
    followed by a newline. Row widths are checked at evaluation time.
    """
    start_tok = parser.eat('LBRACKET')
    parser.enter('matrix')
    rows = []
    parser.skip('SEMICOLON', 'NEWLINE')
    while parser.curr_token.type != 'RBRACKET':
        row = [parser.expr()]
        while parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            row.append(parser.expr())
        rows.append(row)

        # At EOF the next row's operand check reports the input as incomplete
        tok = parser.curr_token
        if tok.type in ('SEMICOLON', 'NEWLINE'):
            parser.skip('SEMICOLON', 'NEWLINE')
        elif tok.type not in ('RBRACKET', 'EOF'):
            raise parser.error(
                f"Expected ',', ';' or ']' in matrix but got {parser.describe(tok)}"
            )
    if not rows:
        raise parser.error("Empty matrix", start_tok)
    parser.leave()
    parser.eat('RBRACKET')
    return ('matrix', rows, start_tok.line)


def parse_postfix(parser: 'Parser') -> tuple:
    """Parse ``target[i]`` and ``target[i, j]`` indexing."""
    result = parser.primary()
    while parser.curr_token.type == 'LBRACKET':
        tok = parser.eat('LBRACKET')
        parser.enter('paren')
        indices = [parser.expr()]
        if parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            indices.append(parser.expr())
        parser.leave()
        parser.eat('RBRACKET')
        result = ('index', result, indices, tok.line)
    return result


def parse_power(parser: 'Parser') -> tuple:
    """Parse right-associative exponentiation; the exponent may be negated."""
    base = parser.postfix()
    if parser.curr_token.type == 'CARET':
        tok = parser.eat('CARET')
        return (Op.POW, base, parser.unary(), tok.line)
    return base


def parse_unary(parser: 'Parser') -> tuple:
    """Parse unary minus, which binds looser than ``^``."""
    parser.expect_operand()
    tok = parser.curr_token
    if tok.type == 'MINUS':
        parser.eat('MINUS')
        return ('unary', Op.NEG, parser.unary(), tok.line)
    return parser.power()


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication and division expressions."""
    result = parser.unary()
    while parser.curr_token.type in ('MUL', 'DIV'):
        op_tok = parser.curr_token
        parser.eat(op_tok.type)
        op_map = {
            'MUL': Op.MUL,
            'DIV': Op.DIV,
        }
        result = (op_map[op_tok.type], result, parser.unary(), op_tok.line)
    return result


def parse_add_sub(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    result = parser.term()
    while parser.curr_token.type in ('PLUS', 'MINUS'):
        tok = parser.curr_token
        parser.eat(tok.type)
        op_map = {
            'PLUS': Op.ADD,
            'MINUS': Op.SUB,
        }
        result = (op_map[tok.type], result, parser.term(), tok.line)
    return result


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parse_add_sub(parser)
