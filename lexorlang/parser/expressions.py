"""Expression parsing utilities for LEXOR.

These functions operate on a `lexorlang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity.

Precedence, lowest first: assignment, OR, AND, equality, comparison,
additive (``+ - & %``), multiplicative (``* /``), unary prefix, primary.


File: expressions.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from lexorlang.ast_nodes import (
    Assign,
    Binary,
    Grouping,
    Literal,
    Logical,
    Unary,
    Variable,
)
from lexorlang.lexer import TokenType

if TYPE_CHECKING:
    from lexorlang.parser import Parser


LITERAL_TOKENS = (
    TokenType.INTEGER_LITERAL,
    TokenType.FLOAT_LITERAL,
    TokenType.STRING_LITERAL,
    TokenType.CHAR_LITERAL,
    TokenType.TRUE,
    TokenType.FALSE,
)


# ---- Highest precedence ----

def parse_factor(parser: 'Parser'):
    """Parse a unary prefix operator, or a literal, variable or parenthesized group."""
    tok = parser.curr_token
    if tok.type in (TokenType.NOT, TokenType.MINUS, TokenType.PLUS):
        parser.advance()
        return Unary(tok, parser.factor())

    if tok.type in LITERAL_TOKENS:
        parser.advance()
        return Literal(tok.literal)

    if tok.type == TokenType.NULL:
        parser.advance()
        return Literal(None)

    if tok.type == TokenType.DOLLAR:
        parser.advance()
        return Literal("\n")

    if tok.type == TokenType.IDENTIFIER:
        parser.advance()
        return Variable(tok)

    if tok.type == TokenType.LEFT_PAREN:
        parser.advance()
        node = parser.expr()
        parser.eat(TokenType.RIGHT_PAREN, "Expected ')' after expression")
        return Grouping(node)

    raise parser.error(tok, "Expected expression")


def parse_term(parser: 'Parser'):
    """Parse multiplication and division expressions."""
    result = parser.factor()
    while parser.check(TokenType.STAR, TokenType.SLASH):
        op_tok = parser.advance()
        result = Binary(result, op_tok, parser.factor())
    return result


def parse_add_sub(parser: 'Parser'):
    """Parse addition, subtraction, concatenation and modulus expressions."""
    result = parser.term()
    while parser.check(TokenType.PLUS, TokenType.MINUS, TokenType.CONCAT, TokenType.MOD):
        op_tok = parser.advance()
        result = Binary(result, op_tok, parser.term())
    return result


def parse_comparison(parser: 'Parser'):
    """Parse relational expressions (<, <=, >, >=)."""
    result = parser.add_sub()
    while parser.check(
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
    ):
        op_tok = parser.advance()
        result = Binary(result, op_tok, parser.add_sub())
    return result


def parse_equality(parser: 'Parser'):
    """Parse equality expressions (==, <>)."""
    result = parser.comparison()
    while parser.check(TokenType.EQUAL_EQUAL, TokenType.NOT_EQUAL):
        op_tok = parser.advance()
        result = Binary(result, op_tok, parser.comparison())
    return result


def parse_logical_and(parser: 'Parser'):
    """Parse logical AND expressions using the 'AND' keyword."""
    result = parser.equality()
    while parser.check(TokenType.AND):
        tok = parser.advance()
        result = Logical(result, tok, parser.equality())
    return result


def parse_logical_or(parser: 'Parser'):
    """Parse logical OR expressions using the 'OR' keyword."""
    result = parser.logical_and()
    while parser.check(TokenType.OR):
        tok = parser.advance()
        result = Logical(result, tok, parser.logical_and())
    return result


def parse_assignment(parser: 'Parser'):
    """
    Parse ``name = value``. Right-associative, so ``x = y = 4`` assigns both.
    The target must be a bare variable.
    """
    target = parser.logical_or()
    if parser.check(TokenType.EQUAL):
        equals = parser.advance()
        value = parser.assignment()
        if isinstance(target, Variable):
            return Assign(target.name, value)
        parser.report(equals, "Invalid assignment target")
    return target


# ---- Entry point ----

def parse_expr(parser: 'Parser'):
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.assignment()
