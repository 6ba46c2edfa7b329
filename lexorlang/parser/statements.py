"""Statement parsing utilities for LEXOR.

These functions operate on a `lexorlang.parser.parser.Parser` instance and
handle the statement forms of the language: declarations, PRINT, SCAN,
IF / ELSE IF / ELSE, REPEAT WHEN, FOR and bare expressions.

Every statement occupies exactly one line, so each one ends by requiring a
NEWLINE. Compound statements require one after every header and after the
closing ``END <kind>``.

``FOR`` and ``REPEAT WHEN`` are rewritten here into ``When`` loops:

    FOR (init, cond, incr) body
        -> Block([Expression(init), When(cond, Block([body, Expression(incr)]))])

    REPEAT WHEN (cond) body
        -> When(cond, body)


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from lexorlang.ast_nodes import (
    Block,
    Declare,
    Expression,
    If,
    Literal,
    Print,
    Scan,
    When,
)
from lexorlang.datatypes import VarType
from lexorlang.exceptions import ParseError
from lexorlang.lexer import TYPE_KEYWORDS, TokenType

if TYPE_CHECKING:
    from lexorlang.parser import Parser


def _at_statements_end(parser: 'Parser', closer: TokenType | None) -> bool:
    """
    Return True where a run of statements stops: EOF, ``END SCRIPT`` at the
    top level, or any ``END`` inside a block.
    """
    if parser.check(TokenType.EOF):
        return True
    if not parser.check(TokenType.END):
        return False
    if closer is None:
        return parser.peek().type == TokenType.SCRIPT
    return True


def parse_statements(parser: 'Parser', closer: TokenType | None = None) -> list:
    """
    Parse executable statements until the end of the enclosing block.

    Syntax:
        (<statement> NEWLINE)*

    Args:
        parser: The parser instance.
        closer: The block kind being parsed, or None at the top level.

    Returns:
        list: The successfully parsed statements.
    """
    statements = []
    parser.skip_newlines()
    while not _at_statements_end(parser, closer):
        if parser.check(TokenType.END):
            parser.report(parser.curr_token, "Unexpected 'END' without a matching block")
            parser.skip_line()
        else:
            try:
                statements.append(parser.statement())
            except ParseError:
                parser.synchronize()
        parser.skip_newlines()
    return statements


def parse_statement(parser: 'Parser'):
    """
    Parse a single executable statement.

    Args:
        parser: The parser instance.

    Returns:
        Stmt: The statement node.
    """
    tok = parser.curr_token
    if tok.type == TokenType.DECLARE:
        raise parser.error(tok, "Declarations must come before executable statements")
    if tok.type == TokenType.PRINT:
        return parser.parse_print()
    if tok.type == TokenType.SCAN:
        return parser.parse_scan()
    if tok.type == TokenType.IF:
        return parser.parse_if()
    if tok.type == TokenType.REPEAT:
        return parser.parse_repeat()
    if tok.type == TokenType.FOR:
        return parser.parse_for()

    expr_node = parser.expr()
    parser.end_line("Expected newline after expression")
    return Expression(expr_node)


def parse_declaration(parser: 'Parser') -> Declare:
    """
    Parse a variable declaration.

    Syntax:
        DECLARE <TYPE> <identifier> [= <expression>] (, <identifier> [= <expression>])*

    Args:
        parser: The parser instance.

    Returns:
        Declare: The declaration node.
    """
    parser.eat(TokenType.DECLARE, "Expected 'DECLARE'")
    type_tok = parser.curr_token
    if type_tok.type not in TYPE_KEYWORDS:
        raise parser.error(type_tok, "Expected variable type")
    parser.advance()

    names = []
    while True:
        name = parser.eat(TokenType.IDENTIFIER, "Expected variable name")
        initializer = None
        if parser.match(TokenType.EQUAL):
            initializer = parser.expr()
        names.append((name, initializer))
        if not parser.match(TokenType.COMMA):
            break
    parser.end_line("Expected newline after variable declaration")
    return Declare(VarType(type_tok.type.value), tuple(names))


def parse_print(parser: 'Parser') -> Print:
    """
    Parse a PRINT statement.

    Syntax:
        PRINT: <expression>

    Args:
        parser: The parser instance.

    Returns:
        Print: The print node.
    """
    parser.eat(TokenType.PRINT, "Expected 'PRINT'")
    parser.eat(TokenType.COLON, "Expected ':' after 'PRINT'")
    expr_node = parser.expr()
    parser.end_line("Expected newline after value")
    return Print(expr_node)


def parse_scan(parser: 'Parser') -> Scan:
    """
    Parse a SCAN statement.

    Syntax:
        SCAN: <identifier> (, <identifier>)*

    Args:
        parser: The parser instance.

    Returns:
        Scan: The scan node.
    """
    parser.eat(TokenType.SCAN, "Expected 'SCAN'")
    parser.eat(TokenType.COLON, "Expected ':' after 'SCAN'")
    names = [parser.eat(TokenType.IDENTIFIER, "Expected variable name")]
    while parser.match(TokenType.COMMA):
        names.append(parser.eat(TokenType.IDENTIFIER, "Expected variable name"))
    parser.end_line("Expected newline after SCAN variables")
    return Scan(tuple(names))


def parse_condition(parser: 'Parser', keyword: str):
    """
    Parse a parenthesized condition and the NEWLINE ending its header line.

    Syntax:
        ( <expression> ) NEWLINE
    """
    parser.eat(TokenType.LEFT_PAREN, f"Expected '(' after '{keyword}'")
    condition = parser.expr()
    parser.eat(TokenType.RIGHT_PAREN, "Expected ')' after condition")
    parser.end_line(f"Expected newline after '{keyword}' condition")
    return condition


def parse_block(parser: 'Parser', kind: TokenType) -> Block:
    """
    Parse a delimited block of statements. The NEWLINE after ``END <kind>``
    is left for the caller.

    Syntax:
        START <kind> NEWLINE <statement>* END <kind>

    Args:
        parser: The parser instance.
        kind: IF, FOR or REPEAT.

    Returns:
        Block: The block node.
    """
    parser.skip_newlines()
    parser.eat(TokenType.START, f"Expected 'START {kind.value}'")
    parser.eat(kind, f"Expected 'START {kind.value}'")
    parser.end_line(f"Expected newline after 'START {kind.value}'")
    statements = parser.statements(kind)
    parser.eat(TokenType.END, f"Expected 'END {kind.value}'")
    parser.eat(kind, f"Expected 'END {kind.value}'")
    return Block(tuple(statements))


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional with optional ELSE IF and ELSE branches. Each
    ``ELSE IF`` becomes a nested If in the else branch.

    Syntax:
        IF (<condition>)
        START IF
        <statement>*
        END IF
        [ELSE IF (<condition>) ... | ELSE
        START IF
        <statement>*
        END IF]

    Args:
        parser: The parser instance.

    Returns:
        If: The conditional node.
    """
    keyword = parser.eat(TokenType.IF, "Expected 'IF'")
    condition = parser.condition("IF")
    then_branch = parser.block(TokenType.IF)
    parser.end_line("Expected newline after 'END IF'")

    parser.skip_newlines()
    else_branch = None
    if parser.match(TokenType.ELSE):
        if parser.check(TokenType.IF):
            else_branch = parser.parse_if()
        else:
            parser.end_line("Expected newline after 'ELSE'")
            else_branch = parser.block(TokenType.IF)
            parser.end_line("Expected newline after 'END IF'")
    return If(condition, then_branch, else_branch, keyword)


def parse_repeat(parser: 'Parser') -> When:
    """
    Parse a pre-test loop.

    Syntax:
        REPEAT WHEN (<condition>)
        START REPEAT
        <statement>*
        END REPEAT

    Args:
        parser: The parser instance.

    Returns:
        When: The loop node.
    """
    keyword = parser.eat(TokenType.REPEAT, "Expected 'REPEAT'")
    parser.eat(TokenType.WHEN, "Expected 'WHEN' after 'REPEAT'")
    condition = parser.condition("REPEAT WHEN")
    body = parser.block(TokenType.REPEAT)
    parser.end_line("Expected newline after 'END REPEAT'")
    return When(condition, body, keyword)


def parse_for(parser: 'Parser'):
    """
    Parse a counted loop. Every clause is optional; a missing condition
    loops until something else stops it.

    Syntax:
        FOR ([<init>], [<condition>], [<increment>])
        START FOR
        <statement>*
        END FOR

    Args:
        parser: The parser instance.

    Returns:
        Stmt: A When loop, wrapped in a Block with the initializer if present.
    """
    keyword = parser.eat(TokenType.FOR, "Expected 'FOR'")
    parser.eat(TokenType.LEFT_PAREN, "Expected '(' after 'FOR'")
    initializer = None if parser.check(TokenType.COMMA) else parser.expr()
    parser.eat(TokenType.COMMA, "Expected ',' after loop initializer")
    condition = None if parser.check(TokenType.COMMA) else parser.expr()
    parser.eat(TokenType.COMMA, "Expected ',' after loop condition")
    increment = None if parser.check(TokenType.RIGHT_PAREN) else parser.expr()
    parser.eat(TokenType.RIGHT_PAREN, "Expected ')' after FOR clauses")
    parser.end_line("Expected newline after 'FOR' clauses")

    body = parser.block(TokenType.FOR)
    parser.end_line("Expected newline after 'END FOR'")

    if increment is not None:
        body = Block((body, Expression(increment)))
    else:
        body = Block((body,))
    if condition is None:
        condition = Literal(True)
    loop = When(condition, body, keyword)
    if initializer is not None:
        return Block((Expression(initializer), loop))
    return loop
