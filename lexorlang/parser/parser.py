"""Main parser entry point for LEXOR.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`lexorlang.parser.expressions` and `lexorlang.parser.statements`.

A program is parsed in a fixed order: the ``SCRIPT AREA`` / ``START SCRIPT``
header, the declarations block, the executable statements and the
``END SCRIPT`` footer. A broken header or footer stops the parse. A broken
statement is reported, the parser skips ahead to the next line or statement
keyword, and parsing carries on so later errors are still found. Any error
makes :meth:`Parser.parse` return None.


File: parser.py
Version: 0.1.0
License: MIT
"""

from lexorlang.exceptions import ParseError
from lexorlang.lexer import Token, TokenType

from . import expressions as _expr
from . import statements as _stmt


# Tokens where resynchronization stops and parsing resumes.
SYNC_TOKENS = frozenset({
    TokenType.WHEN,
    TokenType.IF,
    TokenType.FOR,
    TokenType.DECLARE,
    TokenType.START,
    TokenType.PRINT,
})


class Parser:
    """LEXOR parser."""

    def __init__(self, tokens: list[Token], diagnostics):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): Token instances ending with an EOF token.
            diagnostics (Diagnostics): Sink that receives syntax errors.
        """
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.failed = False

    # Token cursor
    def advance(self) -> Token:
        """
        Consume the current token and return it. EOF is never consumed.
        """
        token = self.curr_token
        if token.type != TokenType.EOF:
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return token

    def peek(self, offset: int = 1) -> Token:
        """
        Look ahead without consuming.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def check(self, *token_types: TokenType) -> bool:
        """
        Return True if the current token is one of ``token_types``.
        """
        return self.curr_token.type in token_types

    def match(self, *token_types: TokenType) -> Token | None:
        """
        Consume and return the current token if it is one of ``token_types``.
        """
        if self.check(*token_types):
            return self.advance()
        return None

    def eat(self, token_type: TokenType, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (TokenType): The expected token type.
            message (str): Error text if it does not match.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.curr_token.type == token_type:
            return self.advance()
        raise self.error(self.curr_token, message)

    def end_line(self, message: str) -> None:
        """
        Require the NEWLINE that ends every statement.
        """
        self.eat(TokenType.NEWLINE, message)

    def skip_newlines(self) -> None:
        """
        Skip blank lines.
        """
        while self.curr_token.type == TokenType.NEWLINE:
            self.advance()

    def skip_line(self) -> None:
        """
        Discard the rest of the current line, including its NEWLINE.
        """
        while not self.check(TokenType.NEWLINE, TokenType.EOF):
            self.advance()
        self.match(TokenType.NEWLINE)

    # Errors
    def report(self, token: Token, message: str) -> None:
        """
        Record a syntax error without unwinding.
        """
        self.failed = True
        self.diagnostics.syntax_error(token, message)

    def error(self, token: Token, message: str) -> ParseError:
        """
        Record a syntax error and return the exception that unwinds to the
        nearest statement loop.
        """
        self.report(token, message)
        return ParseError(message)

    def synchronize(self) -> None:
        """
        Discard tokens until just past a NEWLINE, or until a token that can
        start a statement.
        """
        previous = self.advance()
        while self.curr_token.type != TokenType.EOF:
            if previous.type == TokenType.NEWLINE:
                return
            if self.curr_token.type in SYNC_TOKENS:
                return
            previous = self.advance()

    # Expression wrappers
    def factor(self):
        """
        Parse a unary prefix expression or a primary: literal, variable,
        ``$`` or parenthesized group.
        """
        return _expr.parse_factor(self)

    def term(self):
        """
        Parse multiplication and division.
        """
        return _expr.parse_term(self)

    def add_sub(self):
        """
        Parse addition, subtraction, concatenation and modulo.
        """
        return _expr.parse_add_sub(self)

    def comparison(self):
        """
        Parse relational operators.
        """
        return _expr.parse_comparison(self)

    def equality(self):
        """
        Parse ``==`` and ``<>``.
        """
        return _expr.parse_equality(self)

    def logical_and(self):
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def logical_or(self):
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def assignment(self):
        """
        Parse a right-associative assignment.
        """
        return _expr.parse_assignment(self)

    def expr(self):
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)

    # Statement wrappers
    def statements(self, closer: TokenType | None = None) -> list:
        """
        Parse executable statements up to the end of the enclosing block.
        """
        return _stmt.parse_statements(self, closer)

    def statement(self):
        """
        Parse a single executable statement.
        """
        return _stmt.parse_statement(self)

    def block(self, kind: TokenType):
        """
        Parse a ``START <kind> ... END <kind>`` block.
        """
        return _stmt.parse_block(self, kind)

    def condition(self, keyword: str):
        """
        Parse a parenthesized condition.
        """
        return _stmt.parse_condition(self, keyword)

    def parse_declaration(self):
        """
        Parse a DECLARE statement.
        """
        return _stmt.parse_declaration(self)

    def parse_print(self):
        """
        Parse a PRINT statement.
        """
        return _stmt.parse_print(self)

    def parse_scan(self):
        """
        Parse a SCAN statement.
        """
        return _stmt.parse_scan(self)

    def parse_if(self):
        """
        Parse an IF statement with optional ELSE IF / ELSE branches.
        """
        return _stmt.parse_if(self)

    def parse_repeat(self):
        """
        Parse a REPEAT WHEN loop.
        """
        return _stmt.parse_repeat(self)

    def parse_for(self):
        """
        Parse a FOR loop.
        """
        return _stmt.parse_for(self)

    # Program structure
    def parse_keywords(self, message: str, *token_types: TokenType) -> None:
        """
        Require a fixed keyword sequence such as ``SCRIPT AREA``.
        """
        for token_type in token_types:
            self.eat(token_type, message)

    def parse_header(self) -> None:
        """
        Parse ``SCRIPT AREA`` and ``START SCRIPT``, each ending its line.
        """
        self.skip_newlines()
        self.parse_keywords(
            "Expected 'SCRIPT AREA' at the start of file",
            TokenType.SCRIPT, TokenType.AREA, TokenType.NEWLINE,
        )
        self.skip_newlines()
        self.parse_keywords(
            "Expected 'START SCRIPT' after 'SCRIPT AREA'",
            TokenType.START, TokenType.SCRIPT, TokenType.NEWLINE,
        )

    def parse_declarations(self) -> list:
        """
        Parse the declarations block that must precede executable code.
        """
        declarations = []
        self.skip_newlines()
        while self.check(TokenType.DECLARE):
            try:
                declarations.append(self.parse_declaration())
            except ParseError:
                self.synchronize()
            self.skip_newlines()
        return declarations

    def parse_footer(self) -> None:
        """
        Parse ``END SCRIPT``; only blank lines may follow it.
        """
        self.parse_keywords(
            "Expected 'END SCRIPT' to finish program",
            TokenType.END, TokenType.SCRIPT,
        )
        self.skip_newlines()
        if not self.check(TokenType.EOF):
            raise self.error(self.curr_token, "Unexpected content after 'END SCRIPT'")

    def parse(self) -> list | None:
        """
        Parse the full input into a list of statements.

        Returns:
            list | None: The top-level statements, or None if any syntax
            error was reported.
        """
        try:
            self.parse_header()
            statements = self.parse_declarations()
            statements.extend(self.statements())
            self.parse_footer()
        except ParseError:
            return None
        if self.failed:
            return None
        return statements
