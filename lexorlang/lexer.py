"""Lexer for LEXOR.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, exact source text, decoded literal value and the
1-based line and column where it starts.

Newlines are significant and become ``NEWLINE`` tokens, since every statement
must end a line. Comments start at ``%%`` and run to the end of the line.
Escape sequences are written ``[x]``; inside a string literal they expand in
place, and on their own they become a one-character string token.

Malformed input never aborts the scan: unexpected characters, unterminated
literals and broken escape sequences are reported to the diagnostics sink and
the scan resumes after the offending text.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any


class TokenType(str, Enum):
    """
    Closed set of token kinds.
    """

    # Single-character tokens
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SLASH = "SLASH"
    STAR = "STAR"
    MOD = "MOD"
    CONCAT = "CONCAT"
    DOLLAR = "DOLLAR"
    COMMA = "COMMA"
    COLON = "COLON"

    # One or two character tokens
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    INTEGER_LITERAL = "INTEGER_LITERAL"
    FLOAT_LITERAL = "FLOAT_LITERAL"
    CHAR_LITERAL = "CHAR_LITERAL"
    STRING_LITERAL = "STRING_LITERAL"

    # Type keywords
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOL = "BOOL"
    CHAR = "CHAR"

    # Keywords
    SCRIPT = "SCRIPT"
    AREA = "AREA"
    START = "START"
    END = "END"
    DECLARE = "DECLARE"
    IF = "IF"
    ELSE = "ELSE"
    FOR = "FOR"
    REPEAT = "REPEAT"
    WHEN = "WHEN"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    NULL = "NULL"
    PRINT = "PRINT"
    SCAN = "SCAN"
    TRUE = "TRUE"
    FALSE = "FALSE"

    NEWLINE = "NEWLINE"
    EOF = "EOF"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


# Reserved words only match their exact upper-case spelling.
KEYWORDS = MappingProxyType({
    name: TokenType(name)
    for name in (
        "SCRIPT", "AREA", "START", "END", "DECLARE",
        "INT", "FLOAT", "STRING", "BOOL", "CHAR",
        "IF", "ELSE", "FOR", "REPEAT", "WHEN",
        "AND", "OR", "NOT", "NULL", "PRINT", "SCAN", "TRUE", "FALSE",
    )
})

TYPE_KEYWORDS = frozenset({
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.STRING,
    TokenType.BOOL,
    TokenType.CHAR,
})

ESCAPES = MappingProxyType({
    'n': '\n',
    't': '\t',
    '$': '\r',
    '"': '"',
    '[': '[',
    ']': ']',
})


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Attributes:
        type (TokenType): The token kind.
        lexeme (str): The exact source text of the token.
        literal (Any): Decoded value for literal tokens, otherwise None.
        line (int): 1-based line of the first character.
        column (int): 1-based column of the first character.
    """
    type: TokenType
    lexeme: str
    literal: Any = None
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        if self.literal is not None:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, line={self.line})"
        return f"Token({self.type.name}, {self.lexeme!r}, line={self.line})"


_ESCAPE = r'\[[^\n]\]'

token_specification: list[tuple[str, str]] = [
    # Trivia
    ('COMMENT',       r'%%[^\n]*'),
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r]+'),

    # Literals
    ('FLOAT',         r'\d+\.\d+'),
    ('INTEGER',       r'\d+'),
    ('STRING',        rf'"(?:{_ESCAPE}|[^"\[\n])*"'),
    # Ends after a broken escape so scanning resumes right behind it
    ('BAD_STRING',    rf'"(?:{_ESCAPE}|[^"\[\n])*(?:\[[^\n]?)?'),
    ('CHAR',          r"'[^\n]'"),
    ('BAD_CHAR',      r"'[^\n]?"),
    ('ESCAPE',        _ESCAPE),
    ('BAD_ESCAPE',    r'\[[^\n]?'),

    # Identifiers and keywords
    ('ID',            r'[A-Za-z_][A-Za-z0-9_]*'),

    # Operators, longest first
    ('EQUAL_EQUAL',   r'=='),
    ('GREATER_EQUAL', r'>='),
    ('LESS_EQUAL',    r'<='),
    ('NOT_EQUAL',     r'<>'),
    ('EQUAL',         r'='),
    ('GREATER',       r'>'),
    ('LESS',          r'<'),
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('STAR',          r'\*'),
    ('SLASH',         r'/'),
    ('MOD',           r'%'),
    ('CONCAT',        r'&'),
    ('DOLLAR',        r'\$'),

    # Delimiters
    ('LEFT_PAREN',    r'\('),
    ('RIGHT_PAREN',   r'\)'),
    ('COMMA',         r','),
    ('COLON',         r':'),

    # Anything else
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)


def decode_escapes(text: str) -> str:
    """
    Expand every ``[x]`` escape sequence in ``text``.

    Parameters:
        text (str): Raw literal body, already known to be well formed.

    Returns:
        str: The decoded text.
    """
    return re.sub(_ESCAPE, lambda m: ESCAPES.get(m.group()[1], m.group()[1]), text)


def _bad_string_message(text: str) -> str:
    """Explain why a string literal failed to lex."""
    i = 1
    while i < len(text):
        if text[i] == '"':
            break
        if text[i] == '[':
            if i + 1 >= len(text):
                return "Unterminated string inside escape sequence"
            if i + 2 >= len(text) or text[i + 2] != ']':
                return "Expected ']' to close escape sequence"
            i += 3
            continue
        i += 1
    return "Unterminated string"


def tokenize(code: str, diagnostics) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    The returned list always ends with a single ``EOF`` token.

    Parameters:
        code (str): The source code to tokenize.
        diagnostics (Diagnostics): Sink that receives lexical errors.

    Returns:
        list[Token]: A list of Token instances.
    """
    tokens: list[Token] = []
    line_num = 1
    line_start = 0

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        column = match_obj.start() - line_start + 1

        if kind == 'NEWLINE':
            tokens.append(Token(TokenType.NEWLINE, value, None, line_num, column))
            line_num += 1
            line_start = match_obj.end()
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue

        if kind == 'MISMATCH':
            diagnostics.lexical_error(line_num, column, value, "Unexpected character")
        elif kind == 'BAD_STRING':
            diagnostics.lexical_error(line_num, column, value, _bad_string_message(value))
        elif kind == 'BAD_CHAR':
            diagnostics.lexical_error(
                line_num, column, value,
                "Unterminated character literal. Expected single quote"
            )
        elif kind == 'BAD_ESCAPE':
            if len(value) == 1:
                message = "Unterminated escape sequence"
            else:
                message = "Expected ']' to close escape sequence"
            diagnostics.lexical_error(line_num, column, value, message)

        elif kind == 'INTEGER':
            try:
                number = int(value)
            except ValueError:
                diagnostics.lexical_error(line_num, column, value[:20], "Integer literal is too large")
                continue
            tokens.append(Token(TokenType.INTEGER_LITERAL, value, number, line_num, column))
        elif kind == 'FLOAT':
            tokens.append(Token(TokenType.FLOAT_LITERAL, value, float(value), line_num, column))
        elif kind == 'STRING':
            tokens.append(Token(
                TokenType.STRING_LITERAL, value, decode_escapes(value[1:-1]), line_num, column
            ))
        elif kind == 'ESCAPE':
            tokens.append(Token(TokenType.STRING_LITERAL, value, decode_escapes(value), line_num, column))
        elif kind == 'CHAR':
            tokens.append(Token(TokenType.CHAR_LITERAL, value, value[1], line_num, column))
        elif kind == 'ID':
            keyword = KEYWORDS.get(value)
            if keyword is TokenType.TRUE:
                tokens.append(Token(keyword, value, True, line_num, column))
            elif keyword is TokenType.FALSE:
                tokens.append(Token(keyword, value, False, line_num, column))
            elif keyword is not None:
                tokens.append(Token(keyword, value, None, line_num, column))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, value, None, line_num, column))
        else:
            tokens.append(Token(TokenType(kind), value, None, line_num, column))

    tokens.append(Token(TokenType.EOF, "", None, line_num, len(code) - line_start + 1))
    return tokens
