"""
Tests for the LEXOR lexer.
"""
from lexorlang.diagnostics import Diagnostics, ErrorKind
from lexorlang.lexer import KEYWORDS, TokenType, tokenize


def lex(source: str):
    diagnostics = Diagnostics()
    return tokenize(source, diagnostics), diagnostics


def types_of(tokens):
    return [t.type for t in tokens]


def test_print_statement_tokens():
    """
    A simple statement lexes into its tokens, a NEWLINE and EOF.
    """
    tokens, diagnostics = lex("PRINT: 10 + 5 * 2\n")
    assert types_of(tokens) == [
        TokenType.PRINT,
        TokenType.COLON,
        TokenType.INTEGER_LITERAL,
        TokenType.PLUS,
        TokenType.INTEGER_LITERAL,
        TokenType.STAR,
        TokenType.INTEGER_LITERAL,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]
    assert [t.literal for t in tokens if t.type == TokenType.INTEGER_LITERAL] == [10, 5, 2]
    assert not diagnostics.had_error


def test_line_and_column_tracking():
    """
    Every token records the 1-based line and column where it starts.
    """
    tokens, _ = lex("DECLARE INT x\n  y = 2")
    positions = [(t.lexeme, t.line, t.column) for t in tokens]
    assert positions == [
        ("DECLARE", 1, 1),
        ("INT", 1, 9),
        ("x", 1, 13),
        ("\n", 1, 14),
        ("y", 2, 3),
        ("=", 2, 5),
        ("2", 2, 7),
        ("", 2, 8),
    ]


def test_multi_character_operators_use_longest_match():
    tokens, _ = lex("<= >= <> == < > =")
    assert types_of(tokens)[:-1] == [
        TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS,
        TokenType.GREATER,
        TokenType.EQUAL,
    ]


def test_keywords_are_case_sensitive():
    """
    Only the exact upper-case spelling is a reserved word.
    """
    tokens, _ = lex("print Print PRINT _x1")
    assert types_of(tokens)[:-1] == [
        TokenType.IDENTIFIER,
        TokenType.IDENTIFIER,
        TokenType.PRINT,
        TokenType.IDENTIFIER,
    ]


def test_keyword_table_is_read_only():
    assert KEYWORDS["DECLARE"] == TokenType.DECLARE
    assert len(KEYWORDS) == 23
    try:
        KEYWORDS["LOOP"] = TokenType.WHEN
    except TypeError:
        pass
    else:
        raise AssertionError("keyword table should be immutable")


def test_boolean_keywords_carry_values():
    tokens, _ = lex("TRUE FALSE NULL")
    assert [(t.type, t.literal) for t in tokens[:-1]] == [
        (TokenType.TRUE, True),
        (TokenType.FALSE, False),
        (TokenType.NULL, None),
    ]


def test_comments_produce_no_tokens():
    """
    A %% comment runs to the end of the line; the NEWLINE survives.
    """
    tokens, _ = lex("x = 1 %% set x\n%% whole line\n")
    assert types_of(tokens) == [
        TokenType.IDENTIFIER,
        TokenType.EQUAL,
        TokenType.INTEGER_LITERAL,
        TokenType.NEWLINE,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]


def test_single_percent_is_modulo():
    tokens, _ = lex("10 % 3")
    assert types_of(tokens)[:-1] == [
        TokenType.INTEGER_LITERAL,
        TokenType.MOD,
        TokenType.INTEGER_LITERAL,
    ]


def test_numeric_literals():
    tokens, diagnostics = lex("42 3.14")
    assert tokens[0].type == TokenType.INTEGER_LITERAL and tokens[0].literal == 42
    assert tokens[1].type == TokenType.FLOAT_LITERAL and tokens[1].literal == 3.14
    assert not diagnostics.had_error


def test_trailing_and_leading_dot_are_not_floats():
    """
    ``5.`` and ``.5`` are an integer plus a stray dot.
    """
    tokens, diagnostics = lex("5. .5")
    assert [t.type for t in tokens[:-1]] == [
        TokenType.INTEGER_LITERAL,
        TokenType.INTEGER_LITERAL,
    ]
    assert len(diagnostics.errors_of(ErrorKind.LEXICAL)) == 2


def test_character_literal():
    tokens, _ = lex("'c'")
    assert tokens[0].type == TokenType.CHAR_LITERAL
    assert tokens[0].literal == "c"


def test_string_escape_sequences():
    """
    ``[x]`` inside a string expands in place.
    """
    tokens, diagnostics = lex('"a[n]b[t]c" "[[]x[]]" "say [\"]hi[\"]" "[#]"')
    assert [t.literal for t in tokens[:-1]] == ["a\nb\tc", "[x]", 'say "hi"', "#"]
    assert not diagnostics.had_error


def test_standalone_escape_is_a_string_token():
    tokens, _ = lex("[#] [[]")
    assert [(t.type, t.literal) for t in tokens[:-1]] == [
        (TokenType.STRING_LITERAL, "#"),
        (TokenType.STRING_LITERAL, "["),
    ]


def test_dollar_is_its_own_token():
    tokens, _ = lex("x & $ & y")
    assert TokenType.DOLLAR in types_of(tokens)


def test_unexpected_character_is_reported_and_scanning_continues():
    tokens, diagnostics = lex("x @ y # z")
    assert [t.lexeme for t in tokens[:-1]] == ["x", "y", "z"]
    errors = diagnostics.errors_of(ErrorKind.LEXICAL)
    assert [(e.line, e.column) for e in errors] == [(1, 3), (1, 7)]
    assert diagnostics.had_error
    assert not diagnostics.had_runtime_error


def test_unterminated_string_is_abandoned():
    """
    The broken literal is dropped; the next line still lexes.
    """
    tokens, diagnostics = lex('PRINT: "abc\nPRINT: 1\n')
    assert types_of(tokens) == [
        TokenType.PRINT,
        TokenType.COLON,
        TokenType.NEWLINE,
        TokenType.PRINT,
        TokenType.COLON,
        TokenType.INTEGER_LITERAL,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]
    assert "Unterminated string" in diagnostics.errors[0].message


def test_malformed_escape_inside_string():
    _, diagnostics = lex('"ab[cd"')
    assert diagnostics.had_error
    assert "Expected ']'" in diagnostics.errors[0].message


def test_malformed_standalone_escape():
    tokens, diagnostics = lex("[ab")
    assert diagnostics.had_error
    assert "Expected ']'" in diagnostics.errors[0].message
    assert [t.lexeme for t in tokens[:-1]] == ["b"]


def test_unterminated_character_literal():
    _, diagnostics = lex("'ab'")
    assert diagnostics.had_error
    assert "Expected single quote" in diagnostics.errors[0].message


def test_scanning_resumes_after_bad_escape_in_string():
    """
    Only the text up to the broken escape is dropped.
    """
    tokens, diagnostics = lex('"x[yz')
    assert [t.lexeme for t in tokens[:-1]] == ["z"]
    assert len(diagnostics.errors) == 1
    assert "Expected ']'" in diagnostics.errors[0].message


def test_oversized_integer_literal_is_a_lexical_error():
    tokens, diagnostics = lex("1" * 5000)
    assert types_of(tokens) == [TokenType.EOF]
    assert "Integer literal is too large" in diagnostics.errors[0].message
