"""
Tests for the diagnostics sink shared by the lexer, parser and interpreter.
"""
import io

from lexorlang.diagnostics import Diagnostic, Diagnostics, ErrorKind
from lexorlang.lexer import tokenize

from lexorlang.tests.utils import parse_source, program, run_source


def test_lexical_error_record_and_echo():
    stream = io.StringIO()
    diagnostics = Diagnostics(stream)
    tokenize("x @", diagnostics)
    assert diagnostics.errors == [
        Diagnostic(ErrorKind.LEXICAL, "Unexpected character: '@'", 1, 3),
    ]
    assert stream.getvalue() == "[line 1:3] Error: Unexpected character: '@'\n"


def test_syntax_error_location_text():
    """
    The echoed report names the offending lexeme, the end of the line or the
    end of the input.
    """
    stream = io.StringIO()
    diagnostics = Diagnostics(stream)
    from lexorlang.parser import Parser

    Parser(tokenize(program("PRINT 5"), diagnostics), diagnostics).parse()
    Parser(tokenize(program("PRINT:"), diagnostics), diagnostics).parse()
    Parser(tokenize("SCRIPT AREA\nSTART SCRIPT\n", diagnostics), diagnostics).parse()
    assert stream.getvalue().splitlines() == [
        "[line 3:7] Error at '5': Expected ':' after 'PRINT'",
        "[line 3:7] Error at end of line: Expected expression",
        "[line 3:1] Error at end: Expected 'END SCRIPT' to finish program",
    ]


def test_runtime_error_record_and_echo():
    stream = io.StringIO()
    diagnostics = Diagnostics(stream)
    from lexorlang.interpreter import Interpreter
    from lexorlang.parser import Parser

    ast = Parser(tokenize(program("PRINT: 1 / 0"), diagnostics), diagnostics).parse()
    Interpreter(diagnostics).interpret(ast)
    assert diagnostics.errors == [
        Diagnostic(ErrorKind.RUNTIME, "Cannot divide by zero on line 3", 3, 10),
    ]
    assert stream.getvalue() == (
        "[line 3] DivisionByZeroException: Cannot divide by zero on line 3\n"
    )


def test_library_use_is_silent_by_default(capsys):
    _, diagnostics = parse_source(program("PRINT 5"))
    assert diagnostics.had_error
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_static_and_runtime_signals_are_independent():
    _, diagnostics = parse_source(program("PRINT 5"))
    assert diagnostics.had_error
    assert not diagnostics.had_runtime_error

    diagnostics, _ = run_source(program("PRINT: missing"))
    assert diagnostics.had_runtime_error
    assert not diagnostics.had_error


def test_static_error_blocks_evaluation(capsys):
    """
    A program that failed to parse produces no output at all.
    """
    diagnostics, interpreter = run_source(
        "SCRIPT AREA\nDECLARE INT x = 5\nPRINT: x\nEND SCRIPT\n"
    )
    assert diagnostics.had_error
    assert interpreter is None
    assert capsys.readouterr().out == ""


def test_errors_of_filters_by_kind():
    _, diagnostics = parse_source(program("PRINT: 1 @", "PRINT 2"))
    kinds = [d.kind for d in diagnostics.errors]
    assert ErrorKind.LEXICAL in kinds and ErrorKind.SYNTAX in kinds
    assert all(d.kind == ErrorKind.SYNTAX for d in diagnostics.errors_of(ErrorKind.SYNTAX))
    assert diagnostics.errors_of(ErrorKind.RUNTIME) == []


def test_reset_clears_everything():
    diagnostics, _ = run_source(program("PRINT: 1 / 0"))
    assert diagnostics.had_runtime_error
    diagnostics.reset()
    assert diagnostics.errors == []
    assert not diagnostics.had_error
    assert not diagnostics.had_runtime_error
