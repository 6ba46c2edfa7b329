"""
Utility functions shared across LEXOR Language tests.
"""
import io

from lexorlang.diagnostics import Diagnostics
from lexorlang.interpreter import Interpreter
from lexorlang.lexer import tokenize
from lexorlang.parser import Parser


def program(*lines: str) -> str:
    """
    Wrap statement lines in the SCRIPT AREA envelope.
    """
    body = "".join(f"{line}\n" for line in lines)
    return f"SCRIPT AREA\nSTART SCRIPT\n{body}END SCRIPT\n"


def parse_source(source: str):
    """
    Parse source code and return the AST and the diagnostics sink.
    """
    diagnostics = Diagnostics()
    tokens = tokenize(source, diagnostics)
    parser = Parser(tokens, diagnostics)
    return parser.parse(), diagnostics


def run_source(source: str, stdin: str | None = None):
    """
    Run source code the way the CLI does and return the diagnostics sink and
    the interpreter, which is None when the program did not parse.
    """
    ast, diagnostics = parse_source(source)
    if diagnostics.had_error:
        return diagnostics, None
    stream = io.StringIO(stdin) if stdin is not None else None
    interpreter = Interpreter(diagnostics, stdin=stream)
    interpreter.interpret(ast)
    return diagnostics, interpreter
