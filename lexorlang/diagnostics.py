"""Diagnostics.

Collector for every problem found while running one LEXOR program. The lexer,
parser and interpreter all report here, and the driver inspects the two
signals afterwards:

- ``had_error``: a lexical or syntax error was recorded. The program must not
  be evaluated.
- ``had_runtime_error``: evaluation stopped on a runtime error.

A REPL calls :meth:`Diagnostics.reset` between inputs so no errors leak from
one run into the next.


File: diagnostics.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from lexorlang.lexer import Token, TokenType


class ErrorKind(str, Enum):
    """
    Categories of reported errors.
    """
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    RUNTIME = "runtime"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """A single reported error."""
    kind: ErrorKind
    message: str
    line: int
    column: int


class Diagnostics:
    """
    Process-scoped error sink.
    """

    def __init__(self, stream: TextIO | None = None):
        """
        Initialize an empty sink.

        Parameters:
            stream (TextIO | None): Where reports are echoed as they arrive.
                Nothing is echoed when None.
        """
        self.stream = stream
        self.errors: list[Diagnostic] = []
        self.had_error = False
        self.had_runtime_error = False

    def lexical_error(self, line: int, column: int, text: str, message: str) -> None:
        """
        Record a malformed character or literal.
        """
        self._echo(f"[line {line}:{column}] Error: {message}: {text!r}")
        self.errors.append(Diagnostic(ErrorKind.LEXICAL, f"{message}: {text!r}", line, column))
        self.had_error = True

    def syntax_error(self, token: Token, message: str) -> None:
        """
        Record a grammar violation at ``token``.
        """
        if token.type == TokenType.EOF:
            where = " at end"
        elif token.type == TokenType.NEWLINE:
            where = " at end of line"
        else:
            where = f" at '{token.lexeme}'"
        self._echo(f"[line {token.line}:{token.column}] Error{where}: {message}")
        self.errors.append(Diagnostic(ErrorKind.SYNTAX, message, token.line, token.column))
        self.had_error = True

    def runtime_error(self, error) -> None:
        """
        Record a runtime failure raised by the interpreter.

        Parameters:
            error (LexorRuntimeError): The exception that stopped execution.
        """
        self._echo(f"[line {error.line}] {type(error).__name__}: {error}")
        self.errors.append(Diagnostic(ErrorKind.RUNTIME, str(error), error.line, error.column))
        self.had_runtime_error = True

    def errors_of(self, kind: ErrorKind) -> list[Diagnostic]:
        """
        Return the recorded diagnostics of one kind, in report order.
        """
        return [d for d in self.errors if d.kind == kind]

    def reset(self) -> None:
        """
        Clear all recorded errors and both signals.
        """
        self.errors.clear()
        self.had_error = False
        self.had_runtime_error = False

    def _echo(self, text: str) -> None:
        if self.stream is not None:
            print(text, file=self.stream)
