"""Errors.

Runtime errors raised by the interpreter. Each one carries the token where
the failure happened so it can be reported with a line and column, and all of
them share the :class:`LexorRuntimeError` base so execution can stop at the
first one.


File: exceptions.py
Version: 0.1.0
License: MIT
"""


class ParseError(Exception):
    """
    Raised inside the parser after a syntax error has been reported, telling
    the enclosing statement loop to resynchronize.
    """
    pass


class LexorRuntimeError(Exception):
    """
    Base class for errors raised while executing a program.
    """
    def __init__(self, message, token=None):
        self.token = token
        self.line = token.line if token is not None else 0
        self.column = token.column if token is not None else 0
        if token is not None:
            message += f" on line {self.line}"
        super().__init__(message)


class UndefinedVariableException(LexorRuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, token=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", token)


class UninitializedVariableException(LexorRuntimeError):
    """
    Error for reading a declared variable that was never given a value.
    """
    def __init__(self, varname, token=None):
        self.varname = varname
        super().__init__(f"Variable '{varname}' used before it was initialized", token)


class TypeMismatchException(LexorRuntimeError):
    """
    Error for storing a value whose kind disagrees with the declared type.
    """
    def __init__(self, varname, declared, kind, token=None):
        self.varname = varname
        self.declared = declared
        self.kind = kind
        super().__init__(
            f"Type mismatch: variable '{varname}' is declared {declared} "
            f"but was given a {kind} value",
            token,
        )


class OperandTypeException(LexorRuntimeError):
    """
    Error for an operator applied to operands of the wrong kind.
    """
    pass


class ConditionTypeException(LexorRuntimeError):
    """
    Error for an IF or loop condition that is not a boolean.
    """
    pass


class DivisionByZeroException(LexorRuntimeError):
    """
    Error for division or modulo by zero.
    """
    def __init__(self, token=None):
        super().__init__("Cannot divide by zero", token)


class InputArityException(LexorRuntimeError):
    """
    Error for a SCAN whose input line holds the wrong number of values.
    """
    def __init__(self, expected, actual, token=None):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} inputs, but got {actual}", token)


class InputFormatException(LexorRuntimeError):
    """
    Error for a SCAN input line that cannot be tokenized.
    """
    def __init__(self, line_text, token=None):
        self.line_text = line_text
        super().__init__(f"Could not read input values from {line_text!r}", token)


class InputExhaustedException(LexorRuntimeError):
    """
    Error for a SCAN after standard input has been exhausted.
    """
    def __init__(self, token=None):
        super().__init__("No more input available for SCAN", token)


class NumericOverflowException(LexorRuntimeError):
    """
    Error for an INT too large to convert to a FLOAT or to print.
    """
    def __init__(self, token=None, message="Numeric overflow: INT value is too large for a FLOAT"):
        super().__init__(message, token)
