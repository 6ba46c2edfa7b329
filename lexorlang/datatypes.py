"""Primitive types for LEXOR.

LEXOR values are plain Python objects copied by value:

- INT: ``int``
- FLOAT: ``float``
- BOOL: ``bool``
- CHAR: one-character ``str``
- STRING: ``str``
- NULL: ``None``

This module owns the declared-type check used for every store into a
variable, and the canonical text form used by ``PRINT`` and ``&``.


File: datatypes.py
Version: 0.1.0
License: MIT
"""

import math
from enum import Enum

from lexorlang.exceptions import NumericOverflowException, TypeMismatchException

# Quoted spellings a BOOL accepts and compares equal to.
BOOL_TEXT = ("TRUE", "FALSE")


class VarType(str, Enum):
    """
    Declarable variable types.
    """
    INT = "INT"
    FLOAT = "FLOAT"
    BOOL = "BOOL"
    CHAR = "CHAR"
    STRING = "STRING"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


def is_number(value) -> bool:
    """
    Return True for INT and FLOAT values. Booleans are not numbers.
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def kind_of(value) -> str:
    """
    Name the kind of a runtime value for error messages.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "BOOL"
    if isinstance(value, int):
        return "INT"
    if isinstance(value, float):
        return "FLOAT"
    if isinstance(value, str):
        return "CHAR" if len(value) == 1 else "STRING"
    return type(value).__name__


def check_type(varname: str, var_type: VarType, value, token=None):
    """
    Check that ``value`` can be stored in a variable declared ``var_type``.

    Parameters:
        varname (str): Variable name, used in the error message.
        var_type (VarType): The declared type.
        value (Any): The candidate value.
        token (Token): Where to report a mismatch.

    Returns:
        The value to store. An INT widens to FLOAT, and the text ``"TRUE"`` or
        ``"FALSE"`` becomes a boolean for a BOOL variable.

    Raises:
        TypeMismatchException: If the value is not representable as ``var_type``.
    """
    match var_type:
        case VarType.INT:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        case VarType.FLOAT:
            if isinstance(value, float):
                return value
            if isinstance(value, int) and not isinstance(value, bool):
                try:
                    return float(value)
                except OverflowError as e:
                    raise NumericOverflowException(token) from e
        case VarType.BOOL:
            if isinstance(value, bool):
                return value
            if value in BOOL_TEXT:
                return value == "TRUE"
        case VarType.CHAR:
            if isinstance(value, str) and len(value) == 1:
                return value
        case VarType.STRING:
            if isinstance(value, str):
                return value
    raise TypeMismatchException(varname, var_type.value, kind_of(value), token)


def stringify(value) -> str:
    """
    Convert a value to its printed text.

    Booleans print as ``TRUE`` / ``FALSE``, NULL as ``NULL``, and a float with
    no fractional part drops its trailing ``.0``. Finite floats otherwise use
    Python's shortest round-trip text (``1e+16``); infinities and NaN print as
    ``Infinity``, ``-Infinity`` and ``NaN``.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)
