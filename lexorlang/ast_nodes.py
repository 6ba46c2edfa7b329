"""AST node definitions for LEXOR.

Every node is a frozen dataclass, and the set of nodes is closed: ``Expr`` and
``Stmt`` are unions of the concrete classes below. Consumers such as the
interpreter and :mod:`lexorlang.printer` dispatch on node class with a
``match`` statement, so a new consumer never needs to touch this module.

``FOR`` and ``REPEAT WHEN`` have no node of their own; the parser rewrites
them into ``When`` and ``Block``.


File: ast_nodes.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from lexorlang.datatypes import VarType
from lexorlang.lexer import Token


# ---- Expressions ----

@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: 'Expr'


@dataclass(frozen=True)
class Unary:
    operator: Token
    operand: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Logical:
    """``AND`` / ``OR``; the right side is evaluated only when needed."""
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'


Expr = Union[Literal, Variable, Assign, Unary, Binary, Logical, Grouping]


# ---- Statements ----

@dataclass(frozen=True)
class Declare:
    """
    ``DECLARE <TYPE> name[=expr] (, name[=expr])*``

    Attributes:
        var_type (VarType): The declared type shared by every name.
        names (tuple): ``(name_token, initializer_or_None)`` pairs in source order.
    """
    var_type: VarType
    names: tuple[tuple[Token, Optional['Expr']], ...]


@dataclass(frozen=True)
class Expression:
    expression: 'Expr'


@dataclass(frozen=True)
class Print:
    expression: 'Expr'


@dataclass(frozen=True)
class Scan:
    names: tuple[Token, ...]


@dataclass(frozen=True)
class If:
    condition: 'Expr'
    then_branch: 'Stmt'
    else_branch: Optional['Stmt'] = None
    keyword: Optional[Token] = field(default=None, compare=False)


@dataclass(frozen=True)
class When:
    """Pre-test loop."""
    condition: 'Expr'
    body: 'Stmt'
    keyword: Optional[Token] = field(default=None, compare=False)


@dataclass(frozen=True)
class Block:
    statements: tuple['Stmt', ...]


Stmt = Union[Declare, Expression, Print, Scan, If, When, Block]


__all__ = [
    "Literal", "Variable", "Assign", "Unary", "Binary", "Logical", "Grouping", "Expr",
    "Declare", "Expression", "Print", "Scan", "If", "When", "Block", "Stmt",
]
