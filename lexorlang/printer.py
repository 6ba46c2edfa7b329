"""AST printer.

Renders statements and expressions as parenthesized prefix text, for example
``PRINT: 10 + 5 * 2`` becomes ``(print (+ 10 (* 5 2)))``. Used by the
``LEXORDEBUG`` dump in the command-line driver and to quote the failing
expression in runtime error messages.


File: printer.py
Version: 0.1.0
License: MIT
"""

from lexorlang.ast_nodes import (
    Assign,
    Binary,
    Block,
    Declare,
    Expression,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Scan,
    Unary,
    Variable,
    When,
)
from lexorlang.datatypes import stringify


class AstPrinter:
    """Pretty printer over the closed set of AST nodes."""

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def print(self, statements) -> str:
        """
        Render a list of statements, one per line.
        """
        return "\n".join(self.print_stmt(stmt) for stmt in statements)

    def print_stmt(self, stmt, depth: int = 0) -> str:
        """
        Render a single statement at the given nesting depth.
        """
        pad = self.indent * depth
        match stmt:
            case Declare(var_type=var_type, names=names):
                parts = []
                for name, initializer in names:
                    if initializer is None:
                        parts.append(name.lexeme)
                    else:
                        parts.append(f"(= {name.lexeme} {self.print_expr(initializer)})")
                return f"{pad}(declare {var_type.value} {' '.join(parts)})"
            case Expression(expression=expression):
                return f"{pad}{self.print_expr(expression)}"
            case Print(expression=expression):
                return f"{pad}(print {self.print_expr(expression)})"
            case Scan(names=names):
                return f"{pad}(scan {' '.join(name.lexeme for name in names)})"
            case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                text = (
                    f"{pad}(if {self.print_expr(condition)}\n"
                    f"{self.print_stmt(then_branch, depth + 1)}"
                )
                if else_branch is not None:
                    text += f"\n{self.print_stmt(else_branch, depth + 1)}"
                return text + ")"
            case When(condition=condition, body=body):
                return (
                    f"{pad}(when {self.print_expr(condition)}\n"
                    f"{self.print_stmt(body, depth + 1)})"
                )
            case Block(statements=statements):
                if not statements:
                    return f"{pad}(block)"
                inner = "\n".join(self.print_stmt(s, depth + 1) for s in statements)
                return f"{pad}(block\n{inner})"
        raise TypeError(f"Unknown statement node: {stmt!r}")

    def print_expr(self, expr) -> str:
        """
        Render an expression.
        """
        match expr:
            case Literal(value=value):
                if isinstance(value, str):
                    return repr(value)
                return stringify(value)
            case Variable(name=name):
                return name.lexeme
            case Assign(name=name, value=value):
                return f"(= {name.lexeme} {self.print_expr(value)})"
            case Unary(operator=operator, operand=operand):
                return f"({operator.lexeme} {self.print_expr(operand)})"
            case (
                Binary(left=left, operator=operator, right=right)
                | Logical(left=left, operator=operator, right=right)
            ):
                return f"({operator.lexeme} {self.print_expr(left)} {self.print_expr(right)})"
            case Grouping(expression=expression):
                return f"(group {self.print_expr(expression)})"
        raise TypeError(f"Unknown expression node: {expr!r}")
