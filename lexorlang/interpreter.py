"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
typed variables, arithmetic, comparison, logical and concatenation operators, conditionals,
loops, and the PRINT and SCAN statements.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both methods dispatch on the node class with `match`.

2. Environment
The interpreter holds the current scope in `environment`. The root scope is created with the
interpreter; every `Block` runs in a fresh child scope that is dropped when the block exits,
normally or through an error.

3. Expression Evaluation
`+ - * / %` promote to FLOAT when either operand is FLOAT and stay INT otherwise. Comparisons
compare numerically. `&` concatenates the printed text of both sides. `AND` and `OR` require
booleans and short-circuit. Nothing is implicitly truthy: a condition must be a boolean.

4. Control Flow
Control constructs include:
- `If`: executes exactly one branch.
- `When`: repeatedly executes its body while the condition holds (FOR and REPEAT WHEN).
- `Block`: executes a nested sequence of statements in a child scope.

5. Input and Output
`PRINT` writes the printed text of its value with no trailing newline. `SCAN` reads one line,
tokenizes it with the source lexer, and assigns the values positionally.

6. Error Handling
Runtime errors, such as type mismatches, undefined variables or division by zero, are raised
as `LexorRuntimeError` subclasses. `interpret()` stops at the first one and records it in the
diagnostics sink; output already written stays written.


File: interpreter.py
Version: 0.1.0
License: MIT
"""

import math
import sys

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
from lexorlang.datatypes import BOOL_TEXT, is_number, kind_of, stringify
from lexorlang.diagnostics import Diagnostics
from lexorlang.environment import UNINITIALIZED, Environment
from lexorlang.exceptions import (
    ConditionTypeException,
    DivisionByZeroException,
    InputArityException,
    InputExhaustedException,
    InputFormatException,
    LexorRuntimeError,
    NumericOverflowException,
    OperandTypeException,
)
from lexorlang.lexer import TokenType, tokenize
from lexorlang.printer import AstPrinter


INPUT_LITERALS = (
    TokenType.INTEGER_LITERAL,
    TokenType.FLOAT_LITERAL,
    TokenType.STRING_LITERAL,
    TokenType.CHAR_LITERAL,
    TokenType.TRUE,
    TokenType.FALSE,
)


def _truncate_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


def _truncate_mod(lhs: int, rhs: int) -> int:
    """Integer remainder taking the sign of the dividend."""
    return lhs - rhs * _truncate_div(lhs, rhs)


def _token_of(node):
    """Find a token inside an expression to report errors against."""
    match node:
        case Variable(name=name) | Assign(name=name):
            return name
        case Unary(operator=operator) | Binary(operator=operator) | Logical(operator=operator):
            return operator
        case Grouping(expression=expression):
            return _token_of(expression)
    return None


class Interpreter:
    """Tree-walk interpreter for LEXOR."""

    def __init__(self, diagnostics: Diagnostics, stdin=None, stdout=None):
        """
        Initialize the interpreter with a fresh root scope.

        Parameters:
            diagnostics (Diagnostics): Sink that receives the runtime error, if any.
            stdin (TextIO | None): Source of SCAN input; ``sys.stdin`` when None.
            stdout (TextIO | None): Destination of PRINT output; ``sys.stdout`` when None.
        """
        self.diagnostics = diagnostics
        self.stdin = stdin
        self.stdout = stdout
        self.globals = Environment()
        self.environment = self.globals
        self.printer = AstPrinter()

    def interpret(self, statements: list) -> None:
        """
        Execute a parsed program, stopping at the first runtime error.

        Parameters:
            statements (list): Top-level statements from the parser.
        """
        try:
            for stmt in statements:
                self.execute(stmt)
        except LexorRuntimeError as e:
            self.diagnostics.runtime_error(e)

    def execute_block(self, statements, environment: Environment) -> None:
        """
        Execute ``statements`` in ``environment``, restoring the previous
        scope afterwards.
        """
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def execute(self, stmt) -> None:
        """
        Execute a single statement.

        Raises:
            LexorRuntimeError: On any runtime failure.
            TypeError: For an unknown node.
        """
        match stmt:
            case Declare(var_type=var_type, names=names):
                for name, initializer in names:
                    value = UNINITIALIZED
                    if initializer is not None:
                        value = self.eval_expr(initializer)
                    self.environment.declare(name, var_type, value)

            case Expression(expression=expression):
                self.eval_expr(expression)

            case Print(expression=expression):
                value = self.eval_expr(expression)
                out = self.stdout if self.stdout is not None else sys.stdout
                print(self._stringify(value, _token_of(expression)), end="", file=out, flush=True)

            case Scan(names=names):
                values = self.read_input(names[0])
                if len(values) != len(names):
                    raise InputArityException(len(names), len(values), names[0])
                for name, value in zip(names, values):
                    self.environment.assign(name, value)

            case If(condition=condition, then_branch=then_branch, else_branch=else_branch, keyword=keyword):
                if self.eval_condition(condition, keyword):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)

            case When(condition=condition, body=body, keyword=keyword):
                while self.eval_condition(condition, keyword):
                    self.execute(body)

            case Block(statements=statements):
                self.execute_block(statements, Environment(self.environment))

            case _:
                raise TypeError(f"Unknown statement type: {stmt!r}")

    def eval_condition(self, node, keyword=None) -> bool:
        """
        Evaluate an IF or loop condition, which must produce a boolean.
        Errors point at the condition, or at ``keyword`` when the condition
        holds no token of its own.

        Raises:
            ConditionTypeException: If the value is not a boolean.
        """
        value = self.eval_expr(node)
        if not isinstance(value, bool):
            raise ConditionTypeException(
                f"Condition must be a BOOL but was {kind_of(value)}: {self.printer.print_expr(node)}",
                _token_of(node) or keyword,
            )
        return value

    def read_input(self, token) -> list:
        """
        Read one line for SCAN and return the values it holds.

        Numbers, characters, strings and TRUE/FALSE are values, a ``-`` or
        ``+`` directly before a number signs it, a bare word is read as text,
        and everything else separates values.

        Raises:
            InputExhaustedException: If standard input is exhausted.
            InputFormatException: If the line does not tokenize.
        """
        stream = self.stdin if self.stdin is not None else sys.stdin
        line = stream.readline()
        if line == "":
            raise InputExhaustedException(token)
        line = line.rstrip("\r\n")

        scratch = Diagnostics()
        tokens = tokenize(line, scratch)
        if scratch.had_error:
            raise InputFormatException(line, token)

        values = []
        sign = None
        for tok in tokens:
            if tok.type in (TokenType.MINUS, TokenType.PLUS):
                sign = tok.type
                continue
            if tok.type in (TokenType.INTEGER_LITERAL, TokenType.FLOAT_LITERAL):
                values.append(-tok.literal if sign == TokenType.MINUS else tok.literal)
            elif tok.type in INPUT_LITERALS:
                values.append(tok.literal)
            elif tok.type == TokenType.IDENTIFIER:
                values.append(tok.lexeme)
            sign = None
        return values

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (Expr): An expression node.

        Returns:
            The evaluated value.

        Raises:
            LexorRuntimeError: On any runtime failure.
            TypeError: For an unknown node.
        """
        match node:
            case Literal(value=value):
                return value

            case Grouping(expression=expression):
                return self.eval_expr(expression)

            case Variable(name=name):
                return self.environment.read(name)

            case Assign(name=name, value=value_node):
                value = self.eval_expr(value_node)
                self.environment.assign(name, value)
                return value

            case Logical(left=left, operator=operator, right=right):
                lhs = self._require_bool(self.eval_expr(left), operator)
                if operator.type == TokenType.OR:
                    if lhs:
                        return True
                elif not lhs:
                    return False
                return self._require_bool(self.eval_expr(right), operator)

            case Unary(operator=operator, operand=operand_node):
                operand = self.eval_expr(operand_node)
                match operator.type:
                    case TokenType.NOT:
                        return not self._require_bool(operand, operator)
                    case TokenType.MINUS:
                        self._require_number(operand, operator)
                        return -operand
                    case TokenType.PLUS:
                        self._require_number(operand, operator)
                        return operand
                raise TypeError(f"Unknown unary operator '{operator.lexeme}'")

            case Binary(left=left, operator=operator, right=right):
                lhs = self.eval_expr(left)
                rhs = self.eval_expr(right)
                return self.eval_binary(operator, lhs, rhs)

        raise TypeError(f"Invalid expression node: {node!r}")

    def eval_binary(self, operator, lhs, rhs):
        """
        Apply a binary operator to two evaluated operands.
        """
        match operator.type:
            case TokenType.CONCAT:
                return self._stringify(lhs, operator) + self._stringify(rhs, operator)
            case TokenType.EQUAL_EQUAL:
                return self._is_equal(lhs, rhs)
            case TokenType.NOT_EQUAL:
                return not self._is_equal(lhs, rhs)

        if not (is_number(lhs) and is_number(rhs)):
            raise OperandTypeException(
                f"Operands of '{operator.lexeme}' must be numbers, "
                f"got {kind_of(lhs)} and {kind_of(rhs)}",
                operator,
            )
        both_int = isinstance(lhs, int) and isinstance(rhs, int)

        try:
            return self._eval_numeric(operator, lhs, rhs, both_int)
        except OverflowError as e:
            raise NumericOverflowException(operator) from e

    @staticmethod
    def _eval_numeric(operator, lhs, rhs, both_int: bool):
        match operator.type:
            # Arithmetic
            case TokenType.PLUS:
                return lhs + rhs
            case TokenType.MINUS:
                return lhs - rhs
            case TokenType.STAR:
                return lhs * rhs
            case TokenType.SLASH:
                if rhs == 0:
                    raise DivisionByZeroException(operator)
                return _truncate_div(lhs, rhs) if both_int else float(lhs) / float(rhs)
            case TokenType.MOD:
                if rhs == 0:
                    raise DivisionByZeroException(operator)
                return _truncate_mod(lhs, rhs) if both_int else math.fmod(lhs, rhs)
            # Comparison
            case TokenType.GREATER:
                return lhs > rhs
            case TokenType.GREATER_EQUAL:
                return lhs >= rhs
            case TokenType.LESS:
                return lhs < rhs
            case TokenType.LESS_EQUAL:
                return lhs <= rhs
        raise TypeError(f"Unknown binary operator '{operator.lexeme}'")

    @staticmethod
    def _stringify(value, token) -> str:
        try:
            return stringify(value)
        except ValueError as e:
            # Python refuses to print ints past its digit limit
            raise NumericOverflowException(token, "Numeric overflow: INT value is too large to print") from e

    @staticmethod
    def _is_equal(lhs, rhs) -> bool:
        if lhs is None or rhs is None:
            return lhs is None and rhs is None
        if isinstance(lhs, bool) != isinstance(rhs, bool):
            # A BOOL matches its quoted spelling, as in IF (flag == "TRUE")
            flag, other = (lhs, rhs) if isinstance(lhs, bool) else (rhs, lhs)
            return other in BOOL_TEXT and stringify(flag) == other
        return lhs == rhs

    @staticmethod
    def _require_bool(value, operator) -> bool:
        if not isinstance(value, bool):
            raise OperandTypeException(
                f"Operand of '{operator.lexeme}' must be a BOOL, got {kind_of(value)}",
                operator,
            )
        return value

    @staticmethod
    def _require_number(value, operator) -> None:
        if not is_number(value):
            raise OperandTypeException(
                f"Operand of '{operator.lexeme}' must be a number, got {kind_of(value)}",
                operator,
            )
