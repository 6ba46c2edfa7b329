"""Environment and scoping for LEXOR.

Each :class:`Environment` is one scope: a mapping from variable name to a
:class:`Binding` holding the declared type and current value. Scopes form a
chain through ``enclosing``. The interpreter creates the root scope once per
run and a child scope for every block it enters, dropping the child when the
block finishes, so no binding outlives its block.


File: environment.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass
from typing import Any, Optional

from lexorlang.datatypes import VarType, check_type
from lexorlang.exceptions import (
    UndefinedVariableException,
    UninitializedVariableException,
)


class _Uninitialized:
    """Marker for a declared variable that has no value yet."""

    def __repr__(self) -> str:
        return "UNINITIALIZED"


UNINITIALIZED = _Uninitialized()


@dataclass
class Binding:
    """A declared variable."""
    var_type: VarType
    value: Any = UNINITIALIZED


class Environment:
    """One scope in the chain of nested scopes."""

    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: dict[str, Binding] = {}

    def declare(self, name, var_type: VarType, value=UNINITIALIZED) -> None:
        """
        Install a binding in this scope.

        Re-declaring a name already bound in this scope replaces the old
        binding.

        Parameters:
            name (Token): The variable name token.
            var_type (VarType): The declared type.
            value (Any): Initial value, or UNINITIALIZED.

        Raises:
            TypeMismatchException: If the initial value does not fit the type.
        """
        if value is not UNINITIALIZED:
            value = check_type(name.lexeme, var_type, value, name)
        self.values[name.lexeme] = Binding(var_type, value)

    def lookup(self, name) -> Binding:
        """
        Find the binding for ``name``, innermost scope first.

        Raises:
            UndefinedVariableException: If no scope in the chain declares it.
        """
        env = self
        while env is not None:
            binding = env.values.get(name.lexeme)
            if binding is not None:
                return binding
            env = env.enclosing
        raise UndefinedVariableException(name.lexeme, name)

    def read(self, name):
        """
        Return the current value of ``name``.

        Raises:
            UndefinedVariableException: If the name is not declared.
            UninitializedVariableException: If it has no value yet.
        """
        binding = self.lookup(name)
        if binding.value is UNINITIALIZED:
            raise UninitializedVariableException(name.lexeme, name)
        return binding.value

    def assign(self, name, value):
        """
        Store ``value`` into the nearest existing binding for ``name``.

        Never creates a binding.

        Returns:
            The stored value, after type conversion.

        Raises:
            UndefinedVariableException: If the name is not declared.
            TypeMismatchException: If the value does not fit the declared type.
        """
        binding = self.lookup(name)
        binding.value = check_type(name.lexeme, binding.var_type, value, name)
        return binding.value
