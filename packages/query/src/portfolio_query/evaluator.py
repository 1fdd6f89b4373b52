"""
In-memory operator evaluation strategy.

Provides the MemoryOperator protocol and a registry that maps
WhereOperator → evaluation function, so the same ``where`` mapping that
is handed to the ORM can be checked against already-loaded objects.

New operators are added by subclassing MemoryOperator and registering
them via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .exceptions import OperatorNotFoundError
from .operators import WhereOperator


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> WhereOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(
        self,
        field_value: Any,
        condition_value: Any,
        *,
        insensitive: bool = False,
    ) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The actual value resolved from the candidate object.
            condition_value: The value given in the where mapping.
            insensitive: ``True`` when the clause carries ``mode: "insensitive"``.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by WhereOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualsOperator())

        result = registry.evaluate(WhereOperator.EQUALS, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[WhereOperator, MemoryOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: WhereOperator) -> None:
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: WhereOperator | str) -> MemoryOperator | None:
        try:
            key = WhereOperator(name)
        except ValueError:
            return None
        return self._operators.get(key)

    def has(self, name: WhereOperator | str) -> bool:
        return self.get(name) is not None

    @property
    def supported_operators(self) -> set[WhereOperator]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: WhereOperator | str,
        field_value: Any,
        condition_value: Any,
        *,
        insensitive: bool = False,
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                [o.value for o in self._operators],
            )
        return op.evaluate(field_value, condition_value, insensitive=insensitive)
