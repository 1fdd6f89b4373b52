"""
SQLAlchemy operator compilation strategy.

Provides the ``SQLAlchemyOperator`` protocol and a registry, structured
in the same strategy pattern as the in-memory evaluator of
:mod:`portfolio_query.evaluator`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from portfolio_query.exceptions import OperatorNotFoundError
from portfolio_query.operators import WhereOperator

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a where-DSL operator
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> WhereOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(
        self,
        column: Any,
        value: Any,
        *,
        insensitive: bool = False,
    ) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A SQLAlchemy column or instrumented attribute.
            value: The condition value from the where mapping.
            insensitive: ``True`` when the clause carries ``mode: "insensitive"``.

        Returns:
            A SQLAlchemy boolean expression.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """
    Registry of ``SQLAlchemyOperator`` instances keyed by
    :class:`WhereOperator`.
    """

    def __init__(self) -> None:
        self._operators: dict[WhereOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: WhereOperator) -> None:
        self._operators.pop(name, None)

    def get(self, name: WhereOperator | str) -> SQLAlchemyOperator | None:
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

    def apply(
        self,
        name: WhereOperator | str,
        column: Any,
        value: Any,
        *,
        insensitive: bool = False,
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                [o.value for o in self._operators],
            )
        return op.apply(column, value, insensitive=insensitive)
