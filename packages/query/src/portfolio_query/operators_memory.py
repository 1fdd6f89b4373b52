"""
In-memory operator implementations.

Usage::

    from portfolio_query.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate(WhereOperator.HAS_SOME, ["react", "css"], ["react"])  # True

String operators treat a list field as matching when any element matches,
which is how tag arrays are searched.
"""

from __future__ import annotations

from typing import Any

from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators import WhereOperator


def _fold(value: Any, insensitive: bool) -> Any:
    if insensitive and isinstance(value, str):
        return value.lower()
    return value


def _ordered(field_value: Any, condition_value: Any) -> bool:
    return field_value is not None and condition_value is not None


class _StringOperator(MemoryOperator):
    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        if field_value is None or condition_value is None:
            return False
        needle = _fold(str(condition_value), insensitive)
        if isinstance(field_value, list | tuple):
            return any(
                item is not None and self._match(_fold(str(item), insensitive), needle)
                for item in field_value
            )
        return self._match(_fold(str(field_value), insensitive), needle)

    def _match(self, haystack: str, needle: str) -> bool:
        raise NotImplementedError


# -- Standard comparison ------------------------------------------------------


class EqualsOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.EQUALS

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return bool(
            _fold(field_value, insensitive) == _fold(condition_value, insensitive)
        )


class NotOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.NOT

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return bool(
            _fold(field_value, insensitive) != _fold(condition_value, insensitive)
        )


class InOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.IN

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _fold(field_value, insensitive) in [
            _fold(v, insensitive) for v in condition_value
        ]


class NotInOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.NOT_IN

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _fold(field_value, insensitive) not in [
            _fold(v, insensitive) for v in condition_value
        ]


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.LT

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _ordered(field_value, condition_value) and field_value < condition_value


class LessEqualOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.LTE

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _ordered(field_value, condition_value) and field_value <= condition_value


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.GT

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _ordered(field_value, condition_value) and field_value > condition_value


class GreaterEqualOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.GTE

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        return _ordered(field_value, condition_value) and field_value >= condition_value


# -- String -------------------------------------------------------------------


class ContainsOperator(_StringOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.CONTAINS

    def _match(self, haystack: str, needle: str) -> bool:
        return needle in haystack


class StartsWithOperator(_StringOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.STARTS_WITH

    def _match(self, haystack: str, needle: str) -> bool:
        return haystack.startswith(needle)


class EndsWithOperator(_StringOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.ENDS_WITH

    def _match(self, haystack: str, needle: str) -> bool:
        return haystack.endswith(needle)


# -- Scalar lists -------------------------------------------------------------


class HasOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        if not field_value:
            return False
        return _fold(condition_value, insensitive) in [
            _fold(v, insensitive) for v in field_value
        ]


class HasSomeOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS_SOME

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        if not field_value:
            return False
        present = {_fold(v, insensitive) for v in field_value}
        return any(_fold(v, insensitive) in present for v in condition_value)


class HasEveryOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS_EVERY

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        present = {_fold(v, insensitive) for v in field_value or ()}
        return {_fold(v, insensitive) for v in condition_value}.issubset(present)


class IsEmptyOperator(MemoryOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.IS_EMPTY

    def evaluate(
        self, field_value: Any, condition_value: Any, *, insensitive: bool = False
    ) -> bool:
        empty = not field_value
        return empty if condition_value else not empty


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a fresh registry populated with every built-in operator."""
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualsOperator(),
        NotOperator(),
        InOperator(),
        NotInOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        # String
        ContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
        # Scalar lists
        HasOperator(),
        HasSomeOperator(),
        HasEveryOperator(),
        IsEmptyOperator(),
    )
    return registry


__all__ = [
    "build_default_registry",
    "MemoryOperatorRegistry",
]
