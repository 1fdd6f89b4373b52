"""
Evaluate a ``where`` mapping against already-loaded objects.

The mapping grammar is the one produced by :mod:`portfolio_query.where`:

- ``{"field": value}`` — equality (``None`` means "is null");
- ``{"field": {"contains": "x", "mode": "insensitive"}}`` — operator map,
  every operator must hold;
- ``{"AND": [...]}``, ``{"OR": [...]}``, ``{"NOT": [...]}`` — logical keys;
- ``{"relation": {"some": {...}}}`` / ``every`` / ``none`` / ``is`` /
  ``isNot`` — relation filters.

Candidates may be mappings or plain objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import OperatorNotFoundError
from .operators import (
    FIELD_OPERATORS,
    INSENSITIVE,
    MODE_KEY,
    RELATION_OPERATORS,
    LogicalOperator,
    RelationOperator,
    WhereOperator,
)
from .operators_memory import build_default_registry
from .utils import get_field

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T")

_default_registry: MemoryOperatorRegistry | None = None


def _get_default_registry() -> MemoryOperatorRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


def matches(
    where: Mapping[str, Any] | None,
    candidate: Any,
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> bool:
    """Return ``True`` when *candidate* satisfies every key of *where*."""
    if not where:
        return True
    return _match_node(where, candidate, registry or _get_default_registry())


def filter_where(
    items: Iterable[T],
    where: Mapping[str, Any] | None,
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> list[T]:
    """Return a new list with the items of *items* matching *where*."""
    reg = registry or _get_default_registry()
    return [item for item in items if matches(where, item, registry=reg)]


# ---------------------------------------------------------------------------
# Internal evaluation
# ---------------------------------------------------------------------------


def _as_list(conditions: Any) -> list[Mapping[str, Any]]:
    if isinstance(conditions, Mapping):
        return [conditions]
    return list(conditions or [])


def _match_node(
    where: Mapping[str, Any],
    candidate: Any,
    registry: MemoryOperatorRegistry,
) -> bool:
    for key, condition in where.items():
        if key == LogicalOperator.AND:
            ok = all(_match_node(c, candidate, registry) for c in _as_list(condition))
        elif key == LogicalOperator.OR:
            ok = any(_match_node(c, candidate, registry) for c in _as_list(condition))
        elif key == LogicalOperator.NOT:
            ok = not any(
                _match_node(c, candidate, registry) for c in _as_list(condition)
            )
        else:
            ok = _match_field(get_field(candidate, key), condition, registry)
        if not ok:
            return False
    return True


def _match_field(
    value: Any,
    condition: Any,
    registry: MemoryOperatorRegistry,
) -> bool:
    if condition is None:
        return value is None
    if not isinstance(condition, Mapping):
        return registry.evaluate(WhereOperator.EQUALS, value, condition)

    keys = set(condition)
    if keys & RELATION_OPERATORS:
        return _match_relation(value, condition, registry)
    if keys - {MODE_KEY} <= FIELD_OPERATORS:
        return _match_operators(value, condition, registry)
    if isinstance(value, Mapping) or (
        value is not None and not isinstance(value, str | int | float | bool)
    ):
        # Nested filter on a to-one relation
        return _match_node(condition, value, registry)

    unknown = sorted(keys - FIELD_OPERATORS - {MODE_KEY})
    raise OperatorNotFoundError(unknown[0], sorted(FIELD_OPERATORS))


def _match_operators(
    value: Any,
    condition: Mapping[str, Any],
    registry: MemoryOperatorRegistry,
) -> bool:
    insensitive = condition.get(MODE_KEY) == INSENSITIVE
    for op, expected in condition.items():
        if op == MODE_KEY:
            continue
        if op == WhereOperator.NOT and isinstance(expected, Mapping):
            nested = dict(expected)
            if insensitive:
                nested.setdefault(MODE_KEY, INSENSITIVE)
            if _match_operators(value, nested, registry):
                return False
            continue
        if op == WhereOperator.NOT and expected is None:
            if value is None:
                return False
            continue
        if not registry.evaluate(op, value, expected, insensitive=insensitive):
            return False
    return True


def _match_relation(
    value: Any,
    condition: Mapping[str, Any],
    registry: MemoryOperatorRegistry,
) -> bool:
    related = value if isinstance(value, list | tuple) else [] if value is None else [value]
    for op, nested in condition.items():
        if op == RelationOperator.SOME:
            ok = any(_match_node(nested or {}, r, registry) for r in related)
        elif op == RelationOperator.EVERY:
            ok = all(_match_node(nested or {}, r, registry) for r in related)
        elif op == RelationOperator.NONE:
            ok = not any(_match_node(nested or {}, r, registry) for r in related)
        elif op == RelationOperator.IS:
            ok = value is None if nested is None else (
                value is not None and _match_node(nested, value, registry)
            )
        elif op == RelationOperator.IS_NOT:
            ok = value is not None if nested is None else (
                value is None or not _match_node(nested, value, registry)
            )
        else:
            raise OperatorNotFoundError(op, sorted(RELATION_OPERATORS))
        if not ok:
            return False
    return True
