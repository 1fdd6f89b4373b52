"""
Compile query descriptors into SQLAlchemy ``Select`` statements.

Uses the strategy pattern: each field operator is an isolated class in
``operators``, registered in a ``SQLAlchemyOperatorRegistry``.
``build_where`` walks the where mapping and delegates leaf-node
compilation to the registry.

Descriptors
-----------
``apply_query_descriptor`` takes a ``Select`` statement and the
``{where, orderBy, include, take?, skip?}`` mapping produced by
:func:`portfolio_query.query.build_post_query` and applies filtering,
ordering, eager loading, relation counts and limit/offset.

Relation counts (``include={"_count": {"select": {...}}}``) are added to
the statement as correlated scalar subqueries labelled
``COUNT_LABEL_PREFIX + <relation>``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    ColumnElement,
    Select,
    and_,
    asc,
    desc,
    func,
    inspect,
    not_,
    or_,
    select,
    true,
)
from sqlalchemy.orm import RelationshipProperty, selectinload

from portfolio_query.exceptions import FieldNotFoundError, OperatorNotFoundError
from portfolio_query.operators import (
    FIELD_OPERATORS,
    INSENSITIVE,
    MODE_KEY,
    RELATION_OPERATORS,
    LogicalOperator,
    RelationOperator,
    WhereOperator,
)
from portfolio_query.pagination import SortOrder
from portfolio_query.utils import to_snake_case

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from portfolio_query.query import QueryDescriptor

    from .strategy import SQLAlchemyOperatorRegistry

COUNT_KEY = "_count"
COUNT_LABEL_PREFIX = "_count__"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_attribute(model: type[Any], name: str) -> Any:
    """
    Return the mapped attribute *name* of *model*.

    camelCase names fall back to their snake_case spelling.

    Raises:
        FieldNotFoundError: If neither spelling is mapped.
    """
    mapper = inspect(model)
    keys = mapper.attrs.keys()
    for candidate in (name, to_snake_case(name)):
        if candidate in keys:
            return getattr(model, candidate)
    raise FieldNotFoundError(name, model.__name__, list(keys))


def build_where(
    model: type[Any],
    where: Mapping[str, Any] | None,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a where mapping.

    Args:
        model: The SQLAlchemy model class.
        where: Mapping in the grammar produced by :mod:`portfolio_query.where`.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Returns:
        SQLAlchemy Boolean expression; ``true()`` for an empty mapping.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(model, where or {}, reg)


def apply_order_by(
    stmt: Select[Any],
    model: type[Any],
    order_by: Mapping[str, Any] | list[Mapping[str, Any]] | None,
) -> Select[Any]:
    """Apply ``{field: "asc" | "desc"}`` (or a list of those) to *stmt*."""
    if not order_by:
        return stmt
    entries = [order_by] if isinstance(order_by, Mapping) else list(order_by)

    clauses: list[Any] = []
    for entry in entries:
        for field, direction in entry.items():
            column = resolve_attribute(model, field)
            order = str(getattr(direction, "value", direction)).lower()
            clauses.append(desc(column) if order == SortOrder.DESC.value else asc(column))
    return stmt.order_by(*clauses)


def apply_include(
    stmt: Select[Any],
    model: type[Any],
    include: Mapping[str, Any] | None,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Add eager loads and relation counts described by *include*.

    ``{"rel": True}`` loads the relation; ``{"rel": {"where": ..., "include": ...}}``
    loads a filtered relation with nested includes; ``{"_count": {"select":
    {"rel": True | {"where": ...}}}}`` adds labelled count columns.
    """
    if not include:
        return stmt
    reg = registry or DEFAULT_SQLA_REGISTRY

    count_spec = include.get(COUNT_KEY)
    if count_spec:
        stmt = stmt.add_columns(*_count_columns(model, count_spec, reg))

    loads = _loader_options(model, include, reg)
    if loads:
        stmt = stmt.options(*loads)
    return stmt


def apply_query_descriptor(
    stmt: Select[Any],
    model: type[Any],
    descriptor: QueryDescriptor | Mapping[str, Any] | None,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Apply a query descriptor to a SQLAlchemy ``Select`` statement.

    Handles: ``where``, ``orderBy``, ``include``, ``take`` and ``skip``.
    ``take``/``skip`` are only applied when present.
    """
    if not descriptor:
        return stmt
    reg = registry or DEFAULT_SQLA_REGISTRY

    where = descriptor.get("where")
    if where:
        stmt = stmt.where(build_where(model, where, registry=reg))
    stmt = apply_order_by(stmt, model, descriptor.get("orderBy"))
    stmt = apply_include(stmt, model, descriptor.get("include"), registry=reg)
    if "take" in descriptor:
        stmt = stmt.limit(descriptor["take"])
    if "skip" in descriptor:
        stmt = stmt.offset(descriptor["skip"])
    return stmt


def select_for(
    model: type[Any],
    descriptor: QueryDescriptor | Mapping[str, Any] | None = None,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """``select(model)`` with *descriptor* applied."""
    return apply_query_descriptor(select(model), model, descriptor, registry=registry)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _as_list(conditions: Any) -> list[Mapping[str, Any]]:
    if isinstance(conditions, Mapping):
        return [conditions]
    return list(conditions or [])


def _compile_node(
    model: type[Any],
    where: Mapping[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    clauses: list[ColumnElement[bool]] = []
    for key, condition in where.items():
        if key == LogicalOperator.AND:
            clauses.append(
                and_(true(), *[_compile_node(model, c, registry) for c in _as_list(condition)])
            )
        elif key == LogicalOperator.OR:
            parts = [_compile_node(model, c, registry) for c in _as_list(condition)]
            # An empty OR matches nothing
            clauses.append(or_(*parts) if parts else not_(true()))
        elif key == LogicalOperator.NOT:
            parts = [_compile_node(model, c, registry) for c in _as_list(condition)]
            if parts:
                clauses.append(not_(or_(*parts)))
        else:
            clauses.append(_compile_field(model, key, condition, registry))

    if not clauses:
        return true()
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def _compile_field(
    model: type[Any],
    key: str,
    condition: Any,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    attr = resolve_attribute(model, key)
    if isinstance(attr.property, RelationshipProperty):
        return _compile_relation(attr, condition, registry)

    if condition is None:
        return cast("ColumnElement[bool]", attr.is_(None))
    if not isinstance(condition, Mapping):
        return registry.apply(WhereOperator.EQUALS, attr, condition)

    unknown = sorted(set(condition) - FIELD_OPERATORS - {MODE_KEY})
    if unknown:
        raise OperatorNotFoundError(unknown[0], sorted(FIELD_OPERATORS))
    return _compile_operators(attr, condition, registry)


def _compile_operators(
    column: Any,
    condition: Mapping[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    insensitive = condition.get(MODE_KEY) == INSENSITIVE
    clauses: list[ColumnElement[bool]] = []
    for op, value in condition.items():
        if op == MODE_KEY:
            continue
        if op == WhereOperator.NOT and isinstance(value, Mapping):
            nested = dict(value)
            if insensitive:
                nested.setdefault(MODE_KEY, INSENSITIVE)
            clauses.append(not_(_compile_operators(column, nested, registry)))
            continue
        clauses.append(registry.apply(op, column, value, insensitive=insensitive))

    if not clauses:
        return true()
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def _compile_relation(
    attr: Any,
    condition: Any,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    prop = attr.property
    target = prop.mapper.class_

    if condition is None:
        if prop.uselist:
            return cast("ColumnElement[bool]", ~attr.any())
        return cast("ColumnElement[bool]", attr == None)  # noqa: E711
    if not isinstance(condition, Mapping):
        raise OperatorNotFoundError(str(condition), sorted(RELATION_OPERATORS))

    if not set(condition) & RELATION_OPERATORS:
        # Nested filter on the related record
        inner = _compile_node(target, condition, registry)
        return cast(
            "ColumnElement[bool]", attr.any(inner) if prop.uselist else attr.has(inner)
        )

    clauses: list[ColumnElement[bool]] = []
    for op, nested in condition.items():
        inner = _compile_node(target, nested or {}, registry)
        if op == RelationOperator.SOME:
            clauses.append(attr.any(inner))
        elif op == RelationOperator.EVERY:
            clauses.append(~attr.any(not_(inner)))
        elif op == RelationOperator.NONE:
            clauses.append(~attr.any(inner))
        elif op == RelationOperator.IS:
            clauses.append(attr == None if nested is None else attr.has(inner))  # noqa: E711
        elif op == RelationOperator.IS_NOT:
            clauses.append(
                attr != None if nested is None else ~attr.has(inner)  # noqa: E711
            )
        else:
            raise OperatorNotFoundError(op, sorted(RELATION_OPERATORS))
    return and_(*clauses) if len(clauses) > 1 else clauses[0]


def _count_columns(
    model: type[Any],
    count_spec: Any,
    registry: SQLAlchemyOperatorRegistry,
) -> list[Any]:
    selected = count_spec.get("select", {}) if isinstance(count_spec, Mapping) else {}
    columns: list[Any] = []
    for rel_name, rel_spec in selected.items():
        if not rel_spec:
            continue
        prop = resolve_attribute(model, rel_name).property
        if not isinstance(prop, RelationshipProperty):
            raise FieldNotFoundError(rel_name, model.__name__, _relationship_keys(model))
        target = prop.mapper.class_

        if prop.secondary is not None:
            source = prop.secondary.join(prop.target, prop.secondaryjoin)
        else:
            source = prop.target
        subquery = select(func.count()).select_from(source).where(prop.primaryjoin)

        where = rel_spec.get("where") if isinstance(rel_spec, Mapping) else None
        if where:
            subquery = subquery.where(build_where(target, where, registry=registry))

        columns.append(
            subquery.correlate(model)
            .scalar_subquery()
            .label(f"{COUNT_LABEL_PREFIX}{rel_name}")
        )
    return columns


def _loader_options(
    model: type[Any],
    include: Mapping[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> list[_AbstractLoad]:
    loads: list[_AbstractLoad] = []
    for rel_name, spec in include.items():
        if rel_name == COUNT_KEY or not spec:
            continue
        attr = resolve_attribute(model, rel_name)
        if not isinstance(attr.property, RelationshipProperty):
            raise FieldNotFoundError(rel_name, model.__name__, _relationship_keys(model))
        target = attr.property.mapper.class_

        if not isinstance(spec, Mapping):
            loads.append(selectinload(attr))
            continue

        where = spec.get("where")
        load = selectinload(
            attr.and_(build_where(target, where, registry=registry)) if where else attr
        )
        nested = spec.get("include")
        if nested:
            children = _loader_options(target, nested, registry)
            if children:
                load = load.options(*children)
        loads.append(load)
    return loads


def _relationship_keys(model: type[Any]) -> list[str]:
    return list(inspect(model).relationships.keys())
