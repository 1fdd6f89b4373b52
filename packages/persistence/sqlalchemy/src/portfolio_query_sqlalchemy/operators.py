"""
SQLAlchemy operator implementations and the default registry.

Usage::

    from portfolio_query_sqlalchemy.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(WhereOperator.EQUALS, Post.status, "Published")

Scalar-list operators (``has``, ``hasSome``, ``hasEvery``, ``isEmpty``)
compile to PostgreSQL array operators and expect a
``sqlalchemy.dialects.postgresql.ARRAY`` column.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func

from portfolio_query.operators import WhereOperator

from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


def _lower(column: Any, value: Any, insensitive: bool) -> tuple[Any, Any]:
    if insensitive and isinstance(value, str):
        return func.lower(column), value.lower()
    return column, value


# -- Standard comparison ------------------------------------------------------


class EqualsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.EQUALS

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_(None))
        col, val = _lower(column, value, insensitive)
        return cast("ColumnElement[bool]", col == val)


class NotOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.NOT

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_not(None))
        col, val = _lower(column, value, insensitive)
        return cast("ColumnElement[bool]", col != val)


class InOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.IN

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.in_(list(value)))


class NotInOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.NOT_IN

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_in(list(value)))


class LessThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.LT

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column < value)


class LessEqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.LTE

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column <= value)


class GreaterThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.GT

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column > value)


class GreaterEqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.GTE

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column >= value)


# -- String -------------------------------------------------------------------


class ContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.CONTAINS

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        if insensitive:
            return cast("ColumnElement[bool]", column.icontains(value, autoescape=True))
        return cast("ColumnElement[bool]", column.contains(value, autoescape=True))


class StartsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.STARTS_WITH

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        if insensitive:
            return cast(
                "ColumnElement[bool]", column.istartswith(value, autoescape=True)
            )
        return cast("ColumnElement[bool]", column.startswith(value, autoescape=True))


class EndsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.ENDS_WITH

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        if insensitive:
            return cast("ColumnElement[bool]", column.iendswith(value, autoescape=True))
        return cast("ColumnElement[bool]", column.endswith(value, autoescape=True))


# -- Scalar lists (PostgreSQL arrays) -----------------------------------------


class HasOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.contains([value]))


class HasSomeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS_SOME

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.overlap(list(value)))


class HasEveryOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.HAS_EVERY

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.contains(list(value)))


class IsEmptyOperator(SQLAlchemyOperator):
    @property
    def name(self) -> WhereOperator:
        return WhereOperator.IS_EMPTY

    def apply(
        self, column: Any, value: Any, *, insensitive: bool = False
    ) -> ColumnElement[bool]:
        size = func.coalesce(func.cardinality(column), 0)
        if value:
            return cast("ColumnElement[bool]", size == 0)
        return cast("ColumnElement[bool]", size > 0)


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
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


DEFAULT_SQLA_REGISTRY = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
]
