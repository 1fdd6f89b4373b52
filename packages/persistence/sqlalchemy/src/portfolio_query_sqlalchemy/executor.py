"""
Run query descriptors against an ``AsyncSession``.

Supports two usage patterns, like a unit of work:

1. **Caller-managed session**::

       executor = DescriptorExecutor(session=session)

2. **Self-managed sessions**::

       executor = DescriptorExecutor(session_factory=session_factory(engine))

   Each call opens and closes its own session.

Rows come back as plain dicts: column attributes, loaded relationships
(nested dicts / lists of dicts) and, when counts were requested, a
``_count`` mapping.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Callable, Mapping
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, inspect, select

from portfolio_query.exceptions import NotFoundError
from portfolio_query.response import DataKey, format_paginated_response

from .compiler import COUNT_KEY, COUNT_LABEL_PREFIX, build_where, select_for
from .exceptions import SessionManagementError

if TYPE_CHECKING:
    from sqlalchemy.engine import Row
    from sqlalchemy.ext.asyncio import AsyncSession

    from portfolio_query.query import QueryDescriptor

    from .strategy import SQLAlchemyOperatorRegistry

    AsyncSessionFactory = Callable[[], AsyncSession]

logger = logging.getLogger(__name__)


def record_to_dict(record: Any, *, seen: set[int] | None = None) -> dict[str, Any]:
    """
    Build a dict from a mapped *record* without triggering lazy loads.

    Unloaded attributes are skipped; relationship cycles collapse to ``{}``.
    """
    seen = seen if seen is not None else set()
    if id(record) in seen:
        return {}
    seen.add(id(record))

    state = inspect(record)
    unloaded = state.unloaded
    mapper = state.mapper
    data: dict[str, Any] = {
        attr.key: getattr(record, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in unloaded
    }
    for rel in mapper.relationships:
        if rel.key in unloaded:
            continue
        value = getattr(record, rel.key)
        if value is None:
            data[rel.key] = None
        elif isinstance(value, list | tuple | set):
            data[rel.key] = [record_to_dict(v, seen=seen) for v in value]
        else:
            data[rel.key] = record_to_dict(value, seen=seen)
    return data


def _row_to_dict(row: Row[Any]) -> dict[str, Any]:
    data = record_to_dict(row[0])
    counts = {
        key[len(COUNT_LABEL_PREFIX) :]: value or 0
        for key, value in row._mapping.items()
        if isinstance(key, str) and key.startswith(COUNT_LABEL_PREFIX)
    }
    if counts:
        data[COUNT_KEY] = counts
    return data


class DescriptorExecutor:
    """
    Execute :class:`portfolio_query.query.QueryDescriptor` mappings.

    **Important:** Exactly one of ``session`` or ``session_factory`` must be
    provided.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'."
            )
        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'."
            )
        self._session = session
        self._session_factory = session_factory
        self._registry = registry

    @contextlib.asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[AsyncSession]:
        if self._session_factory is None:
            yield cast("AsyncSession", self._session)
            return
        async with self._session_factory() as session:
            yield session

    async def find_many(
        self,
        model: type[Any],
        descriptor: QueryDescriptor | Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        stmt = select_for(model, descriptor, registry=self._registry)
        logger.debug("find_many %s: %s", model.__name__, stmt)
        async with self._session_scope() as session:
            result = await session.execute(stmt)
            return [_row_to_dict(row) for row in result.all()]

    async def count(
        self,
        model: type[Any],
        where: Mapping[str, Any] | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(model)
        if where:
            stmt = stmt.where(build_where(model, where, registry=self._registry))
        async with self._session_scope() as session:
            total = await session.scalar(stmt)
        return int(total or 0)

    async def find_page(
        self,
        model: type[Any],
        descriptor: QueryDescriptor | Mapping[str, Any],
        *,
        data_key: DataKey | str | None = None,
        default_key: DataKey | str = DataKey.ITEMS,
    ) -> dict[str, Any]:
        """
        Fetch one page and the total matching count, wrapped in the
        paginated response envelope.

        ``total`` ignores ``take``/``skip``.
        """
        items = await self.find_many(model, descriptor)
        total = await self.count(model, descriptor.get("where"))
        logger.debug(
            "find_page %s: %d of %d rows", model.__name__, len(items), total
        )
        return format_paginated_response(
            items,
            total,
            descriptor.get("take"),
            descriptor.get("skip", 0),
            data_key,
            default_key=default_key,
        )

    async def find_first(
        self,
        model: type[Any],
        descriptor: QueryDescriptor | Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        first = {**(descriptor or {}), "take": 1}
        rows = await self.find_many(model, first)
        return rows[0] if rows else None

    async def find_first_or_raise(
        self,
        model: type[Any],
        descriptor: QueryDescriptor | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: If no row matches.
        """
        row = await self.find_first(model, descriptor)
        if row is None:
            raise NotFoundError(f"{model.__name__} not found")
        return row
