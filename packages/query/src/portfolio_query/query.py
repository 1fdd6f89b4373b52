"""
Query descriptors handed verbatim to the ORM client.

A descriptor is ``{where, orderBy, take?, skip?, include}``. ``take`` and
``skip`` are left out entirely (not set to ``None``) when no limiting is
requested: consumers treat key presence as significant, and "no
pagination" must stay distinguishable from "page 0".
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from typing_extensions import NotRequired

from .include import build_post_include_clause, build_project_include_clause

logger = logging.getLogger(__name__)


class QueryDescriptor(TypedDict):
    where: dict[str, Any]
    orderBy: dict[str, str] | list[dict[str, str]]
    take: NotRequired[int]
    skip: NotRequired[int]
    include: dict[str, Any]


def _build_query(
    *,
    where: Mapping[str, Any] | None,
    order_by: Mapping[str, str] | list[dict[str, str]] | None,
    limit: int | None,
    offset: int | None,
    include: dict[str, Any],
) -> QueryDescriptor:
    descriptor: QueryDescriptor = {
        "where": dict(where or {}),
        "orderBy": list(order_by) if isinstance(order_by, list) else dict(order_by or {}),
        "include": include,
    }
    if limit:
        descriptor["take"] = limit
    if offset:
        descriptor["skip"] = offset
    logger.debug("Composed query descriptor: %s", descriptor)
    return descriptor


def build_post_query(
    *,
    where: Mapping[str, Any] | None = None,
    order_by: Mapping[str, str] | list[dict[str, str]] | None = None,
    limit: int | None = None,
    offset: int | None = None,
    include_counts: bool = True,
    approved_comments_only: bool = False,
) -> QueryDescriptor:
    return _build_query(
        where=where,
        order_by=order_by,
        limit=limit,
        offset=offset,
        include=build_post_include_clause(
            include_counts, approved_comments_only=approved_comments_only
        ),
    )


def build_project_query(
    *,
    where: Mapping[str, Any] | None = None,
    order_by: Mapping[str, str] | list[dict[str, str]] | None = None,
    limit: int | None = None,
    offset: int | None = None,
    include_team: bool = True,
) -> QueryDescriptor:
    return _build_query(
        where=where,
        order_by=order_by,
        limit=limit,
        offset=offset,
        include=build_project_include_clause(include_team),
    )
