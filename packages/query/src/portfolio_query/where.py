"""
Where-clause builders.

Translate a filter intent into the ORM's ``where`` mapping. Keys whose
value would be ``None`` are dropped: an explicit key means "filter on
this", so absent and ``"all"`` filters must never appear.

Example::

    build_post_where_clause(status="Published", topic="React", search="hooks")
    # {
    #     "status": "Published",
    #     "topic": "react",
    #     "OR": [
    #         {"title": {"contains": "hooks", "mode": "insensitive"}},
    #         {"description": {"contains": "hooks", "mode": "insensitive"}},
    #         {"content": {"contains": "hooks", "mode": "insensitive"}},
    #     ],
    # }
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .constants import ALL, POST_SEARCH_FIELDS, PROJECT_SEARCH_FIELDS
from .filters import PostFilter, ProjectFilter
from .operators import INSENSITIVE, LogicalOperator, WhereOperator

logger = logging.getLogger(__name__)


def remove_unset(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *mapping* without ``None``-valued keys."""
    return {key: value for key, value in mapping.items() if value is not None}


def build_search_filter(
    search: str | None,
    fields: Iterable[str] = ("title", "description"),
) -> dict[str, Any]:
    """Case-insensitive "contains" across *fields*, OR-ed together."""
    if not search:
        return {}
    return {
        LogicalOperator.OR.value: [
            {field: {WhereOperator.CONTAINS.value: search, "mode": INSENSITIVE}}
            for field in fields
        ]
    }


def _tags_predicate(tags: list[str] | None) -> dict[str, Any] | None:
    if not tags:
        return None
    return {WhereOperator.HAS_SOME.value: list(tags)}


def build_post_where_clause(
    filters: PostFilter | Mapping[str, Any] | None = None,
    /,
    **kwargs: Any,
) -> dict[str, Any]:
    f = PostFilter.coerce(filters, **kwargs)
    where = remove_unset(
        {
            "status": None if f.status == ALL else f.status,
            "topic": f.topic.lower() if f.topic else None,
            **build_search_filter(f.search, POST_SEARCH_FIELDS),
            "tags": _tags_predicate(f.tags),
        }
    )
    logger.debug("Built post where clause: %s", where)
    return where


def build_project_where_clause(
    filters: ProjectFilter | Mapping[str, Any] | None = None,
    /,
    **kwargs: Any,
) -> dict[str, Any]:
    f = ProjectFilter.coerce(filters, **kwargs)
    where = remove_unset(
        {
            "status": f.status if f.status and f.status != ALL else None,
            **build_search_filter(f.search, PROJECT_SEARCH_FIELDS),
            "tags": _tags_predicate(f.tags),
            # False is a real filter value and must survive remove_unset
            "featured": f.featured,
        }
    )
    logger.debug("Built project where clause: %s", where)
    return where
