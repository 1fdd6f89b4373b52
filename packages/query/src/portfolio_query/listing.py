"""
Filtering, sorting and pagination over already-fetched post lists.

Used by the article listing and search views, which filter a fully loaded
list as the visitor types. Every function returns a new list and leaves
its input untouched.
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Sequence
from typing import Any, TypeVar

from .constants import ALL, DATE_SORT_FIELDS, SortField
from .matching import filter_where
from .operators import INSENSITIVE, MODE_KEY, LogicalOperator, WhereOperator
from .pagination import SortOrder
from .utils import get_field, to_timestamp

T = TypeVar("T")

# -- filters ------------------------------------------------------------------


def filter_by_search(posts: Sequence[T], query: str | None) -> list[T]:
    """Case-insensitive substring match on title, description or any tag."""
    if not query:
        return list(posts)
    needle = {WhereOperator.CONTAINS.value: query, MODE_KEY: INSENSITIVE}
    return filter_where(
        posts,
        {
            LogicalOperator.OR.value: [
                {"title": needle},
                {"description": needle},
                {"tags": needle},
            ]
        },
    )


def filter_by_topic(posts: Sequence[T], topic: str | None) -> list[T]:
    if not topic or topic == ALL:
        return list(posts)
    return filter_where(posts, {"topic": topic})


def filter_by_tag(posts: Sequence[T], tag: str | None) -> list[T]:
    if not tag or tag == ALL:
        return list(posts)
    return filter_where(posts, {"tags": {WhereOperator.HAS.value: tag}})


def apply_filters(
    posts: Sequence[T],
    *,
    search_query: str | None = None,
    topic: str | None = None,
    tag: str | None = None,
) -> list[T]:
    filtered = filter_by_search(posts, search_query)
    filtered = filter_by_topic(filtered, topic)
    return filter_by_tag(filtered, tag)


# -- sorting ------------------------------------------------------------------


def _sort_key(post: Any, sort_by: str) -> tuple[Any, ...]:
    # Values are ranked by kind first so mixed or missing values never
    # get compared directly
    value = get_field(post, sort_by)
    if sort_by in DATE_SORT_FIELDS:
        return (1, to_timestamp(value))
    if value is None:
        return (0, 0)
    if isinstance(value, bool | int | float):
        return (1, value)
    if isinstance(value, datetime.date):
        return (1, to_timestamp(value))
    if isinstance(value, str):
        return (2, value.lower(), value)
    return (3, str(value))


def sort_posts(
    posts: Sequence[T],
    sort_by: str = SortField.DATE_PUBLISHED.value,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[T]:
    order = getattr(sort_order, "value", sort_order)
    descending = str(order).lower() != SortOrder.ASC.value
    return sorted(posts, key=lambda post: _sort_key(post, sort_by), reverse=descending)


def filter_and_sort_posts(
    posts: Sequence[T],
    *,
    search_query: str | None = None,
    topic: str | None = None,
    tag: str | None = None,
    sort_by: str = SortField.DATE_PUBLISHED.value,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[T]:
    filtered = apply_filters(posts, search_query=search_query, topic=topic, tag=tag)
    return sort_posts(filtered, sort_by, sort_order)


# -- pagination ---------------------------------------------------------------


def paginate(items: Sequence[T], page: int, items_per_page: int) -> list[T]:
    """Return page *page* (1-indexed); out-of-range pages are empty."""
    if page < 1 or items_per_page <= 0:
        return []
    start = (page - 1) * items_per_page
    return list(items[start : start + items_per_page])


def calculate_total_pages(total_items: int, items_per_page: int) -> int:
    """Ceiling division; no items means zero pages, not one."""
    if items_per_page <= 0 or total_items <= 0:
        return 0
    return math.ceil(total_items / items_per_page)
