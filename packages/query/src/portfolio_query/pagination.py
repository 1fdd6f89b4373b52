"""Pagination and sort directives parsed from untrusted query-string values."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, NamedTuple

from .utils import parse_int


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Pagination(NamedTuple):
    """``limit`` of ``None`` means unbounded."""

    limit: int | None
    offset: int


class Sort(NamedTuple):
    sort_by: str
    sort_order: SortOrder


def _first(value: Any) -> Any:
    # Multi-value query strings arrive as lists; the first value wins
    if isinstance(value, list | tuple):
        return value[0] if value else None
    return value


def parse_pagination(
    query: Mapping[str, Any],
    *,
    limit_key: str = "limit",
    offset_key: str = "offset",
) -> Pagination:
    raw_limit = _first(query.get(limit_key))
    limit = parse_int(raw_limit) if raw_limit not in (None, "") else None

    offset = parse_int(_first(query.get(offset_key)))
    if offset is None or offset < 0:
        offset = 0
    return Pagination(limit=limit, offset=offset)


def _parse_sort_order(value: Any, default: SortOrder | str) -> SortOrder:
    try:
        return SortOrder(str(value).lower())
    except ValueError:
        return SortOrder(default)


def parse_sort(
    query: Mapping[str, Any],
    default_sort_by: str = "createdAt",
    default_sort_order: SortOrder | str = SortOrder.DESC,
) -> Sort:
    """Each field falls back to its default independently of the other."""
    sort_by = _first(query.get("sortBy")) or default_sort_by
    raw_order = _first(query.get("sortOrder"))
    sort_order = (
        _parse_sort_order(raw_order, default_sort_order)
        if raw_order
        else SortOrder(default_sort_order)
    )
    return Sort(sort_by=str(sort_by), sort_order=sort_order)


def build_order_by(
    sort_by: str,
    sort_order: SortOrder | str,
    field_map: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Map a logical sort key to its column; unmapped keys are used as-is."""
    field = (field_map or {}).get(sort_by) or sort_by
    order = sort_order.value if isinstance(sort_order, SortOrder) else sort_order
    return {field: order}
