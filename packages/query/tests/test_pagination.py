"""Tests for pagination and sort parsing."""

from __future__ import annotations

import pytest

from portfolio_query.constants import (
    PLAYLISTS_PER_PAGE,
    PLAYLIST_SORT_FIELDS,
    POST_SORT_FIELDS,
    SortField,
)
from portfolio_query.pagination import (
    Pagination,
    Sort,
    SortOrder,
    build_order_by,
    parse_pagination,
    parse_sort,
)


class TestParsePagination:
    def test_parses_numeric_strings(self) -> None:
        assert parse_pagination({"limit": "10", "offset": "20"}) == Pagination(10, 20)

    def test_defaults(self) -> None:
        assert parse_pagination({}) == Pagination(limit=None, offset=0)

    def test_empty_limit_is_unbounded(self) -> None:
        assert parse_pagination({"limit": ""}).limit is None

    def test_unparsable_values(self) -> None:
        result = parse_pagination({"limit": "abc", "offset": "xyz"})
        assert result == Pagination(limit=None, offset=0)

    def test_leading_digits_are_used(self) -> None:
        assert parse_pagination({"limit": "12px"}).limit == 12

    def test_negative_offset_is_clamped(self) -> None:
        assert parse_pagination({"offset": "-5"}).offset == 0

    def test_multi_value_takes_first(self) -> None:
        assert parse_pagination({"limit": ["5", "7"]}).limit == 5

    def test_non_finite_numbers(self) -> None:
        result = parse_pagination({"limit": float("nan"), "offset": float("inf")})
        assert result == Pagination(limit=None, offset=0)

    def test_custom_keys(self) -> None:
        result = parse_pagination({"take": "3", "skip": "6"}, limit_key="take", offset_key="skip")
        assert result == Pagination(3, 6)


class TestParseSort:
    def test_defaults(self) -> None:
        assert parse_sort({}) == Sort("createdAt", SortOrder.DESC)

    def test_custom_defaults(self) -> None:
        assert parse_sort({}, "datePublished", "asc") == Sort("datePublished", SortOrder.ASC)

    def test_each_field_defaults_independently(self) -> None:
        assert parse_sort({"sortBy": "title"}) == Sort("title", SortOrder.DESC)
        assert parse_sort({"sortOrder": "asc"}) == Sort("createdAt", SortOrder.ASC)

    def test_order_is_case_insensitive(self) -> None:
        assert parse_sort({"sortOrder": "ASC"}).sort_order is SortOrder.ASC

    def test_invalid_order_falls_back(self) -> None:
        assert parse_sort({"sortOrder": "sideways"}).sort_order is SortOrder.DESC


class TestBuildOrderBy:
    def test_maps_logical_key(self) -> None:
        assert build_order_by("date", "desc", {"date": "createdAt"}) == {"createdAt": "desc"}

    def test_unmapped_key_used_as_is(self) -> None:
        assert build_order_by("title", SortOrder.ASC) == {"title": "asc"}

    @pytest.mark.parametrize("field", sorted(POST_SORT_FIELDS))
    def test_post_sort_fields(self, field: str) -> None:
        assert build_order_by(field, "asc", POST_SORT_FIELDS) == {POST_SORT_FIELDS[field]: "asc"}


def test_playlist_listing_defaults() -> None:
    sort_by, sort_order = parse_sort({}, SortField.ORDER.value, SortOrder.ASC)
    limit, _ = parse_pagination({"limit": str(PLAYLISTS_PER_PAGE)})
    assert build_order_by(sort_by, sort_order, PLAYLIST_SORT_FIELDS) == {"order": "asc"}
    assert limit == 9
