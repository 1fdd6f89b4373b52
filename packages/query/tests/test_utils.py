"""Tests for field access and coercion helpers."""

from __future__ import annotations

import datetime

import pytest

from portfolio_query.utils import get_field, has_field, parse_int, to_snake_case, to_timestamp


class TestFieldAccess:
    def test_to_snake_case(self) -> None:
        assert to_snake_case("datePublished") == "date_published"
        assert to_snake_case("view_count") == "view_count"

    def test_get_field_mapping_and_object(self) -> None:
        class Row:
            view_count = 3

        assert get_field({"viewCount": 1}, "viewCount") == 1
        assert get_field({"view_count": 2}, "viewCount") == 2
        assert get_field(Row(), "viewCount") == 3
        assert get_field(None, "viewCount", "x") == "x"

    def test_has_field(self) -> None:
        assert has_field({"playlist_posts": []}, "playlistPosts")
        assert not has_field({"title": "A"}, "playlistPosts")


class TestParseInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("10", 10),
            (" 7 ", 7),
            ("10abc", 10),
            ("-3", -3),
            (4.9, 4),
            (["5", "6"], 5),
            ("abc", None),
            ("", None),
            (None, None),
            (True, None),
            (float("nan"), None),
            (float("inf"), None),
            (float("-inf"), None),
        ],
    )
    def test_values(self, raw: object, expected: int | None) -> None:
        assert parse_int(raw) == expected


class TestToTimestamp:
    def test_iso_string_with_z(self) -> None:
        assert to_timestamp("1970-01-01T00:01:00Z") == 60.0

    def test_datetime_and_date(self) -> None:
        aware = datetime.datetime(1970, 1, 1, 0, 0, 30, tzinfo=datetime.timezone.utc)
        assert to_timestamp(aware) == 30.0
        day = datetime.date(2024, 1, 2)
        assert to_timestamp(day) == datetime.datetime(2024, 1, 2).timestamp()

    @pytest.mark.parametrize("raw", [None, "", "not a date"])
    def test_unknown_is_zero(self, raw: object) -> None:
        assert to_timestamp(raw) == 0.0
