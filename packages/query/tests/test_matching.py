"""Tests for in-memory operators and where-mapping evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from portfolio_query.evaluator import MemoryOperator, MemoryOperatorRegistry
from portfolio_query.exceptions import OperatorNotFoundError
from portfolio_query.matching import filter_where, matches
from portfolio_query.operators import WhereOperator


class TestRegistry:
    def test_default_registry_covers_every_operator(self, registry) -> None:
        assert registry.supported_operators == set(WhereOperator)

    def test_lookup_by_string(self, registry) -> None:
        assert registry.has("hasSome")
        assert registry.get("bogus") is None

    def test_unknown_operator_suggests(self, registry) -> None:
        with pytest.raises(OperatorNotFoundError) as exc_info:
            registry.evaluate("contain", "abc", "a")
        assert "contains" in exc_info.value.suggestions

    def test_custom_operator(self) -> None:
        class AlwaysEquals(MemoryOperator):
            @property
            def name(self) -> WhereOperator:
                return WhereOperator.EQUALS

            def evaluate(self, field_value, condition_value, *, insensitive=False) -> bool:
                return True

        reg = MemoryOperatorRegistry()
        reg.register(AlwaysEquals())
        assert matches({"title": "anything"}, {"title": "else"}, registry=reg)
        reg.unregister(WhereOperator.EQUALS)
        assert not reg.has(WhereOperator.EQUALS)


class TestOperators:
    @pytest.mark.parametrize(
        ("op", "value", "condition", "expected"),
        [
            ("equals", "a", "a", True),
            ("not", "a", "b", True),
            ("in", 2, [1, 2], True),
            ("notIn", 3, [1, 2], True),
            ("lt", 1, 2, True),
            ("lte", 2, 2, True),
            ("gt", 3, 2, True),
            ("gte", None, 2, False),
            ("contains", "Hello", "ell", True),
            ("startsWith", "Hello", "He", True),
            ("endsWith", "Hello", "lo", True),
            ("has", ["a", "b"], "b", True),
            ("hasSome", ["a", "b"], ["c", "a"], True),
            ("hasSome", [], ["a"], False),
            ("hasEvery", ["a", "b"], ["a", "b"], True),
            ("hasEvery", ["a"], ["a", "b"], False),
            ("isEmpty", [], True, True),
            ("isEmpty", ["a"], False, True),
        ],
    )
    def test_evaluate(self, registry, op, value, condition, expected) -> None:
        assert registry.evaluate(op, value, condition) is expected

    def test_insensitive_string_match(self, registry) -> None:
        assert not registry.evaluate("contains", "React", "react")
        assert registry.evaluate("contains", "React", "react", insensitive=True)

    def test_string_operator_on_list_field(self, registry) -> None:
        assert registry.evaluate("contains", ["css", "React"], "rea", insensitive=True)


@dataclass
class Comment:
    approved: bool


@dataclass
class Post:
    title: str
    status: str = "Published"
    tags: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    author: dict | None = None


class TestMatches:
    def test_empty_where_matches(self) -> None:
        assert matches({}, Post("a"))
        assert matches(None, Post("a"))

    def test_scalar_equality_and_null(self) -> None:
        assert matches({"status": "Published"}, Post("a"))
        assert matches({"author": None}, Post("a"))
        assert not matches({"status": "Draft"}, Post("a"))

    def test_operator_map_with_mode(self) -> None:
        where = {"title": {"startsWith": "async", "mode": "insensitive"}}
        assert matches(where, {"title": "Async Python"})

    def test_not_nested_mapping(self) -> None:
        where = {"title": {"not": {"contains": "draft", "mode": "insensitive"}}}
        assert matches(where, {"title": "Final"})
        assert not matches(where, {"title": "DRAFT notes"})

    def test_not_null(self) -> None:
        assert matches({"author": {"not": None}}, Post("a", author={"name": "Ada"}))
        assert not matches({"author": {"not": None}}, Post("a"))

    def test_logical_keys(self) -> None:
        post = Post("Hooks", tags=["react"])
        assert matches({"OR": [{"title": "Nope"}, {"tags": {"has": "react"}}]}, post)
        assert matches({"AND": [{"title": "Hooks"}, {"status": "Published"}]}, post)
        assert not matches({"NOT": [{"title": "Hooks"}]}, post)
        assert matches({"NOT": {"title": "Other"}}, post)

    def test_empty_or_matches_nothing(self) -> None:
        assert not matches({"OR": []}, Post("a"))

    def test_relation_filters(self) -> None:
        post = Post("a", comments=[Comment(True), Comment(False)])
        assert matches({"comments": {"some": {"approved": False}}}, post)
        assert not matches({"comments": {"every": {"approved": True}}}, post)
        assert matches({"comments": {"none": {"approved": None}}}, post)

    def test_to_one_relation(self) -> None:
        post = Post("a", author={"name": "Ada"})
        assert matches({"author": {"is": {"name": "Ada"}}}, post)
        assert matches({"author": {"isNot": {"name": "Bob"}}}, post)
        assert matches({"author": {"name": "Ada"}}, post)

    def test_camel_case_key_reads_snake_case_attribute(self) -> None:
        @dataclass
        class Project:
            short_description: str

        assert matches({"shortDescription": "x"}, Project("x"))

    def test_unknown_operator_raises(self) -> None:
        with pytest.raises(OperatorNotFoundError):
            matches({"title": {"contians": "x"}}, {"title": "x"})

    def test_filter_where_returns_new_list(self) -> None:
        items = [{"n": 1}, {"n": 2}, {"n": 3}]
        assert filter_where(items, {"n": {"gte": 2}}) == [{"n": 2}, {"n": 3}]
        assert len(items) == 3
