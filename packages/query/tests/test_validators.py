"""Tests for request payload validators."""

from __future__ import annotations

import pytest

from portfolio_query.errors import validation_response
from portfolio_query.validators import (
    ValidationResult,
    combine_validations,
    validate_admin_project_data,
    validate_array_field,
    validate_array_fields,
    validate_email,
    validate_project_data,
    validate_required_fields,
    validate_team_member,
    validate_team_members,
)


class TestValidateRequiredFields:
    def test_all_present_is_valid(self) -> None:
        result = validate_required_fields({"title": "A", "slug": "a"}, ["title", "slug"])
        assert result.is_valid is True
        assert result.message is None

    @pytest.mark.parametrize(
        "fields",
        [
            [],
            ["title"],
            ["title", "slug", "startDate"],
        ],
    )
    def test_empty_payload_is_invalid_iff_fields_given(self, fields: list[str]) -> None:
        result = validate_required_fields({}, fields)
        assert result.is_valid is (len(fields) == 0)
        for name in fields:
            assert name in (result.message or "")

    def test_message_lists_missing_fields_in_order(self) -> None:
        result = validate_required_fields({"title": "A"}, ["slug", "title", "startDate"])
        assert result.message == "Missing required fields: slug, startDate"

    def test_none_and_empty_string_count_as_missing(self) -> None:
        result = validate_required_fields({"a": None, "b": ""}, ["a", "b"])
        assert result.message == "Missing required fields: a, b"

    def test_zero_and_false_are_present(self) -> None:
        result = validate_required_fields({"order": 0, "featured": False}, ["order", "featured"])
        assert result.is_valid is True

    def test_reads_attributes_of_objects(self) -> None:
        class Payload:
            title = "A"
            start_date = "2024-01-01"

        assert validate_required_fields(Payload(), ["title", "startDate"]).is_valid


class TestArrayValidators:
    def test_list_is_valid(self) -> None:
        assert validate_array_field(["a"], "tags").is_valid

    @pytest.mark.parametrize("value", [None, "react", {"a": 1}, 3])
    def test_non_list_is_invalid(self, value: object) -> None:
        result = validate_array_field(value, "tags")
        assert result.is_valid is False
        assert result.message == "tags must be an array"

    def test_fields_stop_at_first_failure(self) -> None:
        result = validate_array_fields(
            {"tags": ["a"], "links": "x", "images": None}, ["tags", "links", "images"]
        )
        assert result.message == "links must be an array"


class TestCombineValidations:
    def test_first_failure_wins(self) -> None:
        result = combine_validations(
            ValidationResult(is_valid=True),
            ValidationResult(is_valid=False, message="X"),
            ValidationResult.failure("Y"),
        )
        assert result.to_dict() == {"isValid": False, "message": "X"}

    def test_no_results_is_valid(self) -> None:
        assert combine_validations().to_dict() == {"isValid": True}


class TestProjectValidators:
    def test_project_requires_title_and_start_date(self) -> None:
        result = validate_project_data({"title": "Portfolio"})
        assert result.message == "Missing required fields: startDate"

    def test_project_custom_required_fields(self) -> None:
        assert validate_project_data({"name": "x"}, ["name"]).is_valid

    def test_admin_project_requires_slug(self) -> None:
        result = validate_admin_project_data({"title": "Portfolio", "startDate": "2024"})
        assert result.message == "Missing required fields: slug"

    def test_team_member_needs_name(self) -> None:
        assert validate_team_member({"name": "Ada"}).is_valid
        assert validate_team_member({"email": "a@b.c"}).message == (
            "Team member name is required"
        )

    def test_team_must_be_array(self) -> None:
        assert validate_team_members("Ada").message == "Team must be an array"

    def test_team_reports_first_bad_member(self) -> None:
        result = validate_team_members([{"name": "Ada"}, {"name": ""}])
        assert result.message == "Team member name is required"
        assert validate_team_members([]).is_valid


class TestValidateEmail:
    @pytest.mark.parametrize("email", [None, "", "not-an-email", 42])
    def test_invalid(self, email: object) -> None:
        assert validate_email(email).message == "Valid email is required"

    def test_valid(self) -> None:
        assert validate_email("reader@example.com")


def test_validation_response() -> None:
    assert validation_response(ValidationResult.success()) is None
    assert validation_response(ValidationResult.failure("Bad")) == (400, {"message": "Bad"})
