"""
Request payload validators.

Every validator returns a :class:`ValidationResult`; none of them raise.
API handlers turn an invalid result into a 400 response (see
:func:`portfolio_query.errors.validation_response`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .utils import get_field


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validation step.

    Usage::

        result = ValidationResult.success()
        result = ValidationResult.failure("Missing required fields: title")
    """

    is_valid: bool = True
    message: str | None = None

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, message: str) -> ValidationResult:
        return cls(is_valid=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        if self.is_valid:
            return {"isValid": True}
        return {"isValid": False, "message": self.message}

    def __bool__(self) -> bool:
        return self.is_valid


def _is_missing(value: Any) -> bool:
    # 0 and False are legitimate values for numeric/boolean fields
    return value is None or value == ""


def validate_required_fields(data: Any, fields: Iterable[str]) -> ValidationResult:
    """Report every field in *fields* that is absent, ``None`` or ``""``."""
    missing = [name for name in fields if _is_missing(get_field(data, name))]
    if missing:
        return ValidationResult.failure(
            f"Missing required fields: {', '.join(missing)}"
        )
    return ValidationResult.success()


def validate_array_field(value: Any, field_name: str) -> ValidationResult:
    if not isinstance(value, list | tuple):
        return ValidationResult.failure(f"{field_name} must be an array")
    return ValidationResult.success()


def validate_array_fields(data: Any, field_names: Iterable[str]) -> ValidationResult:
    """Check each named field is an array, stopping at the first failure."""
    for name in field_names:
        result = validate_array_field(get_field(data, name), name)
        if not result.is_valid:
            return result
    return ValidationResult.success()


def combine_validations(*results: ValidationResult) -> ValidationResult:
    """Return the first failed result, or success (also for no input)."""
    for result in results:
        if not result.is_valid:
            return result
    return ValidationResult.success()


# ── Project / newsletter payloads ────────────────────────────────────


def validate_project_data(
    data: Any,
    required_fields: Iterable[str] = ("title", "startDate"),
) -> ValidationResult:
    return validate_required_fields(data, required_fields)


def validate_admin_project_data(data: Any) -> ValidationResult:
    return validate_required_fields(data, ("title", "slug"))


def validate_team_member(member: Any) -> ValidationResult:
    if _is_missing(get_field(member, "name")):
        return ValidationResult.failure("Team member name is required")
    return ValidationResult.success()


def validate_team_members(team: Any) -> ValidationResult:
    if not isinstance(team, list | tuple):
        return ValidationResult.failure("Team must be an array")
    return combine_validations(*(validate_team_member(m) for m in team))


def validate_email(email: Any) -> ValidationResult:
    """Minimal newsletter-signup check: a non-empty string containing ``@``."""
    if not isinstance(email, str) or "@" not in email:
        return ValidationResult.failure("Valid email is required")
    return ValidationResult.success()
