"""
Exception hierarchy for the query layer and the API handlers around it.

All exceptions inherit from ``PortfolioQueryError`` and provide
``to_dict()`` for API-friendly error bodies. HTTP-facing errors carry a
``status_code`` and a stable ``code`` string.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PortfolioQueryError(Exception):
    """Root exception for the whole package."""

    status_code: int = 500
    code: str = "ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": str(self),
            "code": self.code,
        }


class ConfigurationError(PortfolioQueryError):
    """Raised when required environment configuration is missing."""

    code = "CONFIGURATION_ERROR"


# ── HTTP-facing errors ───────────────────────────────────────────────


class ValidationError(PortfolioQueryError):
    """Request payload failed validation."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed", details: Any = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class UnauthorizedError(PortfolioQueryError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(PortfolioQueryError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class MethodNotAllowedError(PortfolioQueryError):
    status_code = 405
    code = "METHOD_NOT_ALLOWED"

    def __init__(self, method: str | None = None) -> None:
        self.method = method
        super().__init__("Method Not Allowed")


class ConflictError(PortfolioQueryError):
    status_code = 409
    code = "CONFLICT"


# ── Query construction errors ────────────────────────────────────────


class OperatorNotFoundError(PortfolioQueryError):
    """
    Unknown where-clause operator.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": str(self),
            "code": self.code,
            "operator": self.operator,
            "suggestions": self.suggestions,
        }


class FieldNotFoundError(PortfolioQueryError):
    """
    Invalid field name in a where/orderBy/include clause.

    Example error message::

        Invalid field 'tittle' on 'Post'.
        Did you mean one of these?
          • title
        Available fields: content, description, id, slug, title, ...
    """

    code = "FIELD_NOT_FOUND"

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": str(self),
            "code": self.code,
            "field": self.invalid_field,
            "model": self.model_name,
            "suggestions": self.suggestions,
        }
