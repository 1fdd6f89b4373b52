"""
Map SQLAlchemy errors to API error responses.

Pass :func:`map_database_error` as ``database_mapper`` to
:func:`portfolio_query.errors.handle_api_error`::

    status, body = handle_api_error(exc, debug=True, database_mapper=map_database_error)
"""

from __future__ import annotations

import re
from typing import Any

from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)

# sqlite: "UNIQUE constraint failed: posts.slug"
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?:\w+\.)?(\w+)")
# postgres: "Key (slug)=(hello) already exists."
_POSTGRES_KEY_RE = re.compile(r"Key \(([^)]+)\)=")


def _unique_field(message: str) -> str:
    match = _SQLITE_UNIQUE_RE.search(message) or _POSTGRES_KEY_RE.search(message)
    return match.group(1) if match else "field"


def _body(message: str, code: str, exc: BaseException) -> dict[str, Any]:
    return {
        "message": message,
        "code": code,
        "details": str(getattr(exc, "orig", None) or exc),
    }


def map_database_error(exc: BaseException) -> tuple[int, dict[str, Any]] | None:
    """
    ``(status, body)`` for a database error, ``None`` for anything else.

    Bodies carry ``details``; the caller strips it outside debug mode.
    """
    if isinstance(exc, NoResultFound):
        return 404, _body("Record not found", "NOT_FOUND", exc)

    if isinstance(exc, IntegrityError):
        message = str(exc.orig or exc)
        lowered = message.lower()
        if "unique" in lowered or "duplicate" in lowered:
            field = _unique_field(message)
            return 409, _body(
                f"A record with this {field} already exists", "UNIQUE_VIOLATION", exc
            )
        if "foreign key" in lowered:
            return 400, _body(
                "Invalid reference: related record does not exist",
                "FOREIGN_KEY_VIOLATION",
                exc,
            )
        if "not null" in lowered:
            return 400, _body("A required value is missing", "NOT_NULL_VIOLATION", exc)
        return 400, _body("Database error occurred", "INTEGRITY_ERROR", exc)

    if isinstance(exc, DataError):
        return 400, _body("Invalid value for a database field", "DATA_ERROR", exc)

    if isinstance(exc, OperationalError):
        return 503, _body("Database unavailable", "DATABASE_UNAVAILABLE", exc)

    if isinstance(exc, SQLAlchemyError):
        return 400, _body("Database error occurred", "DATABASE_ERROR", exc)

    return None
