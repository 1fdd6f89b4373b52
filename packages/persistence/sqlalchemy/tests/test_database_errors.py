"""Tests for database error mapping and engine construction."""

from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    NoResultFound,
    OperationalError,
    ProgrammingError,
)
from sqlalchemy.ext.asyncio import AsyncEngine

from portfolio_query.config import Settings
from portfolio_query.errors import handle_api_error
from portfolio_query_sqlalchemy.engine import create_engine_from_settings, session_factory
from portfolio_query_sqlalchemy.errors import map_database_error


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


class TestMapDatabaseError:
    @pytest.mark.parametrize(
        "message",
        [
            "UNIQUE constraint failed: posts.slug",
            'duplicate key value violates unique constraint "posts_slug_key"\n'
            "DETAIL:  Key (slug)=(hello) already exists.",
        ],
    )
    def test_unique_violation_names_the_field(self, message: str) -> None:
        status, body = map_database_error(_integrity(message))
        assert status == 409
        assert body["message"] == "A record with this slug already exists"

    def test_unique_violation_without_field(self) -> None:
        _, body = map_database_error(_integrity("unique violation"))
        assert body["message"] == "A record with this field already exists"

    def test_foreign_key(self) -> None:
        status, body = map_database_error(_integrity("FOREIGN KEY constraint failed"))
        assert status == 400
        assert body["message"] == "Invalid reference: related record does not exist"

    def test_no_result(self) -> None:
        status, body = map_database_error(NoResultFound())
        assert status == 404
        assert body["message"] == "Record not found"

    def test_data_error(self) -> None:
        status, _ = map_database_error(DataError("SELECT", {}, Exception("value too long")))
        assert status == 400

    def test_operational_error(self) -> None:
        status, body = map_database_error(OperationalError("SELECT", {}, Exception("down")))
        assert status == 503
        assert body["code"] == "DATABASE_UNAVAILABLE"

    def test_other_sqlalchemy_error(self) -> None:
        status, body = map_database_error(ProgrammingError("SELECT", {}, Exception("bad")))
        assert status == 400
        assert body["message"] == "Database error occurred"

    def test_non_database_error(self) -> None:
        assert map_database_error(ValueError("nope")) is None

    def test_details_only_in_debug(self) -> None:
        exc = _integrity("FOREIGN KEY constraint failed")
        assert "details" not in handle_api_error(exc, database_mapper=map_database_error)[1]
        _, body = handle_api_error(exc, debug=True, database_mapper=map_database_error)
        assert body["details"] == "FOREIGN KEY constraint failed"


@pytest.mark.asyncio
async def test_engine_from_settings() -> None:
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:", environment="test")
    engine = create_engine_from_settings(settings)
    try:
        assert isinstance(engine, AsyncEngine)
        async with session_factory(engine)() as session:
            assert await session.scalar(text("SELECT 1")) == 1
    finally:
        await engine.dispose()
