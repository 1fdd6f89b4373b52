"""Async engine and session factory built from :class:`portfolio_query.config.Settings`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from portfolio_query.config import Settings

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings, **kwargs: Any) -> AsyncEngine:
    """
    Create an ``AsyncEngine`` for ``settings.database_url``.

    The URL must name an async driver (``sqlite+aiosqlite://``,
    ``postgresql+asyncpg://``...). Extra keyword arguments go to
    ``create_async_engine``.
    """
    engine = create_async_engine(settings.database_url, **kwargs)
    logger.info(
        "Created database engine for %s (%s)",
        engine.url.render_as_string(hide_password=True),
        settings.environment,
    )
    return engine


def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose sessions keep loaded attributes after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
