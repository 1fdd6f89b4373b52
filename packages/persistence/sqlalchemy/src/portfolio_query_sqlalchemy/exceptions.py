"""Exceptions for the SQLAlchemy query adapter."""

from __future__ import annotations

from portfolio_query.exceptions import PortfolioQueryError


class SQLAlchemyQueryError(PortfolioQueryError):
    """Base exception for all SQLAlchemy-specific query errors."""


class SessionManagementError(SQLAlchemyQueryError):
    """Raised when the executor is given no session source, or two."""


__all__: list[str] = [
    "SessionManagementError",
    "SQLAlchemyQueryError",
]
