"""Shared fixtures for query tests."""

from __future__ import annotations

import datetime

import pytest

from portfolio_query.operators_memory import build_default_registry


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def posts() -> list[dict]:
    """A small, loaded post list as the listing views receive it."""
    return [
        {
            "id": 1,
            "title": "React Hooks in Depth",
            "description": "useState, useEffect and friends",
            "topic": "react",
            "tags": ["react", "hooks"],
            "datePublished": "2024-03-01T10:00:00Z",
            "viewCount": 120,
        },
        {
            "id": 2,
            "title": "Async Python",
            "description": "asyncio from the ground up",
            "topic": "python",
            "tags": ["python", "asyncio"],
            "datePublished": "2024-01-15T08:30:00Z",
            "viewCount": 340,
        },
        {
            "id": 3,
            "title": "CSS Grid Layouts",
            "description": "Two-dimensional layouts",
            "topic": "css",
            "tags": ["css", "React"],
            "datePublished": datetime.datetime(2024, 2, 10, tzinfo=datetime.timezone.utc),
            "viewCount": 75,
        },
        {
            "id": 4,
            "title": "Drafting Posts",
            "description": None,
            "topic": "meta",
            "tags": [],
            "datePublished": None,
            "viewCount": 0,
        },
    ]
