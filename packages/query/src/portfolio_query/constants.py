"""Shared constants: statuses, sort fields, page sizes."""

from __future__ import annotations

from enum import Enum


class PostStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"


class SortField(str, Enum):
    """Logical sort keys accepted by the listing endpoints."""

    DATE_PUBLISHED = "datePublished"
    CREATED_AT = "createdAt"
    TITLE = "title"
    VIEW_COUNT = "viewCount"
    ORDER = "order"


# Sentinel filter value meaning "do not filter on this key"
ALL = "all"

POSTS_PER_PAGE = 12
PLAYLISTS_PER_PAGE = 9
PROJECTS_PER_PAGE = 9

WORDS_PER_MINUTE = 200
MIN_READING_TIME_MINUTES = 1

# Fields compared as timestamps by the in-memory sorter
DATE_SORT_FIELDS: frozenset[str] = frozenset(
    {SortField.DATE_PUBLISHED.value, SortField.CREATED_AT.value}
)

POST_SORT_FIELDS: dict[str, str] = {
    "datePublished": "datePublished",
    "createdAt": "createdAt",
    "title": "title",
    "viewCount": "viewCount",
}

PLAYLIST_SORT_FIELDS: dict[str, str] = {
    "order": "order",
    "title": "title",
    "createdAt": "createdAt",
}

POST_SEARCH_FIELDS: tuple[str, ...] = ("title", "description", "content")
PROJECT_SEARCH_FIELDS: tuple[str, ...] = ("title", "description", "shortDescription")
