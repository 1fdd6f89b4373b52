"""Paginated response envelopes: ``{<data_key>: [...], total, limit, offset}``."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from .utils import has_field

logger = logging.getLogger(__name__)


class DataKey(str, Enum):
    POSTS = "posts"
    PLAYLISTS = "playlists"
    PROJECTS = "projects"
    ITEMS = "items"


def infer_data_key(data: Sequence[Any], default_key: DataKey | str = DataKey.ITEMS) -> str:
    """
    Guess the plural key from the shape of the first item.

    Playlists are checked before posts because playlists carry a title too.
    Callers that know the entity kind should pass ``data_key`` instead.
    """
    default = default_key.value if isinstance(default_key, DataKey) else default_key
    if not data:
        return default
    first = data[0]
    if has_field(first, "playlistPosts"):
        return DataKey.PLAYLISTS.value
    if has_field(first, "title"):
        return DataKey.POSTS.value
    return default


def format_paginated_response(
    data: Sequence[Any],
    total: int,
    limit: int | None = None,
    offset: int | None = 0,
    data_key: DataKey | str | None = None,
    *,
    default_key: DataKey | str = DataKey.ITEMS,
) -> dict[str, Any]:
    if data_key is None:
        key = infer_data_key(data, default_key)
        logger.debug("Inferred response data key %r", key)
    else:
        key = data_key.value if isinstance(data_key, DataKey) else data_key

    items = list(data)
    return {
        key: items,
        "total": total,
        "limit": limit or len(items),
        "offset": offset or 0,
    }
