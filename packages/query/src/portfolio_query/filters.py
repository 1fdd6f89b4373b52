"""
Typed filter intents for the listing endpoints.

A filter intent is built fresh from request parameters, consumed by the
where-clause builders and discarded. Unknown keys (``limit``, ``sortBy``
and friends) are ignored so a raw query mapping can be passed straight in.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})

F = TypeVar("F", bound="FilterIntent")


class FilterIntent(BaseModel):
    """Base for per-entity filter intents."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def coerce(
        cls: type[F],
        filters: F | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> F:
        """Build an instance from a model, a mapping, or keyword arguments."""
        if isinstance(filters, cls) and not overrides:
            return filters
        if isinstance(filters, BaseModel):
            data = filters.model_dump(exclude_none=True)
        else:
            data = dict(filters) if isinstance(filters, Mapping) else {}
        data.update(overrides)
        return cls.model_validate(data)


def _normalise_tags(value: Any) -> list[str] | None:
    if value is None or value == "":
        return None
    if isinstance(value, str | int | float):
        return [str(value)]
    if isinstance(value, list | tuple | set | frozenset):
        return [str(v) for v in value if v is not None and v != ""]
    return None


def _first_text(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return value[0] if value else None
    return value


def _as_text(value: Any) -> str | None:
    # Numbers are stringified; mappings and other shapes carry no usable filter
    value = _first_text(value)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    return None


class PostFilter(FilterIntent):
    status: str | None = None
    topic: str | None = None
    search: str | None = None
    tags: list[str] | None = None

    @field_validator("status", "topic", "search", mode="before")
    @classmethod
    def _single_value(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_list(cls, value: Any) -> list[str] | None:
        return _normalise_tags(value)


class ProjectFilter(FilterIntent):
    status: str | None = None
    search: str | None = None
    tags: list[str] | None = None
    featured: bool | None = None

    @field_validator("status", "search", mode="before")
    @classmethod
    def _single_value(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_list(cls, value: Any) -> list[str] | None:
        return _normalise_tags(value)

    @field_validator("featured", mode="before")
    @classmethod
    def _featured_flag(cls, value: Any) -> bool | None:
        value = _first_text(value)
        if value is None or isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        # Unrecognised flags mean "no featured filter" rather than an error
        return None
