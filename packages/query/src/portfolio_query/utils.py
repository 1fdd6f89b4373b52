"""
Shared utility functions for the query package.

These are pure-Python helpers with no infrastructure dependencies.
"""

from __future__ import annotations

import datetime
import math
import re
from collections.abc import Mapping
from typing import Any

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")

# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


def to_snake_case(name: str) -> str:
    """``datePublished`` → ``date_published``; snake_case passes through."""
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """
    Read *name* from a mapping or an attribute-bearing object.

    Falls back to the snake_case spelling so that camelCase DSL keys
    (``shortDescription``) work against Python models (``short_description``).
    """
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        return obj.get(to_snake_case(name), default)
    if hasattr(obj, name):
        return getattr(obj, name)
    return getattr(obj, to_snake_case(name), default)


def has_field(obj: Any, name: str) -> bool:
    if isinstance(obj, Mapping):
        return name in obj or to_snake_case(name) in obj
    return hasattr(obj, name) or hasattr(obj, to_snake_case(name))


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def parse_int(value: Any) -> int | None:
    """
    Integer conversion for query-string values.

    Accepts leading digits the way browsers' ``parseInt`` does
    (``"10abc"`` → 10); returns ``None`` when nothing numeric is found.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, list | tuple):
        return parse_int(value[0]) if value else None
    match = re.match(r"^\s*([+-]?\d+)", str(value))
    return int(match.group(1)) if match else None


def to_timestamp(value: Any) -> float:
    """Convert a datetime / date / ISO string to epoch seconds; ``0.0`` if unknown."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, datetime.datetime):
        return value.timestamp()
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time()).timestamp()
    if isinstance(value, int | float):
        return float(value)
    try:
        text = str(value).replace("Z", "+00:00")
        return datetime.datetime.fromisoformat(text).timestamp()
    except ValueError:
        return 0.0
