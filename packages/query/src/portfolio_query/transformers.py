"""
Project shape conversions between the ORM and the API.

The ORM exposes team members through the ``teamMembers`` relation; the API
speaks in a flat ``team`` list of ``{name, email}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .utils import get_field

# Legacy spaced labels and enum names both map to the enum name
_PROJECT_STATUS_MAP: dict[str, str] = {
    "Planned": "Planned",
    "In Progress": "InProgress",
    "In Development": "InDevelopment",
    "In Testing": "InTesting",
    "Completed": "Completed",
    "In Production": "InProduction",
    "Maintenance": "Maintenance",
    "On Hold": "OnHold",
    "Deprecated": "Deprecated",
    "Sunsetted": "Sunsetted",
    "Draft": "Draft",
    "Published": "Published",
    "InProgress": "InProgress",
    "InDevelopment": "InDevelopment",
    "InTesting": "InTesting",
    "InProduction": "InProduction",
    "OnHold": "OnHold",
}


def map_project_status(status: str | None) -> str | None:
    if not status:
        return None
    return _PROJECT_STATUS_MAP.get(status)


def _team_from_members(members: Iterable[Any]) -> list[dict[str, Any]]:
    return [
        {"name": get_field(m, "name"), "email": get_field(m, "email")}
        for m in members
    ]


def transform_project_to_api_format(project: Mapping[str, Any]) -> dict[str, Any]:
    """Replace the ``teamMembers`` relation with a ``team`` list."""
    data = dict(project)
    members = data.pop("teamMembers", None)
    if members is None:
        members = data.pop("team_members", None)
    data["team"] = _team_from_members(members or [])
    return data


def transform_projects_to_api_format(
    projects: Iterable[Mapping[str, Any]],
) -> list[dict[str, Any]]:
    return [transform_project_to_api_format(p) for p in projects]


def transform_team_to_team_members(team: Any) -> list[dict[str, Any]]:
    """Rows for creating ``teamMembers``; anything but a list yields ``[]``."""
    if not isinstance(team, list | tuple):
        return []
    return [
        {"name": get_field(m, "name"), "email": get_field(m, "email") or None}
        for m in team
    ]
