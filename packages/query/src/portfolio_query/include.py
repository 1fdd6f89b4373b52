"""Relation-inclusion toggles for post and project queries."""

from __future__ import annotations

from typing import Any


def build_post_include_clause(
    include_counts: bool = True,
    *,
    approved_comments_only: bool = False,
) -> dict[str, Any]:
    """
    Comment and like counts for posts.

    With ``approved_comments_only`` the comment count is scoped to
    approved comments, as on the single-post page.
    """
    if not include_counts:
        return {}

    comments: bool | dict[str, Any] = True
    if approved_comments_only:
        comments = {"where": {"approved": True}}

    return {
        "_count": {
            "select": {
                "comments": comments,
                "likes": True,
            },
        },
    }


def build_project_include_clause(include_team: bool = True) -> dict[str, Any]:
    if not include_team:
        return {}
    return {"teamMembers": True}
