"""Group milestone management."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id
from ..models.base import parse_model, parse_models
from ..models.labels import GroupMilestone
from ._validation import (
    check_pagination,
    require_choice,
    require_group_id,
    require_positive,
    require_text,
)
from .milestones import MILESTONE_STATES, milestone_body


async def list_group_milestones(
    client: GitLabClient, group_id: str, **options: Any
) -> list[dict[str, Any]]:
    """List group milestones; *options* are passed through as GitLab filters."""
    require_group_id(group_id)
    require_choice(options.get("state"), MILESTONE_STATES, "State")
    check_pagination(options.get("page"), options.get("per_page"))

    data = await client.get(f"/groups/{encode_id(group_id)}/milestones", params=options)
    return [m.to_dict() for m in parse_models(GroupMilestone, data)]


async def create_group_milestone(
    client: GitLabClient,
    group_id: str,
    title: str,
    description: str | None = None,
    due_date: str | None = None,
    start_date: str | None = None,
) -> dict[str, Any]:
    require_group_id(group_id)
    require_text(title, "Milestone title is required")

    body = milestone_body(
        title=title, description=description, due_date=due_date, start_date=start_date
    )
    data = await client.post(f"/groups/{encode_id(group_id)}/milestones", body)
    return parse_model(GroupMilestone, data).to_dict()


async def update_group_milestone(
    client: GitLabClient, group_id: str, milestone_id: int, **options: Any
) -> dict[str, Any]:
    require_group_id(group_id)
    require_positive(milestone_id, "Valid milestone ID is required")

    data = await client.put(
        f"/groups/{encode_id(group_id)}/milestones/{milestone_id}", milestone_body(**options)
    )
    return parse_model(GroupMilestone, data).to_dict()


async def delete_group_milestone(client: GitLabClient, group_id: str, milestone_id: int) -> None:
    require_group_id(group_id)
    require_positive(milestone_id, "Valid milestone ID is required")

    await client.delete(f"/groups/{encode_id(group_id)}/milestones/{milestone_id}")
