"""Project milestone management."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id
from ..models.base import parse_model, parse_models
from ..models.labels import Milestone
from ._validation import (
    check_pagination,
    require_choice,
    require_positive,
    require_project_id,
    require_text,
)

MILESTONE_STATES = ("active", "closed")
MILESTONE_STATE_EVENTS = ("close", "activate")


def milestone_body(**fields: Any) -> dict[str, Any]:
    require_choice(fields.get("state_event"), MILESTONE_STATE_EVENTS, "State event")
    return {k: v for k, v in fields.items() if v is not None}


async def list_milestones(
    client: GitLabClient,
    project_id: str,
    state: str | None = None,
    page: int = 1,
    per_page: int = 20,
) -> list[dict[str, Any]]:
    require_project_id(project_id)
    require_choice(state, MILESTONE_STATES, "State")
    check_pagination(page, per_page)

    data = await client.get(
        f"/projects/{encode_id(project_id)}/milestones",
        params={"state": state, "page": page, "per_page": per_page},
    )
    return [m.to_dict() for m in parse_models(Milestone, data)]


async def create_milestone(
    client: GitLabClient,
    project_id: str,
    title: str,
    description: str | None = None,
    due_date: str | None = None,
    start_date: str | None = None,
) -> dict[str, Any]:
    require_project_id(project_id)
    require_text(title, "Milestone title is required")

    body = milestone_body(
        title=title, description=description, due_date=due_date, start_date=start_date
    )
    data = await client.post(f"/projects/{encode_id(project_id)}/milestones", body)
    return parse_model(Milestone, data).to_dict()


async def update_milestone(
    client: GitLabClient, project_id: str, milestone_id: int, **options: Any
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(milestone_id, "Valid milestone ID is required")

    data = await client.put(
        f"/projects/{encode_id(project_id)}/milestones/{milestone_id}", milestone_body(**options)
    )
    return parse_model(Milestone, data).to_dict()


async def delete_milestone(client: GitLabClient, project_id: str, milestone_id: int) -> None:
    require_project_id(project_id)
    require_positive(milestone_id, "Valid milestone ID is required")

    await client.delete(f"/projects/{encode_id(project_id)}/milestones/{milestone_id}")
