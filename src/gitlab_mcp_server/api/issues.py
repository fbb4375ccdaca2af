"""Issue listing, search, creation, updates, and comments."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id
from ..models.base import parse_model, parse_models
from ..models.issues import Comment, Issue
from ._validation import (
    check_pagination,
    require_choice,
    require_positive,
    require_project_id,
    require_text,
)

ISSUE_STATES = ("opened", "closed", "all")
ISSUE_STATE_EVENTS = ("close", "reopen")


def _join_labels(labels: list[str] | None) -> str | None:
    return ",".join(labels) if labels is not None else None


async def list_issues(
    client: GitLabClient, project_id: str, **options: Any
) -> list[dict[str, Any]]:
    """List project issues.

    With an explicit ``page`` a single page is returned. Without one every
    page is fetched and concatenated, using ``per_page`` (default: the API
    maximum of 100) as the page size.
    """
    require_project_id(project_id)
    require_choice(options.get("state"), ISSUE_STATES, "State")
    page = options.pop("page", None)
    per_page = options.pop("per_page", None)
    check_pagination(page, per_page)

    endpoint = f"/projects/{encode_id(project_id)}/issues"
    if page is not None:
        data = await client.get(endpoint, params={**options, "page": page, "per_page": per_page})
    else:
        data = await client.get_all(endpoint, params=options, per_page=per_page)
    return [issue.to_dict() for issue in parse_models(Issue, data)]


async def search_issues(
    client: GitLabClient, project_id: str, search: str, **options: Any
) -> list[dict[str, Any]]:
    require_text(search, "Search term is required")
    return await list_issues(client, project_id, search=search, **options)


async def create_issue(
    client: GitLabClient,
    project_id: str,
    title: str,
    description: str | None = None,
    assignee_ids: list[int] | None = None,
    labels: list[str] | None = None,
    milestone_id: int | None = None,
) -> dict[str, Any]:
    require_project_id(project_id)
    require_text(title, "Issue title is required")

    body: dict[str, Any] = {"title": title}
    if description is not None:
        body["description"] = description
    if assignee_ids is not None:
        body["assignee_ids"] = assignee_ids
    if milestone_id is not None:
        body["milestone_id"] = milestone_id
    if labels is not None:
        body["labels"] = _join_labels(labels)
    data = await client.post(f"/projects/{encode_id(project_id)}/issues", body)
    return parse_model(Issue, data).to_dict()


async def update_issue(
    client: GitLabClient, project_id: str, issue_iid: int, **options: Any
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(issue_iid, "Valid issue IID is required")
    require_choice(options.get("state_event"), ISSUE_STATE_EVENTS, "State event")

    body = {k: v for k, v in options.items() if v is not None}
    if "labels" in body:
        body["labels"] = _join_labels(body["labels"])
    data = await client.put(f"/projects/{encode_id(project_id)}/issues/{issue_iid}", body)
    return parse_model(Issue, data).to_dict()


async def add_issue_comment(
    client: GitLabClient, project_id: str, issue_iid: int, body: str
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(issue_iid, "Valid issue IID is required")
    require_text(body, "Comment body is required")

    data = await client.post(
        f"/projects/{encode_id(project_id)}/issues/{issue_iid}/notes", {"body": body}
    )
    return parse_model(Comment, data).to_dict()
