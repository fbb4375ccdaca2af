"""Merge request listing, creation, updates, merging, and comments."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id
from ..models.base import parse_model, parse_models
from ..models.issues import Comment
from ..models.merge_requests import MergeRequest
from ._validation import (
    check_pagination,
    require_choice,
    require_positive,
    require_project_id,
    require_text,
)

MR_STATES = ("opened", "closed", "locked", "merged", "all")
MR_STATE_EVENTS = ("close", "reopen")


def _mr_endpoint(project_id: str, mr_iid: int | None = None) -> str:
    endpoint = f"/projects/{encode_id(project_id)}/merge_requests"
    return endpoint if mr_iid is None else f"{endpoint}/{mr_iid}"


async def list_merge_requests(
    client: GitLabClient, project_id: str, **options: Any
) -> list[dict[str, Any]]:
    require_project_id(project_id)
    require_choice(options.get("state"), MR_STATES, "State")
    check_pagination(options.get("page"), options.get("per_page"))

    data = await client.get(_mr_endpoint(project_id), params=options)
    return [mr.to_dict() for mr in parse_models(MergeRequest, data)]


async def create_merge_request(
    client: GitLabClient,
    project_id: str,
    title: str,
    source_branch: str,
    target_branch: str,
    description: str | None = None,
    allow_collaboration: bool | None = None,
    draft: bool | None = None,
) -> dict[str, Any]:
    require_project_id(project_id)
    require_text(title, "Merge request title is required")
    require_text(source_branch, "Source branch is required")
    require_text(target_branch, "Target branch is required")

    body: dict[str, Any] = {
        "title": title,
        "source_branch": source_branch,
        "target_branch": target_branch,
    }
    if description is not None:
        body["description"] = description
    if allow_collaboration is not None:
        body["allow_collaboration"] = allow_collaboration
    if draft is not None:
        body["draft"] = draft
    data = await client.post(_mr_endpoint(project_id), body)
    return parse_model(MergeRequest, data).to_dict()


async def update_merge_request(
    client: GitLabClient, project_id: str, merge_request_iid: int, **options: Any
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(merge_request_iid, "Valid merge request IID is required")
    require_choice(options.get("state_event"), MR_STATE_EVENTS, "State event")

    body = {k: v for k, v in options.items() if v is not None}
    if "labels" in body:
        body["labels"] = ",".join(body["labels"])
    data = await client.put(_mr_endpoint(project_id, merge_request_iid), body)
    return parse_model(MergeRequest, data).to_dict()


async def merge_merge_request(
    client: GitLabClient, project_id: str, merge_request_iid: int, **options: Any
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(merge_request_iid, "Valid merge request IID is required")

    body = {k: v for k, v in options.items() if v is not None}
    data = await client.put(f"{_mr_endpoint(project_id, merge_request_iid)}/merge", body)
    return parse_model(MergeRequest, data).to_dict()


async def add_merge_request_comment(
    client: GitLabClient, project_id: str, merge_request_iid: int, body: str
) -> dict[str, Any]:
    require_project_id(project_id)
    require_positive(merge_request_iid, "Valid merge request IID is required")
    require_text(body, "Comment body is required")

    data = await client.post(
        f"{_mr_endpoint(project_id, merge_request_iid)}/notes", {"body": body}
    )
    return parse_model(Comment, data).to_dict()
