"""Project label management."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id, encode_path
from ..models.base import parse_model, parse_models
from ..models.labels import Label
from ._validation import check_pagination, require_project_id, require_text


async def list_labels(
    client: GitLabClient, project_id: str, page: int = 1, per_page: int = 20
) -> list[dict[str, Any]]:
    require_project_id(project_id)
    check_pagination(page, per_page)

    data = await client.get(
        f"/projects/{encode_id(project_id)}/labels", params={"page": page, "per_page": per_page}
    )
    return [label.to_dict() for label in parse_models(Label, data)]


async def create_label(
    client: GitLabClient,
    project_id: str,
    name: str,
    color: str,
    description: str | None = None,
    priority: int | None = None,
) -> dict[str, Any]:
    require_project_id(project_id)
    require_text(name, "Label name is required")
    require_text(color, "Label color is required")

    body: dict[str, Any] = {"name": name, "color": color}
    if description is not None:
        body["description"] = description
    if priority is not None:
        body["priority"] = priority
    data = await client.post(f"/projects/{encode_id(project_id)}/labels", body)
    return parse_model(Label, data).to_dict()


async def update_label(
    client: GitLabClient, project_id: str, name: str, **options: Any
) -> dict[str, Any]:
    """Update a label identified by its current *name*; ``new_name`` renames it."""
    require_project_id(project_id)
    require_text(name, "Label name is required")

    body = {k: v for k, v in options.items() if v is not None}
    data = await client.put(
        f"/projects/{encode_id(project_id)}/labels/{encode_path(name)}", body
    )
    return parse_model(Label, data).to_dict()


async def delete_label(client: GitLabClient, project_id: str, name: str) -> None:
    require_project_id(project_id)
    require_text(name, "Label name is required")

    await client.delete(f"/projects/{encode_id(project_id)}/labels/{encode_path(name)}")
