"""Branch creation."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id
from ..models.base import parse_model
from ..models.repositories import Reference
from ._validation import require_project_id, require_text


async def create_branch(
    client: GitLabClient, project_id: str, name: str, ref: str = "HEAD"
) -> dict[str, Any]:
    require_project_id(project_id)
    require_text(name, "Branch name is required")
    require_text(ref, "Source reference is required")

    data = await client.post(
        f"/projects/{encode_id(project_id)}/repository/branches",
        {"branch": name, "ref": ref},
    )
    return parse_model(Reference, data).to_dict()
