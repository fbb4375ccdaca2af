"""Project search, creation, and forking."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, encode_id, total_from_headers
from ..models.base import parse_model, parse_models
from ..models.projects import Fork, Repository, SearchResponse
from ._validation import check_pagination, require_choice, require_project_id, require_text

VISIBILITY_LEVELS = ("private", "internal", "public")


async def search_projects(
    client: GitLabClient, query: str, page: int = 1, per_page: int = 20
) -> dict[str, Any]:
    """Search projects visible to the token.

    ``count`` is taken from the ``X-Total`` header when GitLab sends it (it is
    omitted for very large result sets), otherwise it is the page length.
    """
    require_text(query, "Search query is required")
    check_pagination(page, per_page)

    data, headers = await client.get_with_headers(
        "/projects", params={"search": query, "page": page, "per_page": per_page}
    )
    items = parse_models(Repository, data)
    return SearchResponse(count=total_from_headers(headers, len(items)), items=items).to_dict()


async def create_repository(
    client: GitLabClient,
    name: str,
    description: str | None = None,
    visibility: str | None = None,
    initialize_with_readme: bool | None = None,
) -> dict[str, Any]:
    require_text(name, "Repository name is required")
    require_choice(visibility, VISIBILITY_LEVELS, "Visibility")

    body: dict[str, Any] = {"name": name}
    if description is not None:
        body["description"] = description
    if visibility is not None:
        body["visibility"] = visibility
    if initialize_with_readme is not None:
        body["initialize_with_readme"] = initialize_with_readme
    data = await client.post("/projects", body)
    return parse_model(Repository, data).to_dict()


async def fork_project(
    client: GitLabClient, project_id: str, namespace: str | None = None
) -> dict[str, Any]:
    """Fork a project into the caller's namespace, or into *namespace* when given."""
    require_project_id(project_id)

    body = {"namespace": namespace} if namespace else None
    data = await client.post(f"/projects/{encode_id(project_id)}/fork", body)
    return parse_model(Fork, data).to_dict()
