"""Group search."""

from __future__ import annotations

from typing import Any

from ..client import GitLabClient, total_from_headers
from ..exceptions import GitLabValidationError
from ..models.base import parse_models
from ..models.projects import Group, GroupSearchResponse
from ._validation import check_pagination, require_text

# guest, reporter, developer, maintainer, owner
ACCESS_LEVELS = (10, 20, 30, 40, 50)


async def search_groups(
    client: GitLabClient,
    query: str,
    page: int = 1,
    per_page: int = 20,
    owned: bool | None = None,
    min_access_level: int | None = None,
) -> dict[str, Any]:
    require_text(query, "Search query is required")
    check_pagination(page, per_page)
    if min_access_level is not None and min_access_level not in ACCESS_LEVELS:
        msg = "Minimum access level must be one of: 10, 20, 30, 40, 50"
        raise GitLabValidationError(msg)

    params = {
        "search": query,
        "page": page,
        "per_page": per_page,
        "owned": owned,
        "min_access_level": min_access_level,
    }
    data, headers = await client.get_with_headers("/groups", params=params)
    items = parse_models(Group, data)
    return GroupSearchResponse(count=total_from_headers(headers, len(items)), items=items).to_dict()
