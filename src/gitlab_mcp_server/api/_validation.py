"""Argument checks shared by the operation modules.

Every check raises GitLabValidationError before any request is sent.
"""

from __future__ import annotations

from ..client import MAX_PER_PAGE
from ..exceptions import GitLabValidationError


def require_text(value: str | None, message: str) -> str:
    if value is None or not str(value).strip():
        raise GitLabValidationError(message)
    return value


def require_project_id(project_id: str | None) -> str:
    return require_text(project_id, "Project ID is required")


def require_group_id(group_id: str | None) -> str:
    return require_text(group_id, "Group ID is required")


def require_positive(value: int | None, message: str) -> int:
    if value is None or value < 1:
        raise GitLabValidationError(message)
    return value


def check_pagination(page: int | None, per_page: int | None) -> None:
    if page is not None and page < 1:
        raise GitLabValidationError("Page number must be 1 or greater")
    if per_page is not None and not 1 <= per_page <= MAX_PER_PAGE:
        raise GitLabValidationError(f"Per page must be between 1 and {MAX_PER_PAGE}")


def require_choice(value: str | None, choices: tuple[str, ...], name: str) -> None:
    if value is not None and value not in choices:
        raise GitLabValidationError(f"{name} must be one of: {', '.join(choices)}")
