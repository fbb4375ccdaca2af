"""Issue and comment models."""

from __future__ import annotations

from typing import Any

from pydantic import model_validator

from .base import GitLabModel


class Issue(GitLabModel):
    id: int
    description: str | None
    labels: list[str] = []
    milestone: Any = None

    @model_validator(mode="before")
    @classmethod
    def _default_labels(cls, data: Any) -> Any:
        # GitLab omits labels on some endpoints; callers always get a list.
        if isinstance(data, dict) and data.get("labels") is None:
            return {**data, "labels": []}
        return data


class Comment(GitLabModel):
    id: int
