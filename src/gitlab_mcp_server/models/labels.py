"""Label and milestone models."""

from __future__ import annotations

from .base import GitLabModel


class Label(GitLabModel):
    id: int


class Milestone(GitLabModel):
    id: int
    project_id: int | None = None


class GroupMilestone(GitLabModel):
    id: int
    group_id: int | None = None
