"""Merge request models."""

from __future__ import annotations

from .base import GitLabModel


class DiffRefs(GitLabModel):
    base_sha: str
    head_sha: str
    start_sha: str


class MergeRequest(GitLabModel):
    id: int
    diff_refs: DiffRefs | None = None
