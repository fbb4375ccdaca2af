"""Project, fork, and group models."""

from __future__ import annotations

from .base import GitLabModel


class Repository(GitLabModel):
    id: int


class ForkOwner(GitLabModel):
    id: int
    username: str
    avatar_url: str | None


class ForkParent(GitLabModel):
    name: str
    path_with_namespace: str
    owner: ForkOwner
    web_url: str


class Fork(Repository):
    forked_from_project: ForkParent


class SearchResponse(GitLabModel):
    count: int
    items: list[Repository]


class Group(GitLabModel):
    id: int


class GroupSearchResponse(GitLabModel):
    count: int
    items: list[Group]
