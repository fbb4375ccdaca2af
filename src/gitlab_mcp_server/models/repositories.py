"""Repository models: file contents, commits, branch references."""

from __future__ import annotations

from .base import GitLabModel


class FileContent(GitLabModel):
    file_name: str
    file_path: str
    content: str
    encoding: str = "base64"


class DirectoryEntry(GitLabModel):
    name: str
    path: str


class CreateUpdateFileResponse(GitLabModel):
    file_path: str
    branch: str
    commit_id: str | None = None
    content: FileContent | None = None


class Commit(GitLabModel):
    id: str
    short_id: str
    title: str
    author_name: str
    author_email: str
    authored_date: str
    committer_name: str
    committer_email: str
    committed_date: str
    web_url: str
    parent_ids: list[str]


class CommitRef(GitLabModel):
    id: str
    web_url: str


class Reference(GitLabModel):
    name: str
    commit: CommitRef
