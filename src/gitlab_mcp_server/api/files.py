"""Repository file reads and writes."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from ..client import GitLabClient, encode_id, encode_path
from ..exceptions import GitLabNotFoundError, GitLabParseError, GitLabValidationError
from ..models.base import parse_model, parse_models
from ..models.repositories import Commit, CreateUpdateFileResponse, DirectoryEntry, FileContent
from ._validation import require_project_id, require_text

logger = logging.getLogger(__name__)


def _file_endpoint(project_id: str, file_path: str) -> str:
    return f"/projects/{encode_id(project_id)}/repository/files/{encode_path(file_path)}"


def _decode_content(content: FileContent) -> FileContent:
    if content.encoding != "base64":
        return content
    try:
        raw = base64.b64decode(content.content)
    except binascii.Error as e:
        raise GitLabParseError("FileContent", f"content is not valid base64 ({e})") from e
    # Undecodable bytes become U+FFFD.
    text = raw.decode("utf-8", errors="replace")
    return content.model_copy(update={"content": text})


async def get_file_contents(
    client: GitLabClient, project_id: str, file_path: str, ref: str | None = None
) -> dict[str, Any] | list[dict[str, Any]]:
    """Fetch a file (content decoded to text) or a directory listing."""
    require_project_id(project_id)
    require_text(file_path, "File path is required")

    data = await client.get(_file_endpoint(project_id, file_path), params={"ref": ref or "HEAD"})
    if isinstance(data, list):
        return [entry.to_dict() for entry in parse_models(DirectoryEntry, data)]
    return _decode_content(parse_model(FileContent, data)).to_dict()


async def create_or_update_file(
    client: GitLabClient,
    project_id: str,
    file_path: str,
    content: str,
    commit_message: str,
    branch: str,
    previous_path: str | None = None,
) -> dict[str, Any]:
    """Write a single file, creating it when it does not exist on *branch* yet."""
    require_project_id(project_id)
    require_text(file_path, "File path is required")
    require_text(content, "File content is required")
    require_text(commit_message, "Commit message is required")
    require_text(branch, "Branch is required")

    body: dict[str, Any] = {
        "branch": branch,
        "content": content,
        "commit_message": commit_message,
    }
    if previous_path:
        body["previous_path"] = previous_path

    endpoint = _file_endpoint(project_id, file_path)
    try:
        await client.get(endpoint, params={"ref": branch})
    except GitLabNotFoundError:
        exists = False
    else:
        exists = True

    logger.debug("%s %s on %s", "Updating" if exists else "Creating", file_path, branch)
    if exists:
        data = await client.put(endpoint, body)
    else:
        data = await client.post(endpoint, body)
    return parse_model(CreateUpdateFileResponse, data).to_dict()


async def push_files(
    client: GitLabClient,
    project_id: str,
    commit_message: str,
    branch: str,
    files: list[dict[str, str]],
) -> dict[str, Any]:
    """Create several files in one commit.

    Each entry of *files* carries ``file_path`` and ``content``.
    """
    require_project_id(project_id)
    require_text(commit_message, "Commit message is required")
    require_text(branch, "Branch is required")
    if not files:
        raise GitLabValidationError("At least one file action is required")
    for f in files:
        require_text(f.get("file_path"), "File path is required")

    actions = [
        {"action": "create", "file_path": f["file_path"], "content": f.get("content", "")}
        for f in files
    ]
    data = await client.post(
        f"/projects/{encode_id(project_id)}/repository/commits",
        {"branch": branch, "commit_message": commit_message, "actions": actions},
    )
    return parse_model(Commit, data).to_dict()
