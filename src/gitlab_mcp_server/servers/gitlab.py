"""GitLab MCP server — all tool registrations."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any, Literal

from fastmcp import Context, FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from pydantic import BaseModel, Field, ValidationError

from ..api import (
    branches,
    files as repo_files,
    group_milestones,
    groups,
    issues,
    labels as project_labels,
    merge_requests,
    milestones,
    projects,
)
from ..client import GitLabClient
from ..config import GitLabConfig
from ..exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabNotFoundError,
    GitLabParseError,
    GitLabValidationError,
    GitLabWriteDisabledError,
    format_validation_error,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    config = GitLabConfig.from_env()
    config.validate()
    client = GitLabClient(config)
    logger.info("Connected to %s (read-only=%s)", config.api_url, config.read_only)
    try:
        yield {"client": client, "config": config}
    finally:
        await client.close()


mcp = FastMCP(
    name="gitlab-mcp-server",
    instructions=(
        "Provides tools for the GitLab REST API: repository files, projects and groups,"
        " branches, issues, merge requests, labels and milestones."
    ),
    lifespan=lifespan,
)


def _get_client(ctx: Context) -> GitLabClient:
    return ctx.request_context.lifespan_context["client"]


def _get_config(ctx: Context) -> GitLabConfig:
    return ctx.request_context.lifespan_context["config"]


def _check_write(ctx: Context) -> None:
    if _get_config(ctx).read_only:
        raise GitLabWriteDisabledError


def _ok(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _deleted() -> str:
    return _ok({"success": True})


def _err(error: Exception) -> str:
    if isinstance(error, ValidationError):
        detail: dict[str, Any] = {"error": format_validation_error(error)}
    else:
        detail = {"error": str(error)}

    if isinstance(error, (GitLabValidationError, ValidationError)):
        detail["hint"] = "Fix the tool arguments and call the tool again."
    elif isinstance(error, GitLabParseError):
        detail["fields"] = error.fields
        detail["hint"] = "GitLab returned an unexpected payload — check GITLAB_API_URL."
    elif isinstance(error, GitLabNotFoundError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Verify the resource ID/path. Project and group paths must be full paths."
    elif isinstance(error, GitLabAuthError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Check GITLAB_PERSONAL_ACCESS_TOKEN permissions. Token needs 'api' scope."
    elif isinstance(error, GitLabWriteDisabledError):
        detail["hint"] = "Server is in read-only mode. Set GITLAB_READ_ONLY=false to enable writes."
    elif isinstance(error, GitLabApiError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        if error.status_code == 400:
            detail["hint"] = "Bad request — GitLab rejected the parameters."
        elif error.status_code == 409:
            detail["hint"] = "Conflict — resource may already exist or be locked."
        elif error.status_code == 422:
            detail["hint"] = "Validation failed — check required fields and formats."
        elif error.status_code == 429:
            detail["hint"] = "Rate limited. Wait before retrying."
    else:
        logger.exception("Unexpected error in tool call")
    return json.dumps(detail, indent=2, ensure_ascii=False)


class ArgumentErrorMiddleware(Middleware):
    """Report tool argument schema errors in the same JSON shape as tool errors."""

    async def on_call_tool(self, context: MiddlewareContext, call_next) -> ToolResult:
        try:
            return await call_next(context)
        except ValidationError as e:
            logger.debug("Rejected arguments for %s: %s", context.message.name, e)
            payload = _err(e)
            return ToolResult(content=payload, structured_content={"result": payload})


mcp.add_middleware(ArgumentErrorMiddleware())


ProjectId = Annotated[
    str, Field(description="Project ID or URL-encoded path (e.g. 'group/project')")
]
GroupId = Annotated[str, Field(description="Group ID or URL-encoded path")]
PageNumber = Annotated[int | None, Field(description="Page number for pagination (default: 1)")]
PerPage = Annotated[int | None, Field(description="Number of results per page (default: 20)")]


class FileEntry(BaseModel):
    file_path: str = Field(description="Path where to create the file")
    content: str = Field(description="Content of the file")


# ════════════════════════════════════════════════════════════════════
# Files
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gitlab", "files", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def create_or_update_file(
    ctx: Context,
    project_id: ProjectId,
    file_path: Annotated[str, Field(description="Path where to create/update the file")],
    content: Annotated[str, Field(description="Content of the file")],
    commit_message: Annotated[str, Field(description="Commit message")],
    branch: Annotated[str, Field(description="Branch to create/update the file in")],
    previous_path: Annotated[
        str | None, Field(description="Path of the file to move/rename")
    ] = None,
) -> str:
    """Create or update a single file in a GitLab project."""
    try:
        _check_write(ctx)
        data = await repo_files.create_or_update_file(
            _get_client(ctx), project_id, file_path, content, commit_message, branch, previous_path
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "files", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def get_file_contents(
    ctx: Context,
    project_id: ProjectId,
    file_path: Annotated[str, Field(description="Path to the file or directory")],
    ref: Annotated[
        str | None, Field(description="Branch/tag/commit to get contents from (default: HEAD)")
    ] = None,
) -> str:
    """Get the contents of a file or directory from a GitLab project."""
    try:
        data = await repo_files.get_file_contents(_get_client(ctx), project_id, file_path, ref)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "files", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def push_files(
    ctx: Context,
    project_id: ProjectId,
    branch: Annotated[str, Field(description="Branch to push to")],
    files: Annotated[
        list[FileEntry], Field(description="Array of files to push")
    ],
    commit_message: Annotated[str, Field(description="Commit message")],
) -> str:
    """Push multiple files to a GitLab project in a single commit."""
    try:
        _check_write(ctx)
        data = await repo_files.push_files(
            _get_client(ctx),
            project_id,
            commit_message,
            branch,
            [f.model_dump() for f in files],
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Repositories
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gitlab", "projects", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def search_repositories(
    ctx: Context,
    search: Annotated[str, Field(description="Search query")],
    page: PageNumber = 1,
    per_page: PerPage = 20,
) -> str:
    """Search for GitLab projects."""
    try:
        data = await projects.search_projects(
            _get_client(ctx), search, page=page, per_page=per_page
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "projects", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_repository(
    ctx: Context,
    name: Annotated[str, Field(description="Repository name")],
    description: Annotated[str | None, Field(description="Repository description")] = None,
    visibility: Annotated[
        Literal["private", "internal", "public"] | None,
        Field(description="Repository visibility level"),
    ] = None,
    initialize_with_readme: Annotated[
        bool | None, Field(description="Initialize with README.md")
    ] = None,
) -> str:
    """Create a new GitLab project."""
    try:
        _check_write(ctx)
        data = await projects.create_repository(
            _get_client(ctx), name, description, visibility, initialize_with_readme
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "projects", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def fork_repository(
    ctx: Context,
    project_id: ProjectId,
    namespace: Annotated[str | None, Field(description="Namespace to fork to (full path)")] = None,
) -> str:
    """Fork a GitLab project to your account or specified namespace."""
    try:
        _check_write(ctx)
        data = await projects.fork_project(_get_client(ctx), project_id, namespace)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "groups", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def search_groups(
    ctx: Context,
    search: Annotated[str, Field(description="Search query for groups")],
    page: PageNumber = 1,
    per_page: PerPage = 20,
    owned: Annotated[
        bool | None, Field(description="Limit by groups owned by the current user")
    ] = None,
    min_access_level: Annotated[
        int | None,
        Field(
            description=(
                "Limit by minimum access level "
                "(10=Guest, 20=Reporter, 30=Developer, 40=Maintainer, 50=Owner)"
            )
        ),
    ] = None,
) -> str:
    """Search for GitLab groups."""
    try:
        data = await groups.search_groups(
            _get_client(ctx),
            search,
            page=page,
            per_page=per_page,
            owned=owned,
            min_access_level=min_access_level,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "branches", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_branch(
    ctx: Context,
    project_id: ProjectId,
    branch: Annotated[str, Field(description="Name for the new branch")],
    ref: Annotated[
        str | None, Field(description="Source branch/commit for new branch (default: HEAD)")
    ] = None,
) -> str:
    """Create a new branch in a GitLab project."""
    try:
        _check_write(ctx)
        data = await branches.create_branch(_get_client(ctx), project_id, branch, ref or "HEAD")
        return _ok(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Issues
# ════════════════════════════════════════════════════════════════════

IssueState = Annotated[
    Literal["opened", "closed", "all"] | None, Field(description="Filter issues by state")
]
LabelFilter = Annotated[str | None, Field(description="Comma-separated list of label names")]
LabelList = Annotated[list[str] | None, Field(description="Array of label names")]
AssigneeIds = Annotated[list[int] | None, Field(description="Array of user IDs to assign")]
MilestoneId = Annotated[int | None, Field(description="Milestone ID to assign")]
OrderBy = Annotated[Literal["asc", "desc"] | None, Field(description="Sort order")]


@mcp.tool(
    tags={"gitlab", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def list_issues(
    ctx: Context,
    project_id: ProjectId,
    state: IssueState = None,
    labels: LabelFilter = None,
    milestone: Annotated[str | None, Field(description="Milestone title")] = None,
    assignee_id: Annotated[int | None, Field(description="User ID of assignee")] = None,
    author_id: Annotated[int | None, Field(description="User ID of author")] = None,
    search: Annotated[str | None, Field(description="Search against title and description")] = None,
    created_after: Annotated[
        str | None, Field(description="Return issues created after date (ISO 8601)")
    ] = None,
    created_before: Annotated[
        str | None, Field(description="Return issues created before date (ISO 8601)")
    ] = None,
    updated_after: Annotated[
        str | None, Field(description="Return issues updated after date (ISO 8601)")
    ] = None,
    updated_before: Annotated[
        str | None, Field(description="Return issues updated before date (ISO 8601)")
    ] = None,
    sort: Annotated[
        Literal[
            "created_at",
            "updated_at",
            "priority",
            "due_date",
            "relative_position",
            "label_priority",
            "milestone_due",
            "popularity",
            "weight",
        ]
        | None,
        Field(description="Sort issues"),
    ] = None,
    order_by: OrderBy = None,
    page: Annotated[
        int | None,
        Field(
            description=(
                "Page number for pagination. ONLY specify this if you need a specific page"
                " - by default ALL issues are fetched automatically"
            )
        ),
    ] = None,
    per_page: Annotated[
        int | None, Field(description="Number of results per page (default: 100 when fetching all)")
    ] = None,
    with_labels_details: Annotated[
        bool | None, Field(description="If true, returns more details for each label")
    ] = None,
) -> str:
    """List all issues in a GitLab project."""
    try:
        data = await issues.list_issues(
            _get_client(ctx),
            project_id,
            state=state,
            labels=labels,
            milestone=milestone,
            assignee_id=assignee_id,
            author_id=author_id,
            search=search,
            created_after=created_after,
            created_before=created_before,
            updated_after=updated_after,
            updated_before=updated_before,
            sort=sort,
            order_by=order_by,
            page=page,
            per_page=per_page,
            with_labels_details=with_labels_details,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def search_issues(
    ctx: Context,
    project_id: ProjectId,
    search: Annotated[str, Field(description="Search term for title and description")],
    state: IssueState = None,
    labels: LabelFilter = None,
    page: PageNumber = None,
    per_page: PerPage = None,
) -> str:
    """Search for issues in a GitLab project."""
    try:
        data = await issues.search_issues(
            _get_client(ctx),
            project_id,
            search,
            state=state,
            labels=labels,
            page=page,
            per_page=per_page,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "issues", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_issue(
    ctx: Context,
    project_id: ProjectId,
    title: Annotated[str, Field(description="Issue title")],
    description: Annotated[str | None, Field(description="Issue description")] = None,
    assignee_ids: AssigneeIds = None,
    labels: LabelList = None,
    milestone_id: MilestoneId = None,
) -> str:
    """Create a new issue in a GitLab project."""
    try:
        _check_write(ctx)
        data = await issues.create_issue(
            _get_client(ctx),
            project_id,
            title,
            description=description,
            assignee_ids=assignee_ids,
            labels=labels,
            milestone_id=milestone_id,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def update_issue(
    ctx: Context,
    project_id: ProjectId,
    issue_iid: Annotated[int, Field(description="Issue internal ID")],
    title: Annotated[str | None, Field(description="New issue title")] = None,
    description: Annotated[str | None, Field(description="New issue description")] = None,
    state_event: Annotated[
        Literal["close", "reopen"] | None, Field(description="Change issue state")
    ] = None,
    labels: LabelList = None,
    assignee_ids: AssigneeIds = None,
    milestone_id: MilestoneId = None,
) -> str:
    """Update an existing issue in a GitLab project."""
    try:
        _check_write(ctx)
        data = await issues.update_issue(
            _get_client(ctx),
            project_id,
            issue_iid,
            title=title,
            description=description,
            state_event=state_event,
            labels=labels,
            assignee_ids=assignee_ids,
            milestone_id=milestone_id,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "issues", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def add_issue_comment(
    ctx: Context,
    project_id: ProjectId,
    issue_iid: Annotated[int, Field(description="Issue internal ID")],
    body: Annotated[str, Field(description="Content of the comment")],
) -> str:
    """Add a comment to an issue in a GitLab project."""
    try:
        _check_write(ctx)
        data = await issues.add_issue_comment(_get_client(ctx), project_id, issue_iid, body)
        return _ok(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Merge Requests
# ════════════════════════════════════════════════════════════════════

MergeRequestIid = Annotated[int, Field(description="Merge request internal ID")]


@mcp.tool(
    tags={"gitlab", "merge-requests", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_merge_request(
    ctx: Context,
    project_id: ProjectId,
    title: Annotated[str, Field(description="Merge request title")],
    source_branch: Annotated[str, Field(description="Branch containing changes")],
    target_branch: Annotated[str, Field(description="Branch to merge into")],
    description: Annotated[str | None, Field(description="Merge request description")] = None,
    draft: Annotated[bool | None, Field(description="Create as draft merge request")] = None,
    allow_collaboration: Annotated[
        bool | None, Field(description="Allow commits from upstream members")
    ] = None,
) -> str:
    """Create a new merge request in a GitLab project."""
    try:
        _check_write(ctx)
        data = await merge_requests.create_merge_request(
            _get_client(ctx),
            project_id,
            title,
            source_branch,
            target_branch,
            description=description,
            allow_collaboration=allow_collaboration,
            draft=draft,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "merge-requests", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def list_merge_requests(
    ctx: Context,
    project_id: ProjectId,
    state: Annotated[
        Literal["opened", "closed", "locked", "merged", "all"] | None,
        Field(description="Filter merge requests by state"),
    ] = None,
    target_branch: Annotated[str | None, Field(description="Filter by target branch")] = None,
    source_branch: Annotated[str | None, Field(description="Filter by source branch")] = None,
    labels: LabelFilter = None,
    milestone: Annotated[str | None, Field(description="Milestone title")] = None,
    assignee_id: Annotated[int | None, Field(description="User ID of assignee")] = None,
    author_id: Annotated[int | None, Field(description="User ID of author")] = None,
    search: Annotated[str | None, Field(description="Search against title and description")] = None,
    created_after: Annotated[
        str | None, Field(description="Return MRs created after date (ISO 8601)")
    ] = None,
    created_before: Annotated[
        str | None, Field(description="Return MRs created before date (ISO 8601)")
    ] = None,
    updated_after: Annotated[
        str | None, Field(description="Return MRs updated after date (ISO 8601)")
    ] = None,
    updated_before: Annotated[
        str | None, Field(description="Return MRs updated before date (ISO 8601)")
    ] = None,
    sort: Annotated[
        Literal["created_at", "updated_at", "title"] | None,
        Field(description="Sort merge requests"),
    ] = None,
    order_by: OrderBy = None,
    page: PageNumber = None,
    per_page: PerPage = None,
) -> str:
    """List all merge requests in a GitLab project."""
    try:
        data = await merge_requests.list_merge_requests(
            _get_client(ctx),
            project_id,
            state=state,
            target_branch=target_branch,
            source_branch=source_branch,
            labels=labels,
            milestone=milestone,
            assignee_id=assignee_id,
            author_id=author_id,
            search=search,
            created_after=created_after,
            created_before=created_before,
            updated_after=updated_after,
            updated_before=updated_before,
            sort=sort,
            order_by=order_by,
            page=page,
            per_page=per_page,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "merge-requests", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def update_merge_request(
    ctx: Context,
    project_id: ProjectId,
    merge_request_iid: MergeRequestIid,
    title: Annotated[str | None, Field(description="New merge request title")] = None,
    description: Annotated[str | None, Field(description="New merge request description")] = None,
    state_event: Annotated[
        Literal["close", "reopen"] | None, Field(description="Change merge request state")
    ] = None,
    target_branch: Annotated[str | None, Field(description="New target branch")] = None,
    labels: LabelList = None,
    assignee_ids: AssigneeIds = None,
    milestone_id: MilestoneId = None,
    remove_source_branch: Annotated[
        bool | None, Field(description="Remove source branch when merged")
    ] = None,
) -> str:
    """Update an existing merge request in a GitLab project."""
    try:
        _check_write(ctx)
        data = await merge_requests.update_merge_request(
            _get_client(ctx),
            project_id,
            merge_request_iid,
            title=title,
            description=description,
            state_event=state_event,
            target_branch=target_branch,
            labels=labels,
            assignee_ids=assignee_ids,
            milestone_id=milestone_id,
            remove_source_branch=remove_source_branch,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "merge-requests", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def merge_merge_request(
    ctx: Context,
    project_id: ProjectId,
    merge_request_iid: MergeRequestIid,
    merge_commit_message: Annotated[
        str | None, Field(description="Custom merge commit message")
    ] = None,
    should_remove_source_branch: Annotated[
        bool | None, Field(description="Remove source branch after merge")
    ] = None,
    merge_when_pipeline_succeeds: Annotated[
        bool | None, Field(description="Merge when pipeline succeeds")
    ] = None,
    sha: Annotated[
        str | None, Field(description="SHA that must match the source branch HEAD")
    ] = None,
) -> str:
    """Merge a merge request in a GitLab project."""
    try:
        _check_write(ctx)
        data = await merge_requests.merge_merge_request(
            _get_client(ctx),
            project_id,
            merge_request_iid,
            merge_commit_message=merge_commit_message,
            should_remove_source_branch=should_remove_source_branch,
            merge_when_pipeline_succeeds=merge_when_pipeline_succeeds,
            sha=sha,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "merge-requests", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def add_merge_request_comment(
    ctx: Context,
    project_id: ProjectId,
    merge_request_iid: MergeRequestIid,
    body: Annotated[str, Field(description="Content of the comment")],
) -> str:
    """Add a comment to a merge request in a GitLab project."""
    try:
        _check_write(ctx)
        data = await merge_requests.add_merge_request_comment(
            _get_client(ctx), project_id, merge_request_iid, body
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Labels
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gitlab", "labels", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def list_labels(
    ctx: Context,
    project_id: ProjectId,
    page: PageNumber = 1,
    per_page: PerPage = 20,
) -> str:
    """List all labels in a GitLab project."""
    try:
        data = await project_labels.list_labels(
            _get_client(ctx), project_id, page=page, per_page=per_page
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "labels", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_label(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Label name")],
    color: Annotated[str, Field(description="Label color, e.g. '#FF0000' or a CSS color name")],
    description: Annotated[str | None, Field(description="Label description")] = None,
    priority: Annotated[int | None, Field(description="Label priority")] = None,
) -> str:
    """Create a new label in a GitLab project."""
    try:
        _check_write(ctx)
        data = await project_labels.create_label(
            _get_client(ctx), project_id, name, color, description, priority
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "labels", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def update_label(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Current label name")],
    new_name: Annotated[str | None, Field(description="New label name")] = None,
    color: Annotated[str | None, Field(description="New label color")] = None,
    description: Annotated[str | None, Field(description="New label description")] = None,
    priority: Annotated[int | None, Field(description="New label priority")] = None,
) -> str:
    """Update an existing label in a GitLab project."""
    try:
        _check_write(ctx)
        data = await project_labels.update_label(
            _get_client(ctx),
            project_id,
            name,
            new_name=new_name,
            color=color,
            description=description,
            priority=priority,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "labels", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def delete_label(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Label name")],
) -> str:
    """Delete a label from a GitLab project."""
    try:
        _check_write(ctx)
        await project_labels.delete_label(_get_client(ctx), project_id, name)
        return _deleted()
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Milestones
# ════════════════════════════════════════════════════════════════════

MilestoneState = Annotated[
    Literal["active", "closed"] | None,
    Field(description="Return only active or closed milestones"),
]
MilestonePk = Annotated[int, Field(description="The ID of the milestone")]
MilestoneTitle = Annotated[str, Field(description="The title of the milestone")]
MilestoneDescription = Annotated[
    str | None, Field(description="The description of the milestone")
]
DueDate = Annotated[str | None, Field(description="The due date of the milestone (YYYY-MM-DD)")]
StartDate = Annotated[
    str | None, Field(description="The start date of the milestone (YYYY-MM-DD)")
]
MilestoneStateEvent = Annotated[
    Literal["close", "activate"] | None, Field(description="The state event of the milestone")
]


@mcp.tool(
    tags={"gitlab", "milestones", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def list_milestones(
    ctx: Context,
    project_id: ProjectId,
    state: MilestoneState = None,
    page: PageNumber = 1,
    per_page: PerPage = 20,
) -> str:
    """List all milestones in a GitLab project."""
    try:
        data = await milestones.list_milestones(
            _get_client(ctx), project_id, state, page=page, per_page=per_page
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_milestone(
    ctx: Context,
    project_id: ProjectId,
    title: MilestoneTitle,
    description: MilestoneDescription = None,
    due_date: DueDate = None,
    start_date: StartDate = None,
) -> str:
    """Create a new milestone in a GitLab project."""
    try:
        _check_write(ctx)
        data = await milestones.create_milestone(
            _get_client(ctx), project_id, title, description, due_date, start_date
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def update_milestone(
    ctx: Context,
    project_id: ProjectId,
    milestone_id: MilestonePk,
    title: Annotated[str | None, Field(description="The title of the milestone")] = None,
    description: MilestoneDescription = None,
    due_date: DueDate = None,
    start_date: StartDate = None,
    state_event: MilestoneStateEvent = None,
) -> str:
    """Update an existing milestone in a GitLab project."""
    try:
        _check_write(ctx)
        data = await milestones.update_milestone(
            _get_client(ctx),
            project_id,
            milestone_id,
            title=title,
            description=description,
            due_date=due_date,
            start_date=start_date,
            state_event=state_event,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def delete_milestone(ctx: Context, project_id: ProjectId, milestone_id: MilestonePk) -> str:
    """Delete a milestone from a GitLab project."""
    try:
        _check_write(ctx)
        await milestones.delete_milestone(_get_client(ctx), project_id, milestone_id)
        return _deleted()
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Group Milestones
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gitlab", "milestones", "groups", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def list_group_milestones(
    ctx: Context,
    group_id: GroupId,
    state: MilestoneState = None,
    title: Annotated[
        str | None,
        Field(description="Return only milestones with the given title (case-sensitive)"),
    ] = None,
    search: Annotated[
        str | None,
        Field(description="Return only milestones with title or description matching the string"),
    ] = None,
    search_title: Annotated[
        str | None, Field(description="Return only milestones with title matching the string")
    ] = None,
    include_ancestors: Annotated[
        bool | None, Field(description="Include milestones for all parent groups")
    ] = None,
    include_descendants: Annotated[
        bool | None, Field(description="Include milestones for group and its descendants")
    ] = None,
    updated_before: Annotated[
        str | None,
        Field(description="Return only milestones updated before the given datetime (ISO 8601)"),
    ] = None,
    updated_after: Annotated[
        str | None,
        Field(description="Return only milestones updated after the given datetime (ISO 8601)"),
    ] = None,
    containing_date: Annotated[
        str | None, Field(description="Return only milestones containing the given date")
    ] = None,
    start_date: Annotated[
        str | None, Field(description="Return only milestones where due_date >= start_date")
    ] = None,
    end_date: Annotated[
        str | None, Field(description="Return only milestones where start_date <= end_date")
    ] = None,
    page: PageNumber = None,
    per_page: PerPage = None,
) -> str:
    """List all milestones in a GitLab group."""
    try:
        data = await group_milestones.list_group_milestones(
            _get_client(ctx),
            group_id,
            state=state,
            title=title,
            search=search,
            search_title=search_title,
            include_ancestors=include_ancestors,
            include_descendants=include_descendants,
            updated_before=updated_before,
            updated_after=updated_after,
            containing_date=containing_date,
            start_date=start_date,
            end_date=end_date,
            page=page,
            per_page=per_page,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "groups", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def create_group_milestone(
    ctx: Context,
    group_id: GroupId,
    title: MilestoneTitle,
    description: MilestoneDescription = None,
    due_date: DueDate = None,
    start_date: StartDate = None,
) -> str:
    """Create a new milestone in a GitLab group."""
    try:
        _check_write(ctx)
        data = await group_milestones.create_group_milestone(
            _get_client(ctx), group_id, title, description, due_date, start_date
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "groups", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def update_group_milestone(
    ctx: Context,
    group_id: GroupId,
    milestone_id: MilestonePk,
    title: Annotated[str | None, Field(description="The title of the milestone")] = None,
    description: MilestoneDescription = None,
    due_date: DueDate = None,
    start_date: StartDate = None,
    state_event: MilestoneStateEvent = None,
) -> str:
    """Update an existing milestone in a GitLab group."""
    try:
        _check_write(ctx)
        data = await group_milestones.update_group_milestone(
            _get_client(ctx),
            group_id,
            milestone_id,
            title=title,
            description=description,
            due_date=due_date,
            start_date=start_date,
            state_event=state_event,
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gitlab", "milestones", "groups", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def delete_group_milestone(ctx: Context, group_id: GroupId, milestone_id: MilestonePk) -> str:
    """Delete a milestone from a GitLab group."""
    try:
        _check_write(ctx)
        await group_milestones.delete_group_milestone(_get_client(ctx), group_id, milestone_id)
        return _deleted()
    except Exception as e:
        return _err(e)
