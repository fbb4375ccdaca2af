"""Tests for project, group, and branch operations."""

from __future__ import annotations

import json

import httpx
import pytest

from gitlab_mcp_server.api import branches, groups, projects
from gitlab_mcp_server.exceptions import GitLabParseError, GitLabValidationError


class TestSearchProjects:
    async def test_count_from_total_header(self, client, mock_api):
        mock_api.get("/projects").mock(
            return_value=httpx.Response(
                200, json=[{"id": 1, "name": "a"}], headers={"X-Total": "12"}
            )
        )
        result = await projects.search_projects(client, "a", page=2, per_page=1)
        assert result == {"count": 12, "items": [{"id": 1, "name": "a"}]}

    async def test_count_falls_back_to_page_length(self, client, mock_api):
        mock_api.get("/projects").mock(
            return_value=httpx.Response(200, json=[{"id": 1}, {"id": 2}])
        )
        result = await projects.search_projects(client, "a")
        assert result["count"] == 2

    async def test_non_list_rejected(self, client, mock_api):
        mock_api.get("/projects").mock(return_value=httpx.Response(200, json={"id": 1}))
        with pytest.raises(GitLabParseError, match="Expected a list of Repository objects"):
            await projects.search_projects(client, "a")

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"query": ""}, "Search query is required"),
            ({"query": "a", "page": 0}, "Page number must be 1 or greater"),
            ({"query": "a", "per_page": 0}, "Per page must be between 1 and 100"),
        ],
    )
    async def test_invalid_arguments(self, client, mock_api, kwargs, message):
        with pytest.raises(GitLabValidationError, match=message):
            await projects.search_projects(client, **kwargs)


class TestCreateRepository:
    async def test_body(self, client, mock_api):
        route = mock_api.post("/projects").mock(
            return_value=httpx.Response(201, json={"id": 5, "name": "demo"})
        )
        await projects.create_repository(client, "demo", visibility="internal")
        body = json.loads(route.calls.last.request.content)
        assert body == {"name": "demo", "visibility": "internal"}

    async def test_invalid_visibility(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Visibility must be one of"):
            await projects.create_repository(client, "demo", visibility="secret")

    async def test_blank_name(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Repository name is required"):
            await projects.create_repository(client, " ")


class TestForkProject:
    async def test_fork_without_parent_rejected(self, client, mock_api):
        mock_api.post("/projects/123/fork").mock(return_value=httpx.Response(201, json={"id": 9}))
        with pytest.raises(GitLabParseError) as exc_info:
            await projects.fork_project(client, "123")
        assert exc_info.value.fields == ["forked_from_project"]

    async def test_no_body_without_namespace(self, client, mock_api):
        route = mock_api.post("/projects/123/fork").mock(
            return_value=httpx.Response(
                201,
                json={
                    "id": 9,
                    "forked_from_project": {
                        "name": "app",
                        "path_with_namespace": "g/app",
                        "owner": {"id": 1, "username": "root", "avatar_url": None},
                        "web_url": "https://gitlab.example.com/g/app",
                    },
                },
            )
        )
        await projects.fork_project(client, "123")
        assert route.calls.last.request.content == b""


class TestSearchGroups:
    async def test_filters(self, client, mock_api):
        route = mock_api.get("/groups").mock(return_value=httpx.Response(200, json=[{"id": 2}]))
        result = await groups.search_groups(client, "ops", owned=False)
        assert result["items"] == [{"id": 2}]
        params = route.calls.last.request.url.params
        assert params["owned"] == "false"
        assert "min_access_level" not in params

    async def test_invalid_access_level(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Minimum access level"):
            await groups.search_groups(client, "ops", min_access_level=35)


class TestCreateBranch:
    async def test_creates(self, client, mock_api):
        route = mock_api.post("/projects/123/repository/branches").mock(
            return_value=httpx.Response(
                201, json={"name": "feat", "commit": {"id": "abc", "web_url": "https://x/abc"}}
            )
        )
        result = await branches.create_branch(client, "123", "feat", "main")
        assert result["commit"]["id"] == "abc"
        assert json.loads(route.calls.last.request.content) == {"branch": "feat", "ref": "main"}

    @pytest.mark.parametrize(
        ("name", "ref", "message"),
        [("", "main", "Branch name is required"), ("feat", " ", "Source reference is required")],
    )
    async def test_blank_arguments(self, client, mock_api, name, ref, message):
        with pytest.raises(GitLabValidationError, match=message):
            await branches.create_branch(client, "123", name, ref)
