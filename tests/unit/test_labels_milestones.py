"""Tests for label, project milestone, and group milestone operations."""

from __future__ import annotations

import json

import httpx
import pytest

from gitlab_mcp_server.api import group_milestones, labels, milestones
from gitlab_mcp_server.exceptions import GitLabNotFoundError, GitLabValidationError


class TestLabels:
    async def test_list(self, client, mock_api):
        route = mock_api.get("/projects/123/labels").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "name": "bug", "color": "#d9534f"}])
        )
        result = await labels.list_labels(client, "123", per_page=50)
        assert result[0]["name"] == "bug"
        assert route.calls.last.request.url.params["per_page"] == "50"

    async def test_create(self, client, mock_api):
        route = mock_api.post("/projects/123/labels").mock(
            return_value=httpx.Response(201, json={"id": 2, "name": "ui"})
        )
        await labels.create_label(client, "123", "ui", "#428BCA", priority=1)
        body = json.loads(route.calls.last.request.content)
        assert body == {"name": "ui", "color": "#428BCA", "priority": 1}

    @pytest.mark.parametrize(
        ("name", "color", "message"),
        [("", "#fff", "Label name is required"), ("ui", "", "Label color is required")],
    )
    async def test_create_blank_arguments(self, client, mock_api, name, color, message):
        with pytest.raises(GitLabValidationError, match=message):
            await labels.create_label(client, "123", name, color)

    async def test_delete_missing_label(self, client, mock_api):
        mock_api.delete("/projects/123/labels/gone").mock(
            return_value=httpx.Response(404, json={"message": "404 Label Not Found"})
        )
        with pytest.raises(GitLabNotFoundError):
            await labels.delete_label(client, "123", "gone")


class TestMilestones:
    async def test_list_by_state(self, client, mock_api):
        route = mock_api.get("/projects/123/milestones").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "project_id": 123, "title": "v1"}])
        )
        result = await milestones.list_milestones(client, "123", "active")
        assert result[0]["project_id"] == 123
        assert route.calls.last.request.url.params["state"] == "active"

    async def test_invalid_state(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="State must be one of: active, closed"):
            await milestones.list_milestones(client, "123", "opened")

    async def test_create(self, client, mock_api):
        route = mock_api.post("/projects/123/milestones").mock(
            return_value=httpx.Response(201, json={"id": 3, "title": "v2"})
        )
        await milestones.create_milestone(client, "123", "v2", due_date="2025-01-31")
        body = json.loads(route.calls.last.request.content)
        assert body == {"title": "v2", "due_date": "2025-01-31"}

    async def test_update_close(self, client, mock_api):
        route = mock_api.put("/projects/123/milestones/3").mock(
            return_value=httpx.Response(200, json={"id": 3, "state": "closed"})
        )
        result = await milestones.update_milestone(client, "123", 3, state_event="close")
        assert result["state"] == "closed"
        assert json.loads(route.calls.last.request.content) == {"state_event": "close"}

    async def test_update_invalid_state_event(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="State event must be one of"):
            await milestones.update_milestone(client, "123", 3, state_event="reopen")

    async def test_delete_invalid_id(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Valid milestone ID is required"):
            await milestones.delete_milestone(client, "123", 0)


class TestGroupMilestones:
    async def test_list_passes_filters(self, client, mock_api):
        route = mock_api.get("/groups/my-group%2Fsub/milestones").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "group_id": 8}])
        )
        result = await group_milestones.list_group_milestones(
            client, "my-group/sub", search_title="v1", include_descendants=True
        )
        assert result == [{"id": 1, "group_id": 8}]
        params = route.calls.last.request.url.params
        assert params["search_title"] == "v1"
        assert params["include_descendants"] == "true"

    async def test_create(self, client, mock_api):
        route = mock_api.post("/groups/8/milestones").mock(
            return_value=httpx.Response(201, json={"id": 4, "group_id": 8})
        )
        await group_milestones.create_group_milestone(client, "8", "Q1", start_date="2025-01-01")
        body = json.loads(route.calls.last.request.content)
        assert body == {"title": "Q1", "start_date": "2025-01-01"}

    async def test_update(self, client, mock_api):
        mock_api.put("/groups/8/milestones/4").mock(
            return_value=httpx.Response(200, json={"id": 4, "group_id": 8, "title": "Q2"})
        )
        result = await group_milestones.update_group_milestone(client, "8", 4, title="Q2")
        assert result["title"] == "Q2"

    async def test_delete(self, client, mock_api):
        route = mock_api.delete("/groups/8/milestones/4").mock(return_value=httpx.Response(204))
        assert await group_milestones.delete_group_milestone(client, "8", 4) is None
        assert route.called

    async def test_blank_group_id(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Group ID is required"):
            await group_milestones.list_group_milestones(client, " ")
