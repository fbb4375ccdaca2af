"""Tests for issue operations."""

from __future__ import annotations

import json

import httpx
import pytest

from gitlab_mcp_server.api import issues
from gitlab_mcp_server.exceptions import GitLabParseError, GitLabValidationError

ISSUES_URL = "/projects/123/issues"


def _issue(issue_id: int, **extra) -> dict:
    return {
        "id": issue_id,
        "iid": issue_id,
        "title": f"Issue {issue_id}",
        "description": None,
        **extra,
    }


class TestListIssues:
    async def test_fetches_all_pages_without_page(self, client, mock_api):
        route = mock_api.get(ISSUES_URL).mock(
            side_effect=[
                httpx.Response(200, json=[_issue(1), _issue(2)], headers={"X-Next-Page": "2"}),
                httpx.Response(200, json=[_issue(3)], headers={"X-Next-Page": ""}),
            ]
        )
        result = await issues.list_issues(client, "123", state="opened", labels="bug,ui")
        assert [i["id"] for i in result] == [1, 2, 3]
        params = route.calls[0].request.url.params
        assert params["per_page"] == "100"
        assert params["state"] == "opened"
        assert params["labels"] == "bug,ui"

    async def test_single_page_when_page_given(self, client, mock_api):
        route = mock_api.get(ISSUES_URL).mock(
            return_value=httpx.Response(200, json=[_issue(5)], headers={"X-Next-Page": "3"})
        )
        result = await issues.list_issues(client, "123", page=2, per_page=10)
        assert [i["id"] for i in result] == [5]
        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["page"] == "2"
        assert params["per_page"] == "10"

    async def test_labels_default_to_empty_list(self, client, mock_api):
        mock_api.get(ISSUES_URL).mock(
            return_value=httpx.Response(200, json=[_issue(1, labels=None), _issue(2)])
        )
        result = await issues.list_issues(client, "123", page=1)
        assert result[0]["labels"] == []
        assert result[1]["labels"] == []

    async def test_missing_description_rejected(self, client, mock_api):
        mock_api.get(ISSUES_URL).mock(return_value=httpx.Response(200, json=[{"id": 1}]))
        with pytest.raises(GitLabParseError, match="description"):
            await issues.list_issues(client, "123", page=1)

    @pytest.mark.parametrize(
        ("options", "message"),
        [
            ({"page": 0}, "Page number must be 1 or greater"),
            ({"per_page": 101}, "Per page must be between 1 and 100"),
            ({"state": "archived"}, "State must be one of: opened, closed, all"),
        ],
    )
    async def test_invalid_options(self, client, mock_api, options, message):
        with pytest.raises(GitLabValidationError, match=message):
            await issues.list_issues(client, "123", **options)


class TestSearchIssues:
    async def test_passes_search_term(self, client, mock_api):
        route = mock_api.get(ISSUES_URL).mock(return_value=httpx.Response(200, json=[_issue(9)]))
        result = await issues.search_issues(client, "123", "crash", state="opened")
        assert result[0]["id"] == 9
        assert route.calls.last.request.url.params["search"] == "crash"

    async def test_blank_search(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Search term is required"):
            await issues.search_issues(client, "123", "  ")


class TestCreateIssue:
    async def test_labels_joined(self, client, mock_api):
        route = mock_api.post(ISSUES_URL).mock(
            return_value=httpx.Response(201, json=_issue(7, labels=["bug", "ui"]))
        )
        result = await issues.create_issue(
            client, "123", "Broken", description="Steps", labels=["bug", "ui"], assignee_ids=[4]
        )
        assert result["labels"] == ["bug", "ui"]
        body = json.loads(route.calls.last.request.content)
        assert body == {
            "title": "Broken",
            "description": "Steps",
            "assignee_ids": [4],
            "labels": "bug,ui",
        }

    async def test_blank_title(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Issue title is required"):
            await issues.create_issue(client, "123", "")


class TestUpdateIssue:
    async def test_only_set_fields_sent(self, client, mock_api):
        route = mock_api.put(f"{ISSUES_URL}/4").mock(
            return_value=httpx.Response(200, json=_issue(4, state="closed"))
        )
        result = await issues.update_issue(
            client, "123", 4, state_event="close", title=None, labels=[]
        )
        assert result["state"] == "closed"
        body = json.loads(route.calls.last.request.content)
        assert body == {"state_event": "close", "labels": ""}

    @pytest.mark.parametrize(("iid", "options"), [(0, {}), (-3, {"title": "x"})])
    async def test_invalid_iid(self, client, mock_api, iid, options):
        with pytest.raises(GitLabValidationError, match="Valid issue IID is required"):
            await issues.update_issue(client, "123", iid, **options)

    async def test_invalid_state_event(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="State event must be one of"):
            await issues.update_issue(client, "123", 1, state_event="merge")


class TestAddIssueComment:
    async def test_posts_note(self, client, mock_api):
        route = mock_api.post(f"{ISSUES_URL}/4/notes").mock(
            return_value=httpx.Response(201, json={"id": 99, "body": "LGTM"})
        )
        result = await issues.add_issue_comment(client, "123", 4, "LGTM")
        assert result == {"id": 99, "body": "LGTM"}
        assert json.loads(route.calls.last.request.content) == {"body": "LGTM"}

    async def test_blank_body(self, client, mock_api):
        with pytest.raises(GitLabValidationError, match="Comment body is required"):
            await issues.add_issue_comment(client, "123", 4, "\n")
