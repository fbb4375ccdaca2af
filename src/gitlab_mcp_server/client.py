"""GitLab API client using httpx."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import GitLabConfig
from .exceptions import GitLabApiError, GitLabAuthError, GitLabNotFoundError, GitLabParseError

logger = logging.getLogger(__name__)

# Largest page size the GitLab API accepts.
MAX_PER_PAGE = 100


def encode_id(resource_id: str | int) -> str:
    """Encode a project/group ID. Numeric IDs pass through; paths are URL-encoded."""
    if isinstance(resource_id, int):
        return str(resource_id)
    return quote(resource_id, safe="")


def encode_path(value: str) -> str:
    """Encode a file path, branch or label name for use as a single URL segment."""
    return quote(value, safe="")


def build_params(options: dict[str, Any]) -> dict[str, Any]:
    """Drop unset options and render booleans the way the GitLab API expects."""
    params: dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[key] = value
    return params


class GitLabClient:
    """Async HTTP client for the GitLab REST API v4."""

    def __init__(self, config: GitLabConfig | None = None) -> None:
        self.config = config or GitLabConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={
                "Authorization": f"Bearer {self.config.token}",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── HTTP helpers ──────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = build_params(params)
        if json_data is not None:
            kwargs["json"] = json_data

        logger.debug("GitLab API request: %s %s", method, path)
        resp = await self._client.request(method, path, **kwargs)

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response — check URL and authentication"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise GitLabApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and return parsed JSON."""
        resp = await self._send(method, path, json_data=json_data, params=params)
        return self._decode(resp)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def get_with_headers(
        self, path: str, params: dict[str, Any] | None = None
    ) -> tuple[Any, httpx.Headers]:
        """GET a resource and return the parsed body together with the response headers."""
        resp = await self._send("GET", path, params=params)
        return self._decode(resp), resp.headers

    async def post(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self._request("POST", path, json_data=json_data, **kwargs)

    async def put(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self._request("PUT", path, json_data=json_data, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self._request("DELETE", path, **kwargs)

    async def get_all(
        self, path: str, params: dict[str, Any] | None = None, *, per_page: int | None = None
    ) -> list[Any]:
        """Fetch every page of a list endpoint by following ``X-Next-Page``.

        Pages are requested sequentially from page 1 and concatenated in order.
        Iteration stops as soon as a response carries no next-page header.
        """
        query = dict(params or {})
        query["per_page"] = per_page or MAX_PER_PAGE
        page: str | int = 1
        items: list[Any] = []
        while True:
            query["page"] = page
            data, headers = await self.get_with_headers(path, params=query)
            if data is None:
                data = []
            if not isinstance(data, list):
                msg = f"expected a list from {path}, got {type(data).__name__}"
                raise GitLabParseError("page", msg)
            items.extend(data)
            next_page = headers.get("x-next-page", "").strip()
            logger.debug(
                "Fetched page %s of %s (%d items, next=%r)", page, path, len(data), next_page
            )
            if not next_page:
                return items
            page = next_page


def total_from_headers(headers: httpx.Headers, fallback: int) -> int:
    """Read ``X-Total`` from a list response; GitLab omits it for very large result sets."""
    total = headers.get("x-total", "")
    return int(total) if total.isdigit() else fallback
