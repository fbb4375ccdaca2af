"""GitLab MCP server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://gitlab.com/api/v4"


@dataclass
class GitLabConfig:
    """Configuration for the GitLab MCP server, loaded from environment variables."""

    api_url: str = DEFAULT_API_URL
    token: str = ""
    read_only: bool = False
    timeout: int = 30
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> GitLabConfig:
        api_url = os.getenv("GITLAB_API_URL", "").rstrip("/")
        if not api_url:
            instance_url = os.getenv("GITLAB_URL", "").rstrip("/")
            api_url = f"{instance_url}/api/v4" if instance_url else DEFAULT_API_URL
        token = (
            os.getenv("GITLAB_PERSONAL_ACCESS_TOKEN")
            or os.getenv("GITLAB_TOKEN")
            or os.getenv("GITLAB_PAT", "")
        )
        read_only = os.getenv("GITLAB_READ_ONLY", "false").lower() in (
            "true",
            "1",
            "yes",
        )
        timeout = int(os.getenv("GITLAB_TIMEOUT", "30"))
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            api_url=api_url,
            token=token,
            read_only=read_only,
            timeout=timeout,
            ssl_verify=ssl_verify,
        )

    def validate(self) -> None:
        if not self.api_url:
            msg = "GITLAB_API_URL environment variable is required"
            raise ValueError(msg)
        if not self.token:
            msg = (
                "GITLAB_PERSONAL_ACCESS_TOKEN environment variable is not set "
                "(GITLAB_TOKEN and GITLAB_PAT are also accepted)"
            )
            raise ValueError(msg)
