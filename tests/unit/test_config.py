"""Tests for GitLab configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from gitlab_mcp_server.config import DEFAULT_API_URL, GitLabConfig

_VARS = (
    "GITLAB_API_URL",
    "GITLAB_URL",
    "GITLAB_PERSONAL_ACCESS_TOKEN",
    "GITLAB_TOKEN",
    "GITLAB_PAT",
    "GITLAB_READ_ONLY",
    "GITLAB_TIMEOUT",
    "GITLAB_SSL_VERIFY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _VARS:
        monkeypatch.delenv(var, raising=False)


def test_config_from_env():
    env = {
        "GITLAB_API_URL": "https://gitlab.example.com/api/v4",
        "GITLAB_PERSONAL_ACCESS_TOKEN": "glpat-abc123",
    }
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.api_url == "https://gitlab.example.com/api/v4"
    assert config.token == "glpat-abc123"
    assert config.read_only is False
    assert config.timeout == 30
    assert config.ssl_verify is True


def test_config_default_api_url():
    with patch.dict(os.environ, {"GITLAB_PERSONAL_ACCESS_TOKEN": "x"}, clear=False):
        config = GitLabConfig.from_env()
    assert config.api_url == DEFAULT_API_URL == "https://gitlab.com/api/v4"


def test_config_strips_trailing_slash():
    env = {"GITLAB_API_URL": "https://gitlab.example.com/api/v4/", "GITLAB_TOKEN": "x"}
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.api_url == "https://gitlab.example.com/api/v4"


def test_config_instance_url_expanded():
    env = {"GITLAB_URL": "https://gitlab.example.com/", "GITLAB_TOKEN": "x"}
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.api_url == "https://gitlab.example.com/api/v4"


def test_config_api_url_wins_over_instance_url():
    env = {
        "GITLAB_API_URL": "https://api.example.com/v4",
        "GITLAB_URL": "https://gitlab.example.com",
        "GITLAB_TOKEN": "x",
    }
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.api_url == "https://api.example.com/v4"


def test_config_token_precedence():
    env = {
        "GITLAB_PERSONAL_ACCESS_TOKEN": "primary",
        "GITLAB_TOKEN": "secondary",
        "GITLAB_PAT": "tertiary",
    }
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.token == "primary"


def test_config_from_env_with_pat():
    with patch.dict(os.environ, {"GITLAB_PAT": "glpat-xyz"}, clear=False):
        config = GitLabConfig.from_env()
    assert config.token == "glpat-xyz"


def test_config_read_only():
    env = {"GITLAB_TOKEN": "x", "GITLAB_READ_ONLY": "true"}
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.read_only is True


def test_config_timeout_and_ssl():
    env = {"GITLAB_TOKEN": "x", "GITLAB_TIMEOUT": "5", "GITLAB_SSL_VERIFY": "false"}
    with patch.dict(os.environ, env, clear=False):
        config = GitLabConfig.from_env()
    assert config.timeout == 5
    assert config.ssl_verify is False


def test_config_validate_missing_token():
    config = GitLabConfig(token="")
    with pytest.raises(ValueError, match="GITLAB_PERSONAL_ACCESS_TOKEN"):
        config.validate()


def test_config_validate_missing_api_url():
    config = GitLabConfig(api_url="", token="x")
    with pytest.raises(ValueError, match="GITLAB_API_URL"):
        config.validate()


def test_config_validate_ok():
    GitLabConfig(token="x").validate()
