"""GitLab API exceptions."""

from __future__ import annotations

from pydantic import ValidationError


class GitLabError(Exception):
    """Base exception for GitLab operations."""


class GitLabValidationError(GitLabError, ValueError):
    """Raised when a tool argument is missing or invalid, before any request is made."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabParseError(GitLabError):
    """Raised when a GitLab response does not match the expected model."""

    def __init__(self, model: str, message: str, fields: list[str] | None = None) -> None:
        self.model = model
        self.fields = fields or []
        super().__init__(f"Unexpected {model} response from GitLab: {message}")

    @classmethod
    def from_validation_error(cls, model: str, error: ValidationError) -> GitLabParseError:
        details = ", ".join(f"{_loc(e)}: {e['msg']}" for e in error.errors())
        return cls(model, details, [_loc(e) for e in error.errors()])


class GitLabWriteDisabledError(GitLabError):
    """Raised when a write operation is attempted in read-only mode."""

    def __init__(self) -> None:
        super().__init__("Write operations are disabled (GITLAB_READ_ONLY=true)")


def _loc(error: dict) -> str:
    return ".".join(str(p) for p in error["loc"]) or "(root)"


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single ``Invalid arguments`` line."""
    details = ", ".join(f"{_loc(e)}: {e['msg']}" for e in error.errors())
    return f"Invalid arguments: {details}"
