"""Base model for GitLab API responses."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import GitLabParseError

ModelT = TypeVar("ModelT", bound="GitLabModel")


class GitLabModel(BaseModel):
    """Base model for GitLab payloads.

    Only the fields GitLab always returns are declared; everything else is kept
    as-is so callers see the full upstream document.
    """

    model_config = {"extra": "allow", "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a single response object, raising GitLabParseError on mismatch."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise GitLabParseError.from_validation_error(model.__name__, e) from e


def parse_models(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a list response, raising GitLabParseError on mismatch."""
    if not isinstance(data, list):
        msg = f"Expected a list of {model.__name__} objects, got {type(data).__name__}"
        raise GitLabParseError(model.__name__, msg)
    return [parse_model(model, item) for item in data]
