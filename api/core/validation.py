"""
Request payload checks shared by the feature services.

Two stages:
- `require_fields()` reports absent/blank required fields as `MissingField`
  before anything touches the store.
- `parse_model()` runs the Pydantic schema and reports the remaining problems
  as `ValidationFailed` (or `MissingField` for absent keys).
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from . import errors

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(payload: dict[str, Any], *names: str) -> None:
    missing = [name for name in names if is_blank(payload.get(name))]
    if missing:
        raise errors.MissingField(missing)


def ensure_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise errors.ValidationFailed("Request body must be a JSON object.")
    return payload


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def parse_model(model: type[ModelT], payload: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        issues = exc.errors(include_url=False, include_context=False, include_input=False)
        missing = [_field_path(issue["loc"]) for issue in issues if issue["type"] == "missing"]
        if missing:
            raise errors.MissingField(missing) from exc
        details = [{"field": _field_path(issue["loc"]), "message": issue["msg"]} for issue in issues]
        raise errors.ValidationFailed("Validation error.", details=details) from exc
