"""
Serialization envelope: pydantic records <-> UTF-8 JSON text.

The payload is field-named JSON, so a scan can look at a single field
without knowing the rest of the schema.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class PayloadError(ValueError):
    """Raised when a payload cannot be encoded or decoded."""


def encode(record: BaseModel) -> str:
    try:
        return record.model_dump_json()
    except (TypeError, ValueError) as exc:
        raise PayloadError(str(exc)) from exc


def decode(payload: str | bytes, model: type[ModelT]) -> ModelT:
    """Parse a payload into ``model``; raises PayloadError on any mismatch."""
    try:
        return model.model_validate_json(payload)
    except ValidationError as exc:
        raise PayloadError(f"{exc.error_count()} validation error(s) for {model.__name__}") from exc


def decode_raw(payload: str | bytes) -> dict[str, Any]:
    """Parse a payload as an untyped mapping."""
    try:
        value = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise PayloadError(str(exc)) from exc
    if not isinstance(value, dict):
        raise PayloadError(f"expected a JSON object, got {type(value).__name__}")
    return value
