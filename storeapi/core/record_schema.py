"""Record Schemas — permissive vs validating payload checks, chosen per store.

Invariants:
    - validate() returns a NEW dict of accepted fields, never the input object
    - validate() raises RecordValidationError (never pydantic.ValidationError)
    - Accepted records are always JSON-renderable (NaN and Infinity are rejected)
    - ModelSchema output uses wire names (aliases) and only fields the client set

Design Decisions:
    - Schema is a constructor argument of the store, not inferred from records at runtime
"""

import json
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from storeapi.core.domain_types import Record
from storeapi.core.errors import RecordValidationError


class RecordSchema(Protocol):
    """Contract for payload validation, implemented per resource type."""
    def validate(self, payload: Mapping[str, Any]) -> Record: ...


class PermissiveSchema:
    """Accepts any JSON object verbatim."""

    def validate(self, payload: Mapping[str, Any]) -> Record:
        if not isinstance(payload, Mapping):
            raise RecordValidationError(
                "Request body must be a JSON object",
            )
        try:
            json.dumps(payload, allow_nan=False)
        except ValueError as e:
            raise RecordValidationError(
                "Request body contains values that cannot be stored",
                str(e),
            ) from e
        return dict(payload)


class ModelSchema:
    """Validates payloads against a pydantic model; unknown fields are dropped."""

    def __init__(self, model: type[BaseModel], resource: str):
        self.model = model
        self.resource = resource

    def validate(self, payload: Mapping[str, Any]) -> Record:
        try:
            parsed = self.model.model_validate(payload)
        except ValidationError as e:
            raise RecordValidationError(
                f"Missing or invalid {self.resource} fields",
                format_validation_errors(e.errors()),
            ) from e
        return parsed.model_dump(by_alias=True, exclude_unset=True)


def format_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic error dicts into 'field: message; ...'."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc']) or 'body'}: {e['msg']}"
        for e in errors
    )
