"""Record Operations — pure replace/merge semantics over plain dict records.

Invariants:
    - replace_record keeps ONLY the identifier from the old record
    - merge_record keeps every old key not present in the partial payload
    - The identifier is never taken from a client payload
    - Inputs are never mutated; a new dict is always returned
"""

from collections.abc import Mapping
from typing import Any

from storeapi.core.domain_types import ID_FIELD, Record


def strip_identity(payload: Mapping[str, Any]) -> Record:
    """Drop the identifier key from a client payload."""
    return {k: v for k, v in payload.items() if k != ID_FIELD}


def with_identity(record_id: object, fields: Mapping[str, Any]) -> Record:
    """Build a record with the identifier as its first key."""
    return {ID_FIELD: record_id, **strip_identity(fields)}


def replace_record(record_id: object, payload: Mapping[str, Any]) -> Record:
    """Full overwrite: identifier plus the new payload, nothing else."""
    return with_identity(record_id, payload)


def merge_record(current: Mapping[str, Any], partial: Mapping[str, Any]) -> Record:
    """Overlay partial onto current; partial wins, identity is preserved."""
    merged = {**current, **strip_identity(partial)}
    return with_identity(current[ID_FIELD], merged)
