"""In-Memory Resource Store — ordered list of dict records with timestamp-derived ids.

Invariants:
    - Identifiers are unique ints; new ids come from MillisecondIdSequence seeded above
      the largest id already present, so fixture ids never collide with new ones
    - Every mutation is a single list operation with no await in between (atomic per request)
    - Callers always receive copies; the stored dicts are never handed out
    - Failed operations (validation, malformed id, not found) leave the list untouched
    - Fields named in unique_fields never repeat across records (checked before any write)
    - Path ids must be plain ASCII integers; "+1", " 1" and "1_0" are malformed

Design Decisions:
    - Constructed once at start-up and held on app.state, not a module-level list
    - Linear search: collections are fixture-sized
"""

import logging
import re
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from storeapi.core.domain_types import (
    ID_FIELD, ListingStyle, MemoryId, Record, ResourceNames,
)
from storeapi.core.errors import (
    MalformedIdentifierError, RecordNotFoundError, RecordValidationError,
)
from storeapi.core.identifiers import MillisecondIdSequence
from storeapi.core.record_ops import merge_record, replace_record, strip_identity, with_identity
from storeapi.core.record_schema import RecordSchema

logger = logging.getLogger(__name__)

_INTEGER_ID = re.compile(r"-?[0-9]+")


class InMemoryResourceStore:
    """Resource Store backed by a Python list."""

    listing_style = ListingStyle.BARE

    def __init__(
        self,
        resource: ResourceNames,
        schema: RecordSchema,
        records: Iterable[Mapping[str, Any]] = (),
        clock: Callable[[], float] | None = None,
        unique_fields: Iterable[str] = (),
    ):
        self.resource = resource
        self._schema = schema
        self._unique_fields = tuple(unique_fields)
        self._records: list[Record] = [dict(r) for r in records]

        seen: set = set()
        for record in self._records:
            record_id = record.get(ID_FIELD)
            if record_id is None:
                continue
            if record_id in seen:
                raise ValueError(
                    f"Duplicate {resource.singular} id {record_id!r} in seed data",
                )
            seen.add(record_id)
        floor = max((i for i in seen if isinstance(i, int)), default=0)
        self._ids = MillisecondIdSequence(floor, clock or time.time)
        # Seed records without an id get one now
        for idx, record in enumerate(self._records):
            if record.get(ID_FIELD) is None:
                self._records[idx] = with_identity(self._ids.next_id(), record)

    # ─── CRUD ────────────────────────────────────────────────────

    async def create(self, payload: Mapping[str, Any]) -> Record:
        fields = self._schema.validate(strip_identity(payload))
        self._check_unique(fields)
        record = with_identity(self._ids.next_id(), fields)
        self._records.append(record)
        logger.debug(f"Created {self.resource.singular} {record[ID_FIELD]}")
        return dict(record)

    async def list_all(self) -> list[Record]:
        return [dict(r) for r in self._records]

    async def get_by_id(self, raw_id: str) -> Record:
        _, record = self._locate(raw_id)
        return dict(record)

    async def replace(self, raw_id: str, payload: Mapping[str, Any]) -> Record:
        idx, record = self._locate(raw_id)
        fields = self._schema.validate(strip_identity(payload))
        self._check_unique(fields, exclude=record[ID_FIELD])
        replaced = replace_record(record[ID_FIELD], fields)
        self._records[idx] = replaced
        return dict(replaced)

    async def merge(self, raw_id: str, partial: Mapping[str, Any]) -> Record:
        idx, record = self._locate(raw_id)
        merged = merge_record(record, partial)
        fields = self._schema.validate(strip_identity(merged))
        self._check_unique(fields, exclude=record[ID_FIELD])
        updated = with_identity(record[ID_FIELD], fields)
        self._records[idx] = updated
        return dict(updated)

    async def remove(self, raw_id: str) -> Record:
        idx, record = self._locate(raw_id)
        del self._records[idx]
        logger.debug(f"Removed {self.resource.singular} {record[ID_FIELD]}")
        return dict(record)

    async def count(self) -> int:
        return len(self._records)

    # ─── Lookup ──────────────────────────────────────────────────

    def parse_id(self, raw_id: str | int) -> MemoryId:
        """Parse a path identifier into the integer id space."""
        if isinstance(raw_id, bool):
            raise MalformedIdentifierError(self.resource.singular, str(raw_id))
        if isinstance(raw_id, int):
            return MemoryId(raw_id)
        if not _INTEGER_ID.fullmatch(str(raw_id)):
            raise MalformedIdentifierError(self.resource.singular, str(raw_id))
        return MemoryId(int(raw_id))

    def _locate(self, raw_id: str | int) -> tuple[int, Record]:
        record_id = self.parse_id(raw_id)
        for idx, record in enumerate(self._records):
            if record.get(ID_FIELD) == record_id:
                return idx, record
        raise RecordNotFoundError(self.resource.singular, record_id)

    def _check_unique(self, fields: Record, exclude: MemoryId | None = None) -> None:
        for name in self._unique_fields:
            if name not in fields:
                continue
            for record in self._records:
                if record.get(ID_FIELD) != exclude and record.get(name) == fields[name]:
                    raise RecordValidationError(
                        f"{self.resource.title} with the same {name} already exists",
                        f"{name} must be unique",
                    )
