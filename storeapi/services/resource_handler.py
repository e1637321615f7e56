"""Resource Handler — maps Resource Store outcomes to HTTP status + JSON envelope.

Invariants:
    - Identical mapping for every resource type; only ResourceNames differ
    - StoreError never escapes: exc.kind selects the status (400 / 400 / 404 / 500)
    - Every body is a JSON object with a boolean `success`, except bare listings
    - Successful delete returns 200 with a snapshot of the removed record

Design Decisions:
    - Handler returns a HandlerOutcome (status + body), routes turn it into a JSONResponse;
      keeps this module free of web-framework types
    - Stateless: one handler per request, the store is the only shared state
"""

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any

from storeapi.core.domain_types import ListingStyle
from storeapi.core.errors import ErrorKind, StoreError
from storeapi.core.repository_protocols import ResourceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerOutcome:
    """Wire-level result of one handler call."""
    status_code: int
    body: Any


class ResourceHandler:
    """Uniform CRUD contract over one Resource Store."""

    def __init__(self, store: ResourceStore):
        self.store = store
        self.names = store.resource

    async def create(self, payload: Mapping[str, Any]) -> HandlerOutcome:
        return await self._attempt("create", self._create(payload))

    async def list_all(self) -> HandlerOutcome:
        return await self._attempt("list", self._list_all())

    async def get_one(self, raw_id: str) -> HandlerOutcome:
        return await self._attempt("get", self._get_one(raw_id))

    async def replace(self, raw_id: str, payload: Mapping[str, Any]) -> HandlerOutcome:
        return await self._attempt("replace", self._replace(raw_id, payload))

    async def merge(self, raw_id: str, partial: Mapping[str, Any]) -> HandlerOutcome:
        return await self._attempt("edit", self._merge(raw_id, partial))

    async def delete(self, raw_id: str) -> HandlerOutcome:
        return await self._attempt("delete", self._delete(raw_id))

    # ─── Operations ──────────────────────────────────────────────

    async def _create(self, payload: Mapping[str, Any]) -> HandlerOutcome:
        record = await self.store.create(payload)
        return HandlerOutcome(201, {
            "success": True,
            "message": f"{self.names.title} added successfully",
            self.names.singular: record,
        })

    async def _list_all(self) -> HandlerOutcome:
        records = await self.store.list_all()
        if self.store.listing_style is ListingStyle.BARE:
            return HandlerOutcome(200, records)
        if not records:
            return HandlerOutcome(404, {
                "success": False,
                "message": f"No {self.names.plural} found",
            })
        return HandlerOutcome(200, {
            "success": True,
            self.names.total_key: len(records),
            self.names.plural: records,
        })

    async def _get_one(self, raw_id: str) -> HandlerOutcome:
        record = await self.store.get_by_id(raw_id)
        return HandlerOutcome(200, {"success": True, self.names.singular: record})

    async def _replace(self, raw_id: str, payload: Mapping[str, Any]) -> HandlerOutcome:
        record = await self.store.replace(raw_id, payload)
        return HandlerOutcome(200, {
            "success": True,
            "message": f"{self.names.title} replaced successfully",
            self.names.updated_key: record,
        })

    async def _merge(self, raw_id: str, partial: Mapping[str, Any]) -> HandlerOutcome:
        record = await self.store.merge(raw_id, partial)
        return HandlerOutcome(200, {
            "success": True,
            "message": f"{self.names.title} updated successfully",
            self.names.edited_key: record,
        })

    async def _delete(self, raw_id: str) -> HandlerOutcome:
        record = await self.store.remove(raw_id)
        return HandlerOutcome(200, {
            "success": True,
            "message": f"{self.names.title} deleted successfully",
            self.names.deleted_key: record,
        })

    # ─── Error framing ───────────────────────────────────────────

    async def _attempt(
        self, operation: str, action: Awaitable[HandlerOutcome],
    ) -> HandlerOutcome:
        try:
            return await action
        except StoreError as exc:
            return self._failure(operation, exc)

    def _failure(self, operation: str, exc: StoreError) -> HandlerOutcome:
        extra = {"error_code": exc.code, "resource": self.names.singular}
        if exc.kind is ErrorKind.INTERNAL:
            logger.error(
                f"{operation} {self.names.singular} failed: {exc.message}",
                extra=extra, exc_info=exc.__cause__ is not None,
            )
        else:
            logger.info(
                f"{operation} {self.names.singular} rejected: {exc.message}",
                extra=extra,
            )
        return HandlerOutcome(exc.http_status, exc.to_response())
