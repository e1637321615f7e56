"""Boundary Protocols — the Resource Store contract shared by every backend.

Invariants:
    - Handlers depend on ResourceStore only, never on a concrete backend
    - Every method raises a StoreError subclass on failure and leaves the store unchanged
    - Identifiers arrive raw (as taken from the URL); the store parses and checks them

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: the persisted backend awaits I/O, the in-memory one simply never suspends
"""

from collections.abc import Mapping
from typing import Any, Protocol

from storeapi.core.domain_types import ListingStyle, Record, ResourceNames


class ResourceStore(Protocol):
    """Ordered collection of records for one resource type."""
    resource: ResourceNames
    listing_style: ListingStyle

    async def create(self, payload: Mapping[str, Any]) -> Record: ...
    async def list_all(self) -> list[Record]: ...
    async def get_by_id(self, raw_id: str) -> Record: ...
    async def replace(self, raw_id: str, payload: Mapping[str, Any]) -> Record: ...
    async def merge(self, raw_id: str, partial: Mapping[str, Any]) -> Record: ...
    async def remove(self, raw_id: str) -> Record: ...
    async def count(self) -> int: ...
