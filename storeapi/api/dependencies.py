"""Route Dependencies — resolve the Resource Store and Handler for each request.

Invariants:
    - In-memory stores are read from app.state (built once in the lifespan)
    - A persisted store gets a fresh AsyncSession per request, closed after the response
    - Handlers are cheap per-request wrappers; the store is the only shared state
"""

from typing import AsyncGenerator

from fastapi import Depends, Request

import storeapi.infrastructure.database as database
from storeapi.core.repository_protocols import ResourceStore
from storeapi.infrastructure.product_repository import ProductRepository
from storeapi.services.resource_handler import ResourceHandler


def get_user_store(request: Request) -> ResourceStore:
    store = getattr(request.app.state, "user_store", None)
    if store is None:
        raise RuntimeError("User store not initialized")
    return store


async def get_product_store(
    request: Request,
) -> AsyncGenerator[ResourceStore, None]:
    """In-memory product store if configured, else a DB-backed repository."""
    memory_store = getattr(request.app.state, "product_store", None)
    if memory_store is not None:
        yield memory_store
        return
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as db:
        yield ProductRepository(db)


def get_user_handler(
    store: ResourceStore = Depends(get_user_store),
) -> ResourceHandler:
    return ResourceHandler(store)


def get_product_handler(
    store: ResourceStore = Depends(get_product_store),
) -> ResourceHandler:
    return ResourceHandler(store)
