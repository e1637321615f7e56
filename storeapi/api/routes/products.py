"""Product Routes — CRUD endpoints under /api/v1/products.

Invariants:
    - Each verb is reachable at the collection/item path and at its named alias
      (/create, /replace/{id}, /edit/{id}, /delete/{id})
    - Collection paths answer with and without a trailing slash
    - Routes never contain business logic (delegate to ResourceHandler)
    - Request bodies must be JSON objects (anything else → 400 via RequestValidationError)
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from storeapi.api.dependencies import get_product_handler
from storeapi.api.routes.resource_helpers import respond
from storeapi.services.resource_handler import ResourceHandler

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_product_handler),
):
    """Create a product from a full payload."""
    return respond(await handler.create(payload))


@router.get("")
@router.get("/", include_in_schema=False)
async def list_products(handler: ResourceHandler = Depends(get_product_handler)):
    """List all products."""
    return respond(await handler.list_all())


@router.get("/{product_id}")
async def get_product(
    product_id: str, handler: ResourceHandler = Depends(get_product_handler),
):
    return respond(await handler.get_one(product_id))


@router.put("/{product_id}")
@router.put("/replace/{product_id}")
async def replace_product(
    product_id: str,
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_product_handler),
):
    """Full replace: fields missing from the payload are dropped."""
    return respond(await handler.replace(product_id, payload))


@router.patch("/{product_id}")
@router.patch("/edit/{product_id}")
async def edit_product(
    product_id: str,
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_product_handler),
):
    """Partial merge: only the given fields change."""
    return respond(await handler.merge(product_id, payload))


@router.delete("/{product_id}")
@router.delete("/delete/{product_id}")
async def delete_product(
    product_id: str, handler: ResourceHandler = Depends(get_product_handler),
):
    return respond(await handler.delete(product_id))
