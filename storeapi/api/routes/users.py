"""User Routes — CRUD endpoints under /api/v1/users.

Invariants:
    - Users accept any JSON object shape; only the identifier is store-managed
    - Collection paths answer with and without a trailing slash
    - Routes never contain business logic (delegate to ResourceHandler)
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from storeapi.api.dependencies import get_user_handler
from storeapi.api.routes.resource_helpers import respond
from storeapi.services.resource_handler import ResourceHandler

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_user(
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_user_handler),
):
    return respond(await handler.create(payload))


@router.get("")
@router.get("/", include_in_schema=False)
async def list_users(handler: ResourceHandler = Depends(get_user_handler)):
    return respond(await handler.list_all())


@router.get("/{user_id}")
async def get_user(
    user_id: str, handler: ResourceHandler = Depends(get_user_handler),
):
    return respond(await handler.get_one(user_id))


@router.put("/{user_id}")
async def replace_user(
    user_id: str,
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_user_handler),
):
    return respond(await handler.replace(user_id, payload))


@router.patch("/{user_id}")
async def edit_user(
    user_id: str,
    payload: dict[str, Any],
    handler: ResourceHandler = Depends(get_user_handler),
):
    return respond(await handler.merge(user_id, payload))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str, handler: ResourceHandler = Depends(get_user_handler),
):
    return respond(await handler.delete(user_id))
