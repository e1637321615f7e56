"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health (with or without trailing slash) always returns 200 if process is up
    - GET /api/v1/health/ready returns 503 if the configured database is unreachable
    - Products served from memory report the database check as "skipped"
    - A ready response carries the record count of every store
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

import storeapi.infrastructure.database as database
from storeapi.core.domain_types import PRODUCTS, USERS
from storeapi.infrastructure.product_repository import ProductRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
@router.get("", status_code=status.HTTP_200_OK, include_in_schema=False)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "storeapi",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe; includes database connectivity when products are persisted."""
    product_store = getattr(request.app.state, "product_store", None)
    records = {USERS.plural: await request.app.state.user_store.count()}
    if product_store is not None:
        records[PRODUCTS.plural] = await product_store.count()
        return {
            "status": "ready",
            "checks": {"database": "skipped"},
            "records": records,
        }
    db_ok = await database.db_manager.health_check() if database.db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    async with database.db_manager.session() as db:
        records[PRODUCTS.plural] = await ProductRepository(db).count()
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "records": records,
    }
