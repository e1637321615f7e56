"""Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StoreError / validation / unexpected errors → {success: false} JSON
    - In-memory stores built once in the lifespan and held on app.state
    - Database initialized on startup only when products are persisted

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static assets mounted AFTER API routes so /api/v1/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import storeapi.infrastructure.database as database
from storeapi.api.error_handlers import register_error_handlers
from storeapi.api.routes import health, products, users
from storeapi.config import Settings, get_settings
from storeapi.core.domain_types import PRODUCTS, USERS, ProductsBackend
from storeapi.core.record_schema import PermissiveSchema
from storeapi.infrastructure.fixtures import load_fixture
from storeapi.infrastructure.memory_store import InMemoryResourceStore
from storeapi.infrastructure.observability import (
    register_request_logging, setup_logging,
)
from storeapi.schemas.product import product_schema

logger = logging.getLogger(__name__)


def build_stores(app: FastAPI, settings: Settings) -> None:
    """Construct the in-memory stores from the fixture file."""
    fixture = load_fixture(settings.fixture_path)
    app.state.user_store = InMemoryResourceStore(
        USERS, PermissiveSchema(), fixture.get(USERS.plural, []),
    )
    if settings.products_backend is ProductsBackend.MEMORY:
        app.state.product_store = InMemoryResourceStore(
            PRODUCTS, product_schema, fixture.get(PRODUCTS.plural, []),
            unique_fields=("title",),
        )
    else:
        app.state.product_store = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    build_stores(app, settings)
    if settings.products_backend is ProductsBackend.DATABASE:
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_auto_create:
            await manager.create_all()
    logger.info(
        f"Store API started (products backend: {settings.products_backend.value})",
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Store API shutting down")


app = FastAPI(
    title="Store API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)
register_error_handlers(app)

# Routes, explicitly registered
app.include_router(health.router)
app.include_router(products.router)
app.include_router(users.router)

if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
