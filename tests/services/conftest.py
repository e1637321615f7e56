"""Route test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched so the product dependency opens sessions on the test engine
    - app.state stores rebuilt per test (lifespan does not run under ASGITransport)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: every session shares the single in-memory connection
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import storeapi.infrastructure.database as db_module
import storeapi.models  # noqa: F401
from storeapi.core.domain_types import PRODUCTS, USERS
from storeapi.core.record_schema import PermissiveSchema
from storeapi.db.base import Base
from storeapi.infrastructure.database import DatabaseSessionManager
from storeapi.infrastructure.memory_store import InMemoryResourceStore
from storeapi.main import app
from storeapi.schemas.product import product_schema


SEED_USERS = [
    {"_id": 1700000000101, "firstName": "Terry", "age": 50},
    {"_id": 1700000000102, "firstName": "Sheldon", "age": 28},
]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client: products in SQLite, users in memory."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    app.state.user_store = InMemoryResourceStore(
        USERS, PermissiveSchema(), SEED_USERS,
    )
    app.state.product_store = None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


@pytest.fixture
async def memory_client(client):
    """Same client, but products served from the in-memory store."""
    app.state.product_store = InMemoryResourceStore(
        PRODUCTS, product_schema, unique_fields=("title",),
    )
    yield client
    app.state.product_store = None
