"""Health probes — liveness always 200, readiness reflects database reachability and reports record counts."""

import storeapi.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_liveness_without_trailing_slash(client):
    res = await client.get("/api/v1/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
    assert res.json()["records"] == {"users": 2, "products": 0}


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503


async def test_readiness_skips_database_for_memory_products(memory_client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await memory_client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "skipped"
    assert res.json()["records"] == {"users": 2, "products": 0}
