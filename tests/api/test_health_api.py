"""Tests for health endpoints."""

from unittest.mock import AsyncMock, patch

from airos.core.exceptions import StoreUnavailableError


async def test_root_health_check(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_api_health_check(client):
    response = await client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


async def test_db_health(client, sqlite_db):
    response = await client.get("/api/health/db")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["missing_tables"] == []


async def test_db_health_unavailable(client):
    failing = AsyncMock(side_effect=StoreUnavailableError("missing_tables", "disk I/O error"))
    with patch("airos.infrastructure.storage.sqlite.schema.missing_tables", failing):
        response = await client.get("/api/health/db")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "unavailable"


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")
