"""API tests for probes, the root endpoint and cross-cutting response headers."""

from __future__ import annotations

import pytest


pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "test"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_ready_with_database(client) -> None:
    response = await client.get("/api/v1/ready")

    body = response.json()
    assert body["status"] == "ready"
    assert body["dependencies"] == {"database": "healthy"}


@pytest.mark.asyncio
async def test_root(client) -> None:
    response = await client.get("/api/v1/")

    body = response.json()
    assert body["status"] == "operational"
    assert body["docs"] == "/docs"
    assert body["health"] == "/api/v1/health"


class TestResponseHeaders:
    @pytest.mark.asyncio
    async def test_generates_request_id(self, client) -> None:
        response = await client.get("/api/v1/health")

        assert len(response.headers["X-Request-ID"]) == 36
        assert response.headers["X-Process-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_echoes_request_id(self, client) -> None:
        response = await client.get(
            "/api/v1/recipes/not-a-uuid", headers={"X-Request-ID": "trace-42"}
        )

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_security_headers(self, client) -> None:
        response = await client.get("/api/v1/recipes")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store, private"
