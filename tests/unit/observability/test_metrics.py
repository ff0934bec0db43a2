"""Unit tests for Prometheus instrumentation."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from recipe_share.core.config import Settings
from recipe_share.observability.metrics import setup_metrics


pytestmark = pytest.mark.unit


def test_disabled_adds_nothing() -> None:
    app = FastAPI()

    assert setup_metrics(app, Settings()) is None
    assert all(route.path != "/api/v1/metrics" for route in app.routes)


@pytest.mark.asyncio
async def test_exposes_endpoint_with_domain_counters() -> None:
    app = FastAPI()
    setup_metrics(app, Settings(observability={"metrics": {"enabled": True}}))

    @app.get("/api/v1/ping")
    async def ping() -> dict[str, bool]:
        return {"ok": True}

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        await c.get("/api/v1/ping")
        response = await c.get("/api/v1/metrics")

    assert response.status_code == 200
    assert "recipe_share_recipes_submitted_total" in response.text
    assert "recipe_share_http_requests_total" in response.text
    assert "recipe_share_http_request_duration_seconds" in response.text
