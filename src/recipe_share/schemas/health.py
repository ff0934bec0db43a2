"""Probe and service-index payloads."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_share.schemas.base import APIResponse


def _now() -> datetime:
    return datetime.now(UTC)


class HealthResponse(APIResponse):
    """Liveness: the process is up and serving."""

    status: str = Field(examples=["healthy"])
    timestamp: datetime = Field(default_factory=_now)
    version: str
    environment: str = Field(examples=["production"])


class ReadinessResponse(HealthResponse):
    """Readiness, with one ``healthy``/``unhealthy`` entry per backing store."""

    dependencies: dict[str, str] = Field(
        default_factory=dict, examples=[{"database": "healthy"}]
    )


class RootResponse(APIResponse):
    service: str = Field(examples=["Recipe Share Service"])
    version: str = Field(examples=["0.1.0"])
    status: str = Field(examples=["operational"])
    docs: str = Field(examples=["/docs", "disabled"])
    health: str = Field(examples=["/api/v1/health"])
