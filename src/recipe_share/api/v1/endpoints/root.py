"""Root endpoint with basic service information."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_share.api.dependencies import get_app_settings
from recipe_share.core.config import Settings
from recipe_share.schemas import RootResponse


router = APIRouter(tags=["Root"])


@router.get("/", response_model=RootResponse, summary="Service information")
async def root(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RootResponse:
    return RootResponse(
        service=settings.app.name,
        version=settings.app.version,
        status="operational",
        docs="/docs" if settings.is_non_production else "disabled",
        health=f"{settings.api.v1_prefix}/health",
    )
