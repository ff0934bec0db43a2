"""FastAPI dependencies for service access.

Shared resources are created during application startup and stored in
``app.state``; services are cheap per-request wrappers around them.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recipe_share.core.config import Settings
from recipe_share.core.exceptions import ServiceUnavailableError
from recipe_share.services import (
    AdminStatsService,
    ModerationService,
    RecipeCatalogService,
    RecipeSubmissionService,
)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Session factory installed at startup.

    Raises:
        ServiceUnavailableError: If the store has not been initialized.
    """
    factory = getattr(request.app.state, "session_factory", None)
    if factory is None:
        msg = "Database not available"
        raise ServiceUnavailableError(msg)
    return factory


SessionFactory = Annotated[
    async_sessionmaker[AsyncSession], Depends(get_session_factory)
]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_submission_service(factory: SessionFactory) -> RecipeSubmissionService:
    return RecipeSubmissionService(factory)


def get_catalog_service(
    factory: SessionFactory,
    settings: AppSettings,
) -> RecipeCatalogService:
    return RecipeCatalogService(factory, page_size=settings.recipes.public_page_size)


def get_moderation_service(
    request: Request,
    factory: SessionFactory,
    settings: AppSettings,
) -> ModerationService:
    return ModerationService(
        factory,
        getattr(request.app.state, "notification_client", None),
        strict_transitions=settings.moderation.strict_transitions,
    )


def get_admin_stats_service(
    factory: SessionFactory,
    settings: AppSettings,
) -> AdminStatsService:
    return AdminStatsService(factory, settings.admin)
