"""Startup and shutdown of process-wide resources.

Each resource registers its own teardown as soon as it is up, so a startup
failure half-way still releases whatever was already acquired, newest
first.
"""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import TYPE_CHECKING

from recipe_share.auth.providers import create_auth_provider
from recipe_share.clients.notifications import NotificationClient
from recipe_share.database.connection import (
    close_database,
    get_session_factory,
    init_database,
)
from recipe_share.observability.logging import get_logger, setup_logging
from recipe_share.observability.tracing import shutdown_tracing


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _open_store(app: FastAPI, stack: AsyncExitStack) -> None:
    await init_database(app.state.settings)
    stack.push_async_callback(close_database)
    app.state.session_factory = get_session_factory()


async def _open_notifications(app: FastAPI, stack: AsyncExitStack) -> None:
    client = NotificationClient.from_settings(app.state.settings)
    await client.initialize()
    stack.push_async_callback(client.shutdown)
    app.state.notification_client = client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = app.state.settings
    setup_logging(
        settings.logging.level,
        settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        auth_mode=settings.auth.mode,
    )

    async with AsyncExitStack() as stack:
        await _open_store(app, stack)
        stack.callback(shutdown_tracing)
        app.state.auth_provider = create_auth_provider(settings)
        await _open_notifications(app, stack)
        logger.info("Application startup complete")

        try:
            yield
        finally:
            logger.info("Shutting down application")
            app.state.auth_provider = None
            app.state.notification_client = None
            app.state.session_factory = None

    logger.info("Application shutdown complete")
