"""Shared test fixtures for the recipe share service tests.

Every test gets its own in-memory SQLite database, configured by the
``test`` environment (header auth, no rate limiting, no metrics).
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from recipe_share.core.config import Settings
from recipe_share.database.connection import (
    create_engine_from_settings,
    create_schema,
    create_session_factory,
)
from recipe_share.database.models import User
from recipe_share.factory import create_app
from tests.factories.recipes import RecipeMaker, recipe_maker
from tests.factories.users import add_user


SessionFactory = async_sessionmaker[AsyncSession]


def pytest_configure(config: pytest.Config) -> None:
    """Select the test configuration before any settings are built."""
    os.environ["APP_ENV"] = "test"


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


@pytest.fixture
async def engine(test_settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine_from_settings(test_settings)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> SessionFactory:
    return create_session_factory(engine)


@pytest.fixture
async def author(session_factory: SessionFactory) -> User:
    return await add_user(session_factory, "alice")


@pytest.fixture
async def other_user(session_factory: SessionFactory) -> User:
    return await add_user(session_factory, "bob")


@pytest.fixture
def make_recipe(session_factory: SessionFactory) -> RecipeMaker:
    return recipe_maker(session_factory)


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
async def app(test_settings: Settings) -> AsyncIterator[FastAPI]:
    """Application with its lifespan running."""
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app_session_factory(app: FastAPI) -> SessionFactory:
    """Session factory bound to the running application's database."""
    return app.state.session_factory


@pytest.fixture
async def app_author(app_session_factory: SessionFactory) -> User:
    return await add_user(app_session_factory, "alice")


@pytest.fixture
def make_app_recipe(app_session_factory: SessionFactory) -> RecipeMaker:
    return recipe_maker(app_session_factory)
