"""Builds the FastAPI application.

``create_app`` is the only place that knows how the pieces fit together:
error handlers, rate limiting, middleware, the v1 router, tracing and
metrics. Process-wide resources are opened by the lifespan.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from recipe_share.api.v1.router import router as v1_router
from recipe_share.core.config import Settings, get_settings
from recipe_share.core.events import lifespan
from recipe_share.core.exceptions import setup_exception_handlers
from recipe_share.core.middleware import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from recipe_share.core.rate_limit import setup_rate_limiting
from recipe_share.observability.metrics import setup_metrics
from recipe_share.observability.tracing import setup_tracing


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a ready-to-serve application.

    ``settings`` defaults to the cached ``get_settings()``; tests pass their
    own so that each app gets its own database and limiter.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe sharing API with a moderation workflow",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Read by the lifespan, dependencies and error handlers
    app.state.settings = settings

    setup_exception_handlers(app)
    setup_rate_limiting(app, settings)
    _add_middleware(app, settings)
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # After routes are mounted
    setup_tracing(app, settings)
    setup_metrics(app, settings)

    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure the middleware stack.

    The last middleware added runs first on the request. From the request's
    point of view the order is: security headers, request context, gzip,
    CORS, then the rate limiter added by ``setup_rate_limiting``.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        RequestContextMiddleware,
        quiet_paths={"/health", "/ready", "/metrics", "/favicon.ico"},
    )
    app.add_middleware(SecurityHeadersMiddleware, api_prefix=settings.api.v1_prefix)
