"""Rate limiting using SlowAPI.

This module provides:
- A per-application limiter carrying the default limit for every route
- A route dependency applying a named, stricter limit per caller
- The 429 handler for limits hit in the middleware
"""

from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.responses import ORJSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from recipe_share.auth.dependencies import CurrentUser, get_current_user
from recipe_share.core.config import Settings
from recipe_share.core.exceptions import RateLimitError, error_response
from recipe_share.observability.logging import get_logger


logger = get_logger(__name__)


def create_limiter(settings: Settings) -> Limiter:
    """Create the limiter for one application instance."""
    config = settings.rate_limiting
    return Limiter(
        key_func=get_remote_address,
        default_limits=[config.default],
        storage_uri=config.storage_uri,
        strategy="fixed-window",
        enabled=config.enabled,
    )


def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a default-limit rejection in the standard error envelope.

    Synchronous: ``SlowAPIMiddleware`` calls it without awaiting.
    """
    detail = str(exc.detail) if isinstance(exc, RateLimitExceeded) else None
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=detail,
    )
    return error_response(
        request,
        429,
        "RATE_LIMIT_EXCEEDED",
        "Too many requests. Please try again later.",
        detail,
    )


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Attach the limiter, its middleware and its exception handler."""
    limiter = create_limiter(settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    if limiter.enabled:
        app.add_middleware(SlowAPIMiddleware)

    logger.info(
        "Rate limiting configured",
        enabled=limiter.enabled,
        default=settings.rate_limiting.default,
    )


class RateLimit:
    """Dependency applying a named limit from ``rate_limiting`` per caller.

    Usage:
        @router.post("/recipes", dependencies=[Depends(RateLimit("submissions"))])
    """

    def __init__(self, name: str) -> None:
        self.name = name

    async def __call__(
        self,
        request: Request,
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> None:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return

        settings: Settings = request.app.state.settings
        item = parse(getattr(settings.rate_limiting, self.name))
        if not limiter.limiter.hit(item, self.name, user.id):
            logger.warning("Rate limit exceeded", limit=self.name, user_id=user.id)
            raise RateLimitError
