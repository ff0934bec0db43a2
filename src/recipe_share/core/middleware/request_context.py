"""Per-request correlation, access logging and timing.

Each request gets an ``X-Request-ID`` (propagated from the client when sent),
bound into the logging context so every log line emitted while serving it
carries the id. Completed requests are logged with their status and latency.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_share.observability.logging import bind_context, clear_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Seconds
SLOW_REQUEST_THRESHOLD = 1.0


def client_ip(request: Request) -> str:
    """Originating client address, honouring reverse proxy headers."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request id, log the exchange and report processing time."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        quiet_paths: set[str] | None = None,
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.quiet_paths = quiet_paths or {"/health", "/metrics", "/favicon.ico"}
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=client_ip(request),
        )

        quiet = any(request.url.path.endswith(p) for p in self.quiet_paths)
        if not quiet:
            logger.info(
                "Request started",
                query_params=str(request.query_params) or None,
            )

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        elapsed_ms = round(elapsed * 1000, 2)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms}ms"

        if elapsed > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                process_time_ms=elapsed_ms,
                threshold_ms=self.slow_threshold * 1000,
            )
        elif not quiet:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time_ms=elapsed_ms,
            )
        return response
