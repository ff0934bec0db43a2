"""HTTP middleware."""

from recipe_share.core.middleware.request_context import RequestContextMiddleware
from recipe_share.core.middleware.security_headers import SecurityHeadersMiddleware


__all__ = ["RequestContextMiddleware", "SecurityHeadersMiddleware"]
