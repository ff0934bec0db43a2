"""Authentication providers.

- HeaderAuthProvider: identity forwarded by the API gateway
- LocalJWTAuthProvider: HS256 bearer tokens
- DisabledAuthProvider: anonymous access, development only
"""

from recipe_share.auth.providers.disabled import DisabledAuthProvider
from recipe_share.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_share.auth.providers.factory import create_auth_provider
from recipe_share.auth.providers.header import HeaderAuthProvider
from recipe_share.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_share.auth.providers.models import AuthResult
from recipe_share.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
]
