"""Builds the provider selected by ``auth.mode``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_share.auth.providers.disabled import DisabledAuthProvider
from recipe_share.auth.providers.exceptions import ConfigurationError
from recipe_share.auth.providers.header import HeaderAuthProvider
from recipe_share.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_share.core.config import AuthMode
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_share.auth.providers.protocol import AuthProvider
    from recipe_share.core.config import Settings

logger = get_logger(__name__)

DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _header(settings: Settings) -> AuthProvider:
    logger.warning(
        "Trusting identity headers; only run this mode behind the gateway",
        user_id_header=settings.auth.headers.user_id,
    )
    return HeaderAuthProvider(settings.auth.headers)


def _local_jwt(settings: Settings) -> AuthProvider:
    secret = settings.JWT_SECRET_KEY
    if not secret:
        if settings.is_production:
            msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
            raise ConfigurationError(msg)
        logger.warning("JWT_SECRET_KEY unset, using the development secret")
        secret = DEV_JWT_SECRET
    jwt_settings = settings.auth.jwt
    return LocalJWTAuthProvider(
        secret,
        algorithm=jwt_settings.algorithm,
        issuer=jwt_settings.issuer,
        audience=jwt_settings.audience,
    )


def _disabled(settings: Settings) -> AuthProvider:
    if settings.is_production:
        msg = "Authentication cannot be disabled in production"
        raise ConfigurationError(msg)
    logger.warning("Authentication is disabled; every caller is anonymous")
    return DisabledAuthProvider()


_BUILDERS: dict[AuthMode, Callable[[Settings], AuthProvider]] = {
    AuthMode.HEADER: _header,
    AuthMode.LOCAL_JWT: _local_jwt,
    AuthMode.DISABLED: _disabled,
}


def create_auth_provider(settings: Settings) -> AuthProvider:
    """Return the provider for ``settings.auth.mode``.

    Raises:
        ConfigurationError: Disabled auth, or local JWT without a secret, in
            production.
    """
    provider = _BUILDERS[settings.auth.mode](settings)
    logger.info("Auth provider created", provider=provider.name)
    return provider
