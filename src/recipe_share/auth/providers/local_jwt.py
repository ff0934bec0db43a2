"""Bearer token authentication with a shared HS256 secret."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from recipe_share.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_share.auth.providers.models import AuthResult
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"  # noqa: S105


def bearer_token(request: Request) -> str:
    """Token from ``Authorization: Bearer <token>``.

    Raises:
        TokenInvalidError: The header is absent or not a bearer credential.
    """
    scheme, token = get_authorization_scheme_param(
        request.headers.get("Authorization")
    )
    if scheme.lower() != "bearer" or not token:
        msg = "Not authenticated"
        raise TokenInvalidError(msg)
    return token


class LocalJWTAuthProvider:
    """Verifies access tokens issued by the session service.

    Tokens carry ``sub``, ``roles``, ``permissions``, ``type`` and ``exp``;
    ``iss`` and ``aud`` are checked when configured.
    """

    name = "local_jwt"

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        if not secret_key:
            msg = "JWT secret key is not configured"
            raise ConfigurationError(msg)
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    def decode(self, token: str) -> AuthResult:
        """Verify ``token`` and map its claims.

        Raises:
            TokenExpiredError: ``exp`` has passed.
            TokenInvalidError: Bad signature, issuer, audience, type or subject.
        """
        options: dict[str, Any] = {"verify_aud": self.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options=options,
            )
        except ExpiredSignatureError as e:
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e
        except JWTClaimsError as e:
            logger.warning("Token claims rejected", error=str(e))
            raise TokenInvalidError(str(e)) from e
        except JWTError as e:
            logger.warning("Token rejected", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        token_type = claims.get("type", ACCESS_TOKEN_TYPE)
        if token_type != ACCESS_TOKEN_TYPE:
            msg = f"Invalid token type: {token_type}. Expected 'access'."
            raise TokenInvalidError(msg)
        if not claims.get("sub"):
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=claims["sub"],
            roles=claims.get("roles", []),
            permissions=claims.get("permissions", []),
            token_type=token_type,
            expires_at=claims.get("exp"),
            raw_claims=claims,
        )

    async def authenticate(self, request: Request) -> AuthResult:
        return self.decode(bearer_token(request))
