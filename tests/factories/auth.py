"""Auth-related test data."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from recipe_share.auth.providers import AuthResult


def auth_headers(user_id: object, *roles: str) -> dict[str, str]:
    """Gateway headers understood by the header auth provider."""
    return {"X-User-ID": str(user_id), "X-User-Roles": ",".join(roles or ("user",))}


def moderator_headers(user_id: object = "mod-1") -> dict[str, str]:
    return auth_headers(user_id, "moderator")


def auth_result(user_id: str = "user-123", *roles: str, **kwargs: Any) -> AuthResult:
    return AuthResult(user_id=user_id, roles=list(roles or ("user",)), **kwargs)


def make_token(
    secret: str,
    *,
    sub: str = "user-123",
    roles: list[str] | None = None,
    token_type: str = "access",
    expires_in: timedelta = timedelta(minutes=30),
    **claims: Any,
) -> str:
    """Sign an HS256 token the local JWT provider accepts."""
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "roles": roles if roles is not None else ["user"],
        "permissions": [],
        "type": token_type,
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")
