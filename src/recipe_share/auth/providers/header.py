"""Gateway header authentication.

The API gateway authenticates users and forwards their identity in
``X-User-ID`` / ``X-User-Roles`` / ``X-User-Permissions``. Only deploy this
mode behind a gateway that strips those headers from client requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_share.auth.providers.exceptions import AuthenticationError
from recipe_share.auth.providers.models import AuthResult
from recipe_share.core.config.settings import AuthHeaderSettings


if TYPE_CHECKING:
    from starlette.requests import Request


def split_csv(value: str | None) -> list[str]:
    """``"user, moderator"`` -> ``["user", "moderator"]``; blanks dropped."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class HeaderAuthProvider:
    """Trusts identity headers; a missing user id is unauthenticated."""

    name = "header"

    def __init__(
        self,
        headers: AuthHeaderSettings | None = None,
        default_roles: tuple[str, ...] = ("user",),
    ) -> None:
        self.headers = headers or AuthHeaderSettings()
        self.default_roles = default_roles

    async def authenticate(self, request: Request) -> AuthResult:
        user_id = (request.headers.get(self.headers.user_id) or "").strip()
        if not user_id:
            msg = f"Missing required header: {self.headers.user_id}"
            raise AuthenticationError(msg)

        roles = split_csv(request.headers.get(self.headers.roles))
        return AuthResult(
            user_id=user_id,
            roles=roles or list(self.default_roles),
            permissions=split_csv(request.headers.get(self.headers.permissions)),
            token_type="header",  # noqa: S106
            raw_claims={"source": "headers"},
        )
