"""No authentication: every caller is the same anonymous user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_share.auth.providers.models import AuthResult


if TYPE_CHECKING:
    from starlette.requests import Request

ANONYMOUS = AuthResult(
    user_id="anonymous",
    roles=["user"],
    token_type="none",  # noqa: S106
    raw_claims={"auth_disabled": True},
)


class DisabledAuthProvider:
    """Development only; refused in production by the factory."""

    name = "disabled"

    async def authenticate(self, request: Request) -> AuthResult:  # noqa: ARG002
        return ANONYMOUS
