"""Caller identity and access checks for routes.

``get_current_user`` asks the application's auth provider who is calling;
``RequirePermissions`` builds on it to gate routes.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from recipe_share.auth.permissions import (
    Permission,
    effective_permissions,
)
from recipe_share.auth.providers import (
    AuthenticationError,
    AuthProvider,
    AuthResult,
    TokenExpiredError,
)
from recipe_share.core.exceptions import (
    ForbiddenError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from recipe_share.observability.logging import bind_context


# Declares the bearer scheme in OpenAPI; providers read credentials themselves
bearer_scheme = HTTPBearer(auto_error=False, description="Access token")


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    token_type: str = "access"

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> "CurrentUser":
        return cls(
            id=result.user_id,
            roles=result.roles,
            permissions=result.permissions,
            token_type=result.token_type,
        )

    @property
    def granted(self) -> frozenset[str]:
        return effective_permissions(self.roles, self.permissions)

    def has_permission(self, permission: Permission | str) -> bool:
        return str(permission) in self.granted


def get_auth_provider(request: Request) -> AuthProvider:
    provider: AuthProvider | None = getattr(
        request.app.state, "auth_provider", None
    )
    if provider is None:
        msg = "Authentication is not configured"
        raise ServiceUnavailableError(msg)
    return provider


async def get_auth_result(
    request: Request,
    provider: Annotated[AuthProvider, Depends(get_auth_provider)],
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> AuthResult:
    """Identify the caller.

    Raises:
        UnauthorizedError: Missing, expired or invalid credentials.
    """
    try:
        result = await provider.authenticate(request)
    except TokenExpiredError:
        msg = "Token has expired"
        raise UnauthorizedError(msg) from None
    except AuthenticationError as e:
        raise UnauthorizedError(str(e) or "Authentication failed") from None

    bind_context(user_id=result.user_id)
    return result


async def get_current_user(
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
) -> CurrentUser:
    return CurrentUser.from_auth_result(auth_result)


class RequirePermissions:
    """Route guard: the caller needs any one (or, with ``require_all``, every
    one) of ``permissions``.

        can_moderate = RequirePermissions(Permission.RECIPE_MODERATE)

        @router.get("/pending")
        async def pending(user: Annotated[CurrentUser, Depends(can_moderate)]):
            ...
    """

    def __init__(
        self,
        *permissions: Permission | str,
        require_all: bool = False,
    ) -> None:
        self.required = frozenset(str(p) for p in permissions)
        self.require_all = require_all

    async def __call__(
        self,
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        held = self.required & user.granted
        allowed = held == self.required if self.require_all else bool(held)
        if not allowed:
            raise ForbiddenError
        return user
