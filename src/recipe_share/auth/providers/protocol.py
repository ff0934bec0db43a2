"""The interface every authentication provider implements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_share.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Identifies the caller of a request.

    Each provider reads its own credentials from the request, so header
    based and token based modes share one call.
    """

    name: str

    async def authenticate(self, request: Request) -> AuthResult:
        """Return the caller, or raise.

        Raises:
            TokenExpiredError: The presented token is past its expiry.
            AuthenticationError: No usable credentials.
        """
        ...
