"""Notification service client.

Posts moderation outcomes to an external notification endpoint. Delivery is
best-effort: every failure is raised as ``SideEffectError`` for the caller
to log, and never affects the moderation result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from recipe_share.core.exceptions import SideEffectError
from recipe_share.observability.logging import get_logger
from recipe_share.schemas.notification import RecipeModeratedNotification


if TYPE_CHECKING:
    from recipe_share.core.config import Settings

logger = get_logger(__name__)


class NotificationClient:
    """Client for the notification endpoint configured in ``notifications.url``.

    With no URL configured the client is a no-op.
    """

    def __init__(
        self,
        url: str | None,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._http = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_settings(cls, settings: Settings) -> NotificationClient:
        return cls(
            url=settings.notifications.url,
            timeout=settings.notifications.timeout,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self.enabled and self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
        logger.info("NotificationClient initialized", enabled=self.enabled)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.info("NotificationClient shutdown")

    async def send_recipe_moderated(
        self,
        notification: RecipeModeratedNotification,
    ) -> bool:
        """Deliver one moderation notification.

        Returns:
            True if delivered, False if notifications are not configured.

        Raises:
            SideEffectError: On any HTTP or transport failure.
        """
        if not self.enabled:
            logger.debug(
                "Notifications not configured, skipping",
                recipe_id=str(notification.recipe_id),
            )
            return False
        if self._http is None:
            msg = "Notification client not initialized"
            raise SideEffectError(msg)

        try:
            response = await self._http.post(
                self._url,
                json=notification.model_dump(mode="json"),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = "Notification service rejected the request"
            raise SideEffectError(
                msg,
                details=f"HTTP {e.response.status_code}: {e.response.text[:200]}",
            ) from e
        except httpx.RequestError as e:
            msg = "Notification service unreachable"
            raise SideEffectError(msg, details=str(e)) from e

        logger.info(
            "Moderation notification sent",
            recipe_id=str(notification.recipe_id),
            status=notification.status,
        )
        return True
