"""Unit tests for the notification service client.

HTTP traffic is mocked with respx.
"""

from __future__ import annotations

import json
import uuid

import httpx
import pytest
import respx

from recipe_share.clients.notifications import NotificationClient
from recipe_share.core.exceptions import SideEffectError
from recipe_share.schemas.notification import RecipeModeratedNotification


pytestmark = pytest.mark.unit

URL = "http://notifications.test/events"


@pytest.fixture
def notification() -> RecipeModeratedNotification:
    return RecipeModeratedNotification(
        recipe_id=uuid.uuid4(),
        title="Lemon Drizzle Cake",
        status="approved",
        author_id=uuid.uuid4(),
    )


@pytest.fixture
async def client():
    client = NotificationClient(URL, timeout=1.0)
    await client.initialize()
    yield client
    await client.shutdown()


class TestSendRecipeModerated:
    @pytest.mark.asyncio
    @respx.mock
    async def test_posts_camel_case_payload(self, client, notification) -> None:
        route = respx.post(URL).mock(return_value=httpx.Response(202))

        assert await client.send_recipe_moderated(notification) is True

        assert route.called
        body = json.loads(route.calls.last.request.content)
        assert body == {
            "event": "recipe.moderated",
            "recipeId": str(notification.recipe_id),
            "title": "Lemon Drizzle Cake",
            "status": "approved",
            "authorId": str(notification.author_id),
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises_side_effect_error(
        self, client, notification
    ) -> None:
        respx.post(URL).mock(return_value=httpx.Response(503, text="busy"))

        with pytest.raises(SideEffectError) as exc_info:
            await client.send_recipe_moderated(notification)

        assert exc_info.value.message == "Notification service rejected the request"
        assert exc_info.value.details == "HTTP 503: busy"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_raises_side_effect_error(
        self, client, notification
    ) -> None:
        respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(SideEffectError, match="unreachable"):
            await client.send_recipe_moderated(notification)

    @pytest.mark.asyncio
    async def test_unconfigured_client_is_a_no_op(self, notification) -> None:
        client = NotificationClient(None)
        await client.initialize()

        assert client.enabled is False
        assert await client.send_recipe_moderated(notification) is False

    @pytest.mark.asyncio
    async def test_uninitialized_client_raises(self, notification) -> None:
        client = NotificationClient(URL)

        with pytest.raises(SideEffectError, match="not initialized"):
            await client.send_recipe_moderated(notification)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_http_client_is_not_closed(self) -> None:
        async with httpx.AsyncClient() as http:
            client = NotificationClient(URL, http_client=http)
            await client.initialize()
            await client.shutdown()

            assert http.is_closed is False

    def test_from_settings(self, test_settings) -> None:
        client = NotificationClient.from_settings(test_settings)

        assert client.enabled is False
