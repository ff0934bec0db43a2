"""API tests for the admin endpoints."""

from __future__ import annotations

import uuid

import pytest

from recipe_share.schemas.enums import ModerationStatus
from tests.factories.auth import auth_headers, moderator_headers


pytestmark = pytest.mark.unit

ADMIN = "/api/v1/admin"


class TestPendingRecipes:
    @pytest.mark.asyncio
    async def test_lists_queue(self, client, app_author, make_app_recipe) -> None:
        await make_app_recipe(app_author, title="Waiting")
        await make_app_recipe(
            app_author, title="Done", status=ModerationStatus.APPROVED
        )

        response = await client.get(
            f"{ADMIN}/pending-recipes", headers=moderator_headers()
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["recipes"][0]["title"] == "Waiting"

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(self, client, app_author) -> None:
        response = await client.get(
            f"{ADMIN}/pending-recipes", headers=auth_headers(app_author.id)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthorized(self, client) -> None:
        response = await client.get(f"{ADMIN}/pending-recipes")

        assert response.status_code == 401


class TestModerateRecipe:
    @pytest.mark.asyncio
    async def test_approve_publishes(self, client, app_author, make_app_recipe) -> None:
        recipe = await make_app_recipe(app_author, title="Lemon Drizzle Cake")

        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(recipe.id), "status": "approved", "notes": "Nice"},
            headers=moderator_headers(),
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Recipe approved successfully",
            "recipe": {
                "id": str(recipe.id),
                "title": "Lemon Drizzle Cake",
                "status": "approved",
                "is_published": True,
            },
        }

        public = await client.get(f"/api/v1/recipes/{recipe.id}")
        assert public.status_code == 200
        assert public.json()["recipe"]["moderation_notes"] == "Nice"

    @pytest.mark.asyncio
    async def test_reject_unpublishes(
        self, client, app_author, make_app_recipe
    ) -> None:
        recipe = await make_app_recipe(app_author, status=ModerationStatus.APPROVED)

        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(recipe.id), "status": "rejected"},
            headers=moderator_headers(),
        )

        body = response.json()
        assert body["message"] == "Recipe rejected successfully"
        assert body["recipe"]["is_published"] is False
        assert (await client.get(f"/api/v1/recipes/{recipe.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_missing_recipe_id(self, client) -> None:
        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"status": "approved"},
            headers=moderator_headers(),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Recipe ID and status are required"

    @pytest.mark.asyncio
    async def test_missing_status(self, client, app_author, make_app_recipe) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(recipe.id)},
            headers=moderator_headers(),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Recipe ID and status are required"

    @pytest.mark.asyncio
    async def test_invalid_status(self, client, app_author, make_app_recipe) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(recipe.id), "status": "banana"},
            headers=moderator_headers(),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unknown_recipe(self, client) -> None:
        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(uuid.uuid4()), "status": "approved"},
            headers=moderator_headers(),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Recipe not found"

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(
        self, client, app_author, make_app_recipe
    ) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.post(
            f"{ADMIN}/moderate-recipe",
            json={"recipeId": str(recipe.id), "status": "approved"},
            headers=auth_headers(app_author.id),
        )

        assert response.status_code == 403


class TestAdminStats:
    @pytest.mark.asyncio
    async def test_counts(self, client, app_author, make_app_recipe) -> None:
        await make_app_recipe(app_author, title="Waiting")
        await make_app_recipe(app_author, status=ModerationStatus.APPROVED)

        response = await client.get(f"{ADMIN}/stats", headers=moderator_headers())

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        stats = body["stats"]
        assert stats["totalUsers"] == 1
        assert stats["totalRecipes"] == 2
        assert stats["pendingRecipes"] == 1
        assert stats["publishedRecipes"] == 1
        assert stats["recentActivity"][0]["userName"] == "alice"

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(self, client, app_author) -> None:
        response = await client.get(
            f"{ADMIN}/stats", headers=auth_headers(app_author.id)
        )

        assert response.status_code == 403
