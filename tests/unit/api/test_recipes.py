"""API tests for the recipe endpoints.

Tests cover:
- Submission through the full stack, including auth and the error envelope
- Public listing, single reads and deletion
- Per-user submission rate limiting
"""

from __future__ import annotations

import uuid

import httpx
import pytest

from recipe_share.core.config import Settings
from recipe_share.factory import create_app
from recipe_share.schemas.enums import ModerationStatus
from tests.factories.auth import auth_headers, moderator_headers
from tests.factories.users import add_user


pytestmark = pytest.mark.unit

RECIPES = "/api/v1/recipes"

SUBMISSION = {
    "title": "Lemon Drizzle Cake",
    "description": "A sharp, sticky sponge",
    "category": "Dessert",
    "difficulty": "easy",
    "prep_time_minutes": 15,
    "cook_time_minutes": 45,
    "servings": 8,
    "ingredients": [
        {"ingredient": "Salt", "amount": "1", "unit": "tsp"},
        {"ingredient": "Bad", "amount": None, "unit": "x"},
    ],
    "instructions": [{"instruction": "Mix", "step_number": 1}],
    "tags": ["baking"],
}


class TestSubmitRecipe:
    @pytest.mark.asyncio
    async def test_created_as_pending(self, client, app_author) -> None:
        response = await client.post(
            RECIPES, json=SUBMISSION, headers=auth_headers(app_author.id)
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Recipe submitted successfully"
        recipe_id = uuid.UUID(body["recipeId"])

        pending = await client.get(
            "/api/v1/admin/pending-recipes", headers=moderator_headers()
        )
        [recipe] = pending.json()["recipes"]
        assert recipe["id"] == str(recipe_id)
        assert recipe["moderation_status"] == "pending"
        assert recipe["is_published"] is False
        assert recipe["difficulty"] == "Easy"
        assert [i["ingredient"] for i in recipe["ingredients"]] == ["Salt"]

    @pytest.mark.asyncio
    async def test_accepts_camel_case_fields(self, client, app_author) -> None:
        payload = {**SUBMISSION, "prepTimeMinutes": 5}
        del payload["prep_time_minutes"]

        response = await client.post(
            RECIPES, json=payload, headers=auth_headers(app_author.id)
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_missing_required_fields(self, client, app_author) -> None:
        payload = {k: v for k, v in SUBMISSION.items() if k != "category"}

        response = await client.post(
            RECIPES, json=payload, headers=auth_headers(app_author.id)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "VALIDATION_ERROR"
        assert body["error"] == "Missing required fields: category"
        assert body["details"] == [
            {"code": "MISSING", "message": "Field required", "field": "category"}
        ]
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_requires_identity(self, client) -> None:
        response = await client.post(RECIPES, json=SUBMISSION)

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_unknown_author(self, client) -> None:
        response = await client.post(
            RECIPES, json=SUBMISSION, headers=auth_headers(uuid.uuid4())
        )

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "malformed",
        [
            {"ingredients": None},
            {"ingredients": "Salt"},
            {"ingredients": ["Salt", None]},
            {"instructions": None},
            {"instructions": [None, "Mix"]},
            {"tags": None},
            {"tags": "dessert"},
        ],
    )
    async def test_malformed_collections_are_skipped(
        self, client, app_author, malformed
    ) -> None:
        payload = {
            "title": "Plain Toast",
            "category": "Breakfast",
            "difficulty": "Easy",
            **malformed,
        }

        response = await client.post(
            RECIPES, json=payload, headers=auth_headers(app_author.id)
        )

        assert response.status_code == 201
        pending = await client.get(
            "/api/v1/admin/pending-recipes", headers=moderator_headers()
        )
        [recipe] = pending.json()["recipes"]
        assert recipe["ingredients"] == []
        assert recipe["instructions"] == []
        assert recipe["tags"] == []

    @pytest.mark.asyncio
    async def test_object_rows_kept_among_malformed_ones(
        self, client, app_author
    ) -> None:
        payload = {
            **SUBMISSION,
            "ingredients": [
                "Salt",
                {"ingredient": "Egg", "amount": 1, "unit": "whole"},
            ],
            "instructions": [None, {"instruction": "Fry", "step_number": 1}],
        }

        response = await client.post(
            RECIPES, json=payload, headers=auth_headers(app_author.id)
        )

        assert response.status_code == 201
        pending = await client.get(
            "/api/v1/admin/pending-recipes", headers=moderator_headers()
        )
        [recipe] = pending.json()["recipes"]
        assert [i["ingredient"] for i in recipe["ingredients"]] == ["Egg"]
        assert [s["instruction"] for s in recipe["instructions"]] == ["Fry"]

    @pytest.mark.asyncio
    async def test_non_uuid_identity_is_unknown_author(self, client) -> None:
        response = await client.post(
            RECIPES, json=SUBMISSION, headers=auth_headers("gateway-user-7")
        )

        assert response.status_code == 404


class TestListRecipes:
    @pytest.mark.asyncio
    async def test_only_approved_and_published(
        self, client, app_author, make_app_recipe
    ) -> None:
        await make_app_recipe(
            app_author, title="Visible", status=ModerationStatus.APPROVED
        )
        await make_app_recipe(
            app_author,
            title="Flag only",
            status=ModerationStatus.PENDING,
            is_published=True,
        )

        response = await client.get(RECIPES)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["recipes"][0]["title"] == "Visible"
        assert body["recipes"][0]["author_username"] == "alice"

    @pytest.mark.asyncio
    async def test_category_filter(self, client, app_author, make_app_recipe) -> None:
        await make_app_recipe(
            app_author,
            title="Cake",
            category="Dessert",
            status=ModerationStatus.APPROVED,
        )
        await make_app_recipe(
            app_author,
            title="Soup",
            category="Starter",
            status=ModerationStatus.APPROVED,
        )

        response = await client.get(RECIPES, params={"category": "STARTER"})

        assert [r["title"] for r in response.json()["recipes"]] == ["Soup"]


class TestGetRecipe:
    @pytest.mark.asyncio
    async def test_counts_views(self, client, app_author, make_app_recipe) -> None:
        recipe = await make_app_recipe(app_author, status=ModerationStatus.APPROVED)

        await client.get(f"{RECIPES}/{recipe.id}")
        response = await client.get(f"{RECIPES}/{recipe.id}")

        assert response.status_code == 200
        assert response.json()["recipe"]["view_count"] == 2

    @pytest.mark.asyncio
    async def test_pending_recipe_is_hidden(
        self, client, app_author, make_app_recipe
    ) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.get(f"{RECIPES}/{recipe.id}")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_malformed_id(self, client) -> None:
        response = await client.get(f"{RECIPES}/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestDeleteRecipe:
    @pytest.mark.asyncio
    async def test_author_deletes(self, client, app_author, make_app_recipe) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.delete(
            f"{RECIPES}/{recipe.id}", headers=auth_headers(app_author.id)
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Recipe deleted successfully",
        }

    @pytest.mark.asyncio
    async def test_stranger_is_forbidden(
        self, client, app_author, app_session_factory, make_app_recipe
    ) -> None:
        stranger = await add_user(app_session_factory, "mallory")
        recipe = await make_app_recipe(app_author)

        response = await client.delete(
            f"{RECIPES}/{recipe.id}", headers=auth_headers(stranger.id)
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You can only delete your own recipes"

    @pytest.mark.asyncio
    async def test_moderator_deletes_any(
        self, client, app_author, make_app_recipe
    ) -> None:
        recipe = await make_app_recipe(app_author)

        response = await client.delete(
            f"{RECIPES}/{recipe.id}", headers=moderator_headers()
        )

        assert response.status_code == 200


class TestSubmissionRateLimit:
    @pytest.fixture
    async def limited_client(self):
        settings = Settings(rate_limiting={"enabled": True, "submissions": "2/minute"})
        app = create_app(settings)
        async with app.router.lifespan_context(app):
            author = await add_user(app.state.session_factory, "alice")
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://test"
            ) as client:
                yield client, author

    @pytest.mark.asyncio
    async def test_third_submission_is_rejected(self, limited_client) -> None:
        client, author = limited_client
        headers = auth_headers(author.id)

        statuses = [
            (await client.post(RECIPES, json=SUBMISSION, headers=headers)).status_code
            for _ in range(3)
        ]

        assert statuses == [201, 201, 429]
