"""Admin endpoints for the moderation queue and dashboard.

Provides:
- GET /admin/pending-recipes for the moderation queue
- POST /admin/moderate-recipe for approving or rejecting a recipe
- GET /admin/stats for dashboard counters
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_share.api.dependencies import (
    get_admin_stats_service,
    get_moderation_service,
)
from recipe_share.auth.dependencies import CurrentUser, RequirePermissions
from recipe_share.auth.permissions import Permission
from recipe_share.core.exceptions import ErrorDetail, ValidationError
from recipe_share.core.rate_limit import RateLimit
from recipe_share.schemas import (
    AdminStatsResponse,
    ModeratedRecipeSummary,
    ModerateRecipeRequest,
    ModerateRecipeResponse,
    RecipeListResponse,
)
from recipe_share.services import AdminStatsService, ModerationService


router = APIRouter(prefix="/admin", tags=["Admin"])

CanModerate = RequirePermissions(Permission.RECIPE_MODERATE)


@router.get(
    "/pending-recipes",
    response_model=RecipeListResponse,
    summary="List recipes awaiting moderation",
    description="Pending recipes, oldest submission first.",
)
async def list_pending_recipes(
    _user: Annotated[CurrentUser, Depends(CanModerate)],
    service: Annotated[ModerationService, Depends(get_moderation_service)],
) -> RecipeListResponse:
    recipes = await service.list_pending()
    return RecipeListResponse(recipes=recipes, count=len(recipes))


@router.post(
    "/moderate-recipe",
    response_model=ModerateRecipeResponse,
    summary="Approve or reject a recipe",
    description=(
        "Approving publishes the recipe; rejecting unpublishes it. The stored "
        "recipe is re-read after the decision commits."
    ),
    dependencies=[Depends(RateLimit("moderation"))],
    responses={
        400: {"description": "Missing recipe id, or status not approved/rejected"},
        404: {"description": "Recipe not found"},
    },
)
async def moderate_recipe(
    body: ModerateRecipeRequest,
    user: Annotated[CurrentUser, Depends(CanModerate)],
    service: Annotated[ModerationService, Depends(get_moderation_service)],
) -> ModerateRecipeResponse:
    if body.recipe_id is None:
        msg = "Recipe ID and status are required"
        raise ValidationError(
            msg,
            details=[
                ErrorDetail(code="MISSING", message="Field required", field="recipeId")
            ],
        )

    recipe = await service.moderate(
        body.recipe_id,
        body.status,
        notes=body.notes,
        moderator_id=user.id,
    )
    return ModerateRecipeResponse(
        message=f"Recipe {recipe.moderation_status} successfully",
        recipe=ModeratedRecipeSummary(
            id=recipe.id,
            title=recipe.title,
            status=recipe.moderation_status,
            is_published=recipe.is_published,
        ),
    )


@router.get(
    "/stats",
    response_model=AdminStatsResponse,
    summary="Dashboard statistics",
    description=(
        "User and recipe counters with recent submissions. Aggregation failures "
        "are reported in the body with zeroed counters."
    ),
)
async def get_admin_stats(
    _user: Annotated[CurrentUser, Depends(RequirePermissions(Permission.ADMIN_STATS))],
    service: Annotated[AdminStatsService, Depends(get_admin_stats_service)],
) -> AdminStatsResponse:
    return await service.get_stats()
