"""Recipe endpoints.

Provides:
- POST /recipes for submitting a recipe into the moderation queue
- GET /recipes for the newest publicly visible recipes
- GET /recipes/{recipe_id} for one publicly visible recipe
- DELETE /recipes/{recipe_id} for removing a recipe
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from recipe_share.api.dependencies import get_catalog_service, get_submission_service
from recipe_share.auth.dependencies import CurrentUser, RequirePermissions
from recipe_share.auth.permissions import Permission
from recipe_share.core.exceptions import NotFoundError
from recipe_share.core.rate_limit import RateLimit
from recipe_share.observability.logging import get_logger
from recipe_share.schemas import (
    DeleteRecipeResponse,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeSubmission,
    SubmitRecipeResponse,
)
from recipe_share.services import RecipeCatalogService, RecipeSubmissionService


logger = get_logger(__name__)

router = APIRouter(tags=["Recipes"])

RecipeId = Annotated[uuid.UUID, Path(description="Recipe identifier")]


@router.post(
    "/recipes",
    response_model=SubmitRecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a recipe",
    description=(
        "Stores a recipe with its ingredients, instructions and tags. New recipes "
        "are pending and unpublished until a moderator approves them."
    ),
    dependencies=[Depends(RateLimit("submissions"))],
    responses={
        400: {"description": "Missing required fields or invalid values"},
        404: {"description": "Author does not exist"},
        429: {"description": "Too many submissions"},
    },
)
async def submit_recipe(
    submission: RecipeSubmission,
    user: Annotated[CurrentUser, Depends(RequirePermissions(Permission.RECIPE_CREATE))],
    service: Annotated[RecipeSubmissionService, Depends(get_submission_service)],
) -> SubmitRecipeResponse:
    try:
        author_id = uuid.UUID(user.id)
    except ValueError:
        raise NotFoundError("User", user.id) from None

    recipe_id = await service.submit(author_id, submission)
    return SubmitRecipeResponse(recipe_id=recipe_id)


@router.get(
    "/recipes",
    response_model=RecipeListResponse,
    summary="List published recipes",
    description="Approved and published recipes, newest first.",
)
async def list_recipes(
    service: Annotated[RecipeCatalogService, Depends(get_catalog_service)],
    category: Annotated[
        str | None,
        Query(description="Case-insensitive category filter", examples=["Dessert"]),
    ] = None,
) -> RecipeListResponse:
    recipes = await service.list_published(category)
    return RecipeListResponse(recipes=recipes, count=len(recipes))


@router.get(
    "/recipes/{recipe_id}",
    response_model=RecipeDetailResponse,
    summary="Get a published recipe",
    description="Returns one visible recipe and counts the view.",
    responses={404: {"description": "Recipe not found or not published"}},
)
async def get_recipe(
    recipe_id: RecipeId,
    service: Annotated[RecipeCatalogService, Depends(get_catalog_service)],
) -> RecipeDetailResponse:
    recipe = await service.get_published(recipe_id)
    return RecipeDetailResponse(recipe=recipe)


@router.delete(
    "/recipes/{recipe_id}",
    response_model=DeleteRecipeResponse,
    summary="Delete a recipe",
    description=(
        "Authors may delete their own recipes; moderators may delete any recipe. "
        "Ingredients, instructions and tags are removed with it."
    ),
    responses={
        403: {"description": "Not the author and not a moderator"},
        404: {"description": "Recipe not found"},
    },
)
async def delete_recipe(
    recipe_id: RecipeId,
    user: Annotated[
        CurrentUser,
        Depends(
            RequirePermissions(Permission.RECIPE_DELETE, Permission.RECIPE_DELETE_ANY)
        ),
    ],
    service: Annotated[RecipeCatalogService, Depends(get_catalog_service)],
) -> DeleteRecipeResponse:
    await service.delete(
        recipe_id,
        requester_id=user.id,
        can_delete_any=user.has_permission(Permission.RECIPE_DELETE_ANY),
    )
    logger.info("Recipe deleted", recipe_id=str(recipe_id), user_id=user.id)
    return DeleteRecipeResponse()
