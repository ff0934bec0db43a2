"""Pydantic schemas for request/response validation."""

from recipe_share.schemas.admin import ActivityEntry, AdminStats, AdminStatsResponse
from recipe_share.schemas.base import (
    APIRequest,
    APIResponse,
    DownstreamRequest,
    RecordSchema,
)
from recipe_share.schemas.enums import (
    Difficulty,
    ModerationStatus,
    UserRole,
    UserStatus,
)
from recipe_share.schemas.health import HealthResponse, ReadinessResponse, RootResponse
from recipe_share.schemas.moderation import (
    ModeratedRecipeSummary,
    ModerateRecipeRequest,
    ModerateRecipeResponse,
)
from recipe_share.schemas.notification import RecipeModeratedNotification
from recipe_share.schemas.recipe import (
    DeleteRecipeResponse,
    IngredientInput,
    IngredientRecord,
    InstructionInput,
    InstructionRecord,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeRecord,
    RecipeSubmission,
    SubmitRecipeResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "ActivityEntry",
    "AdminStats",
    "AdminStatsResponse",
    "DeleteRecipeResponse",
    "Difficulty",
    "DownstreamRequest",
    "HealthResponse",
    "IngredientInput",
    "IngredientRecord",
    "InstructionInput",
    "InstructionRecord",
    "ModerateRecipeRequest",
    "ModerateRecipeResponse",
    "ModeratedRecipeSummary",
    "ModerationStatus",
    "ReadinessResponse",
    "RecipeDetailResponse",
    "RecipeListResponse",
    "RecipeModeratedNotification",
    "RecipeRecord",
    "RecipeSubmission",
    "RecordSchema",
    "RootResponse",
    "SubmitRecipeResponse",
    "UserRole",
    "UserStatus",
]
