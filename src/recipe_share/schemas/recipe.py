"""Recipe submission and read schemas.

Submission input is deliberately permissive: required-field checks and child
row filtering happen in the submission service so they apply identically to
every caller, and so malformed child rows can be skipped instead of rejected.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_share.schemas.base import APIRequest, APIResponse, RecordSchema


# =============================================================================
# Submission
# =============================================================================


class IngredientInput(APIRequest):
    """Candidate ingredient row. Kept only if all three fields are present."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    ingredient: str | None = None
    amount: str | None = None
    unit: str | None = None


class InstructionInput(APIRequest):
    """Candidate instruction row. Kept only if text and step number are present."""

    instruction: str | None = None
    step_number: int | None = None


class RecipeSubmission(APIRequest):
    """Body of ``POST /recipes``."""

    title: str | None = Field(default=None, examples=["Lemon Drizzle Cake"])
    description: str | None = None
    category: str | None = Field(default=None, examples=["Dessert"])
    difficulty: str | None = Field(default=None, examples=["Easy"])
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    servings: int | None = None
    image_url: str | None = None
    ingredients: list[IngredientInput] = []
    instructions: list[InstructionInput] = []
    tags: list[Any] = []

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _keep_row_objects(cls, value: Any) -> list[Any]:
        """Anything but a list of objects contributes no rows."""
        if not isinstance(value, list):
            return []
        return [row for row in value if isinstance(row, dict | BaseModel)]

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_list(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []


class SubmitRecipeResponse(APIResponse):
    """Result of a successful submission."""

    success: bool = True
    message: str = "Recipe submitted successfully"
    recipe_id: uuid.UUID


# =============================================================================
# Stored records
# =============================================================================


class IngredientRecord(RecordSchema):
    ingredient: str
    amount: str
    unit: str
    order_index: int


class InstructionRecord(RecordSchema):
    instruction: str
    step_number: int


class RecipeRecord(RecordSchema):
    """A recipe with its author username and flattened child collections."""

    id: uuid.UUID
    title: str
    description: str | None = None
    category: str
    difficulty: str
    prep_time_minutes: int
    cook_time_minutes: int
    servings: int
    image_url: str | None = None
    author_id: uuid.UUID
    author_username: str | None = None
    moderation_status: str
    moderation_notes: str | None = None
    is_published: bool
    rating: float
    review_count: int
    view_count: int
    created_at: datetime
    updated_at: datetime
    moderated_at: datetime | None = None
    ingredients: list[IngredientRecord] = []
    instructions: list[InstructionRecord] = []
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _flatten_tags(cls, value: Any) -> Any:
        """ORM tag rows flatten to their label."""
        if isinstance(value, list):
            return [getattr(item, "tag", item) for item in value]
        return value


class RecipeListResponse(APIResponse):
    """A list of recipes with its length."""

    success: bool = True
    recipes: list[RecipeRecord]
    count: int


class RecipeDetailResponse(APIResponse):
    success: bool = True
    recipe: RecipeRecord


class DeleteRecipeResponse(APIResponse):
    success: bool = True
    message: str = "Recipe deleted successfully"
