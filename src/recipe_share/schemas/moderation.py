"""Moderation request/response schemas."""

from __future__ import annotations

import uuid

from pydantic import Field

from recipe_share.schemas.base import APIRequest, APIResponse, RecordSchema


class ModerateRecipeRequest(APIRequest):
    """Body of ``POST /admin/moderate-recipe``.

    Both fields are optional here so a missing one is reported with the same
    message as an empty one. The moderation service rejects any ``status``
    other than ``approved`` or ``rejected`` before touching storage.
    """

    recipe_id: uuid.UUID | None = None
    status: str | None = Field(default=None, examples=["approved"])
    notes: str | None = None


class ModeratedRecipeSummary(RecordSchema):
    id: uuid.UUID
    title: str
    status: str
    is_published: bool


class ModerateRecipeResponse(APIResponse):
    success: bool = True
    message: str = Field(..., examples=["Recipe approved successfully"])
    recipe: ModeratedRecipeSummary
