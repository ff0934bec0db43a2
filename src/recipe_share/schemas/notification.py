"""Payloads sent to the notification service."""

from __future__ import annotations

import uuid

from recipe_share.schemas.base import DownstreamRequest


class RecipeModeratedNotification(DownstreamRequest):
    """Tells the author their recipe was reviewed."""

    event: str = "recipe.moderated"
    recipe_id: uuid.UUID
    title: str
    status: str
    author_id: uuid.UUID
