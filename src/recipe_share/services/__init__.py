"""Domain services: submission, moderation, public reads and admin stats."""

from recipe_share.services.admin import AdminStatsService
from recipe_share.services.catalog import RecipeCatalogService
from recipe_share.services.moderation import ModerationService
from recipe_share.services.submission import RecipeSubmissionService


__all__ = [
    "AdminStatsService",
    "ModerationService",
    "RecipeCatalogService",
    "RecipeSubmissionService",
]
