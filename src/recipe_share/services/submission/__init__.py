"""Recipe submission service package."""

from recipe_share.services.submission.service import RecipeSubmissionService


__all__ = ["RecipeSubmissionService"]
