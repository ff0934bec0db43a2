"""Database repositories."""

from recipe_share.database.repositories.recipe import RecipeRepository
from recipe_share.database.repositories.stats import RecentSubmission, StatsRepository


__all__ = ["RecentSubmission", "RecipeRepository", "StatsRepository"]
