"""ORM models. Importing this package registers every table on ``Base.metadata``."""

from recipe_share.database.models.base import Base
from recipe_share.database.models.recipe import Recipe
from recipe_share.database.models.recipe_ingredient import RecipeIngredient
from recipe_share.database.models.recipe_instruction import RecipeInstruction
from recipe_share.database.models.recipe_tag import RecipeTag
from recipe_share.database.models.user import User


__all__ = [
    "Base",
    "Recipe",
    "RecipeIngredient",
    "RecipeInstruction",
    "RecipeTag",
    "User",
]
