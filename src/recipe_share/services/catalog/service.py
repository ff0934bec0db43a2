"""Public recipe read service.

Only recipes that are approved AND flagged published are visible here. Both
columns are checked on every query, even though moderation keeps them in
step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from recipe_share.core.exceptions import ForbiddenError, NotFoundError, StorageError
from recipe_share.database.repositories import RecipeRepository
from recipe_share.observability.logging import get_logger
from recipe_share.schemas.recipe import RecipeRecord


if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = get_logger(__name__)


class RecipeCatalogService:
    """Published recipe listings, single-recipe reads and deletion."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        page_size: int = 50,
    ) -> None:
        self._session_factory = session_factory
        self._page_size = page_size

    async def list_published(self, category: str | None = None) -> list[RecipeRecord]:
        """Newest visible recipes, optionally for one category (case-insensitive)."""
        try:
            async with self._session_factory() as session:
                recipes = await RecipeRepository(session).list_public(
                    self._page_size, category=category
                )
                return [RecipeRecord.model_validate(r) for r in recipes]
        except SQLAlchemyError as e:
            msg = "Failed to fetch recipes"
            raise StorageError(msg, details=str(e)) from e

    async def get_published(self, recipe_id: uuid.UUID) -> RecipeRecord:
        """Return one visible recipe and count the view.

        Raises:
            NotFoundError: Absent, or not approved and published.
        """
        try:
            async with self._session_factory() as session, session.begin():
                repository = RecipeRepository(session)
                recipe = await repository.get_public(recipe_id)
                if recipe is None:
                    raise NotFoundError("Recipe", recipe_id)
                await repository.increment_view_count(recipe_id)
                await session.refresh(recipe, ["view_count"])
                return RecipeRecord.model_validate(recipe)
        except SQLAlchemyError as e:
            msg = "Failed to fetch recipe"
            raise StorageError(msg, details=str(e)) from e

    async def delete(
        self,
        recipe_id: uuid.UUID,
        *,
        requester_id: str,
        can_delete_any: bool = False,
    ) -> None:
        """Delete a recipe and, by cascade, its ingredients, instructions and tags.

        Raises:
            NotFoundError: No such recipe.
            ForbiddenError: The requester is neither the author nor allowed to
                delete any recipe.
        """
        try:
            async with self._session_factory() as session, session.begin():
                repository = RecipeRepository(session)
                recipe = await repository.get(recipe_id)
                if recipe is None:
                    raise NotFoundError("Recipe", recipe_id)
                if str(recipe.author_id) != requester_id and not can_delete_any:
                    msg = "You can only delete your own recipes"
                    raise ForbiddenError(msg)
                await repository.delete(recipe)
        except SQLAlchemyError as e:
            msg = "Failed to delete recipe"
            raise StorageError(msg, details=str(e)) from e

        logger.info(
            "Recipe deleted", recipe_id=str(recipe_id), requester_id=requester_id
        )
