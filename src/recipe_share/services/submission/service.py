"""Recipe submission service.

Persists a recipe with its ingredients, instructions and tags as a single
unit of work. A new recipe always starts ``pending`` and unpublished.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from recipe_share.core.exceptions import NotFoundError, StorageError
from recipe_share.database.repositories import RecipeRepository
from recipe_share.observability.logging import get_logger
from recipe_share.observability.metrics import RECIPES_SUBMITTED
from recipe_share.services.submission.validation import build_recipe


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from recipe_share.schemas.recipe import RecipeSubmission

logger = get_logger(__name__)


class RecipeSubmissionService:
    """Validates and stores new recipes."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def submit(
        self,
        author_id: uuid.UUID,
        submission: RecipeSubmission,
    ) -> uuid.UUID:
        """Store a submission and return the new recipe id.

        Validation runs before a session is opened. Every row is written in
        one transaction; any storage failure rolls all of them back.

        Raises:
            ValidationError: Missing or invalid top-level input.
            NotFoundError: ``author_id`` is not a known user.
            StorageError: The transaction failed and was rolled back.
        """
        recipe_id = uuid.uuid4()
        recipe = build_recipe(recipe_id, author_id, submission)

        try:
            async with self._session_factory() as session, session.begin():
                repository = RecipeRepository(session)
                if await repository.get_user(author_id) is None:
                    raise NotFoundError("User", author_id)
                await repository.add(recipe)
        except SQLAlchemyError as e:
            logger.error(
                "Recipe submission rolled back",
                recipe_id=str(recipe_id),
                author_id=str(author_id),
                error=str(e),
            )
            msg = "Failed to create recipe"
            raise StorageError(msg, details=str(e)) from e

        RECIPES_SUBMITTED.inc()
        logger.info(
            "Recipe submitted",
            recipe_id=str(recipe_id),
            author_id=str(author_id),
            ingredients=len(recipe.ingredients),
            instructions=len(recipe.instructions),
            tags=len(recipe.tags),
        )
        return recipe_id
