"""Recipe data repository.

Query layer over the recipe tables. Repositories operate on a session that
the calling service owns, so every call joins the service's unit of work.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select, update

from recipe_share.database.models import Recipe, User
from recipe_share.schemas.enums import ModerationStatus


if TYPE_CHECKING:
    import uuid
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class RecipeRepository:
    """Data access for recipes and their child rows."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def add(self, recipe: Recipe) -> Recipe:
        """Stage a recipe and its children and flush them in one round."""
        self._session.add(recipe)
        await self._session.flush()
        return recipe

    async def get(
        self, recipe_id: uuid.UUID, *, refresh: bool = False
    ) -> Recipe | None:
        """Load a recipe with author and child collections.

        ``refresh`` re-reads the row even if it is already in the identity map.
        """
        stmt = select(Recipe).where(Recipe.id == recipe_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_pending(self) -> Sequence[Recipe]:
        """Pending queue, oldest submission first."""
        stmt = (
            select(Recipe)
            .where(Recipe.moderation_status == ModerationStatus.PENDING)
            .order_by(Recipe.created_at.asc(), Recipe.id.asc())
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def list_public(
        self,
        limit: int,
        *,
        category: str | None = None,
    ) -> Sequence[Recipe]:
        """Approved and published recipes, newest first."""
        stmt = select(Recipe).where(Recipe.is_publicly_visible)
        if category:
            stmt = stmt.where(func.lower(Recipe.category) == category.strip().lower())
        stmt = stmt.order_by(Recipe.created_at.desc(), Recipe.id.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def get_public(self, recipe_id: uuid.UUID) -> Recipe | None:
        stmt = select(Recipe).where(Recipe.id == recipe_id, Recipe.is_publicly_visible)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_view_count(self, recipe_id: uuid.UUID) -> None:
        await self._session.execute(
            update(Recipe)
            .where(Recipe.id == recipe_id)
            .values(view_count=Recipe.view_count + 1)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, recipe: Recipe) -> None:
        """Delete a recipe; child rows go with it."""
        await self._session.delete(recipe)
        await self._session.flush()


__all__ = ["RecipeRepository"]
