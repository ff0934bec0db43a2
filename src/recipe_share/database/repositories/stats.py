"""Read-only aggregation queries for the admin dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel
from sqlalchemy import func, select

from recipe_share.database.models import Recipe, User
from recipe_share.schemas.enums import ModerationStatus


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class RecentSubmission(BaseModel):
    """Data transfer object for one row of the activity feed."""

    title: str
    created_at: datetime
    username: str | None = None


class StatsRepository:
    """Counting queries over users and recipes."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count_users(self) -> int:
        return await self._session.scalar(select(func.count(User.id))) or 0

    async def count_active_users(self, since: datetime) -> int:
        stmt = select(func.count(User.id)).where(User.last_login > since)
        return await self._session.scalar(stmt) or 0

    async def count_recipes(self) -> int:
        return await self._session.scalar(select(func.count(Recipe.id))) or 0

    async def count_recipes_by_status(self) -> dict[ModerationStatus, int]:
        """Recipe count per moderation status; absent statuses count as 0."""
        stmt = select(Recipe.moderation_status, func.count(Recipe.id)).group_by(
            Recipe.moderation_status
        )
        rows = (await self._session.execute(stmt)).all()
        counts = dict.fromkeys(ModerationStatus, 0)
        counts.update({status: count for status, count in rows})
        return counts

    async def count_published(self) -> int:
        stmt = select(func.count(Recipe.id)).where(Recipe.is_publicly_visible)
        return await self._session.scalar(stmt) or 0

    async def recent_submissions(
        self,
        since: datetime,
        limit: int,
    ) -> list[RecentSubmission]:
        """Submissions newer than ``since``, newest first."""
        stmt = (
            select(Recipe.title, Recipe.created_at, User.username)
            .outerjoin(User, Recipe.author_id == User.id)
            .where(Recipe.created_at > since)
            .order_by(Recipe.created_at.desc())
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        return [
            RecentSubmission(title=title, created_at=created_at, username=username)
            for title, created_at, username in rows
        ]


__all__ = ["RecentSubmission", "StatsRepository"]
