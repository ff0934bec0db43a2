"""Admin dashboard aggregation.

Read-only counts over users and recipes plus a recent-submission feed. A
failing query degrades to zeroed stats with ``success=False`` instead of
an error response.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from recipe_share.database.models.base import utc_now
from recipe_share.database.repositories import StatsRepository
from recipe_share.observability.logging import get_logger
from recipe_share.schemas.admin import ActivityEntry, AdminStats, AdminStatsResponse
from recipe_share.schemas.enums import ModerationStatus


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from recipe_share.core.config.settings import AdminSettings

logger = get_logger(__name__)


class AdminStatsService:
    """Computes the admin dashboard counters."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: AdminSettings,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings

    async def get_stats(self) -> AdminStatsResponse:
        try:
            stats = await self._collect()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to compute admin stats", error=str(e))
            return AdminStatsResponse(
                success=False,
                stats=AdminStats(),
                error="Failed to fetch stats",
            )
        return AdminStatsResponse(stats=stats)

    async def _collect(self) -> AdminStats:
        now = utc_now()
        active_since = now - timedelta(days=self._settings.active_user_days)
        activity_since = now - timedelta(days=self._settings.recent_activity_days)

        async with self._session_factory() as session:
            repository = StatsRepository(session)
            by_status = await repository.count_recipes_by_status()
            recent = await repository.recent_submissions(
                activity_since, self._settings.recent_activity_limit
            )
            return AdminStats(
                total_users=await repository.count_users(),
                active_users=await repository.count_active_users(active_since),
                total_recipes=await repository.count_recipes(),
                pending_recipes=by_status[ModerationStatus.PENDING],
                published_recipes=await repository.count_published(),
                rejected_recipes=by_status[ModerationStatus.REJECTED],
                recent_activity=[
                    ActivityEntry(
                        description=item.title,
                        timestamp=item.created_at,
                        user_name=item.username,
                    )
                    for item in recent
                ],
            )
