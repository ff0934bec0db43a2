"""Admin dashboard schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_share.schemas.base import APIResponse


class ActivityEntry(APIResponse):
    """One item of the recent-activity feed."""

    type: str = "recipe_submitted"
    description: str
    timestamp: datetime
    user_name: str | None = None


class AdminStats(APIResponse):
    """Dashboard counters. All zero when aggregation fails."""

    total_users: int = 0
    active_users: int = 0
    total_recipes: int = 0
    pending_recipes: int = 0
    published_recipes: int = 0
    rejected_recipes: int = 0
    recent_activity: list[ActivityEntry] = Field(default_factory=list)


class AdminStatsResponse(APIResponse):
    success: bool = True
    stats: AdminStats
    error: str | None = None
