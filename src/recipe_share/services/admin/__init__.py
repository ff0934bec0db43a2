"""Admin dashboard service package."""

from recipe_share.services.admin.service import AdminStatsService


__all__ = ["AdminStatsService"]
