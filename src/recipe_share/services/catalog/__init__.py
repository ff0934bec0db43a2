"""Public recipe read service package."""

from recipe_share.services.catalog.service import RecipeCatalogService


__all__ = ["RecipeCatalogService"]
