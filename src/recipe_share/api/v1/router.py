"""API v1 router aggregating all endpoint routers.

Mounted under ``api.v1_prefix`` (``/api/v1`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_share.api.v1.endpoints import admin, health, recipes, root


router = APIRouter()

router.include_router(root.router)
router.include_router(health.router)
router.include_router(recipes.router)
router.include_router(admin.router)
