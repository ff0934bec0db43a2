"""Authentication and authorization."""

from recipe_share.auth.dependencies import (
    CurrentUser,
    RequirePermissions,
    get_current_user,
)
from recipe_share.auth.permissions import Permission, Role


__all__ = [
    "CurrentUser",
    "Permission",
    "RequirePermissions",
    "Role",
    "get_current_user",
]
