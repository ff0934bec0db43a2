"""Roles and the permissions they carry.

Permissions are ``resource:action`` strings. A caller's effective
permissions are those granted by each of its roles plus any granted
directly. Role names match the ``users.role`` column.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from recipe_share.schemas.enums import UserRole


if TYPE_CHECKING:
    from collections.abc import Iterable

Role = UserRole


class Permission(StrEnum):
    RECIPE_READ = "recipe:read"
    RECIPE_CREATE = "recipe:create"
    RECIPE_DELETE = "recipe:delete"  # own recipes; ownership checked by the service
    RECIPE_DELETE_ANY = "recipe:delete_any"
    RECIPE_MODERATE = "recipe:moderate"
    ADMIN_STATS = "admin:stats"


_CONTRIBUTOR = frozenset(
    {Permission.RECIPE_READ, Permission.RECIPE_CREATE, Permission.RECIPE_DELETE}
)
_STAFF = frozenset(Permission)

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.USER: _CONTRIBUTOR,
    Role.MODERATOR: _STAFF,
    Role.ADMIN: _STAFF,
    Role.OWNER: _STAFF,
}


def get_permissions_for_role(role: Role | str) -> set[Permission]:
    """Unknown role names grant nothing."""
    try:
        return set(ROLE_PERMISSIONS[Role(role)])
    except ValueError:
        return set()


def get_permissions_for_roles(roles: Iterable[Role | str]) -> set[Permission]:
    return set().union(*(get_permissions_for_role(role) for role in roles))


def effective_permissions(
    roles: Iterable[str], direct: Iterable[str] = ()
) -> frozenset[str]:
    """Every permission string a caller holds."""
    granted = {str(p) for p in get_permissions_for_roles(roles)}
    return frozenset(granted.union(direct))
