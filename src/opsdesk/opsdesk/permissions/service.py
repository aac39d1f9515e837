from __future__ import annotations

import logging
from typing import Collection, Sequence

from ..core import constants as c
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .defaults import DEFAULT_ROLE_PERMISSIONS
from .model import Actor, AttendancePermissions
from .repository import RolePermissionRepository

logger = logging.getLogger(__name__)


def as_role(role: Role | str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(f"Unknown role: {role}")


def check_attendance_permissions(role: Role | str, permissions: Collection[str]) -> AttendancePermissions:
    """Admin short-circuits to all-true; other roles are a membership test per flag."""
    if as_role(role) == Role.ADMIN:
        return AttendancePermissions(can_view_own=True, can_view_team=True, can_view_all=True)

    granted = set(permissions)
    return AttendancePermissions(
        can_view_own=c.ATTENDANCE_VIEW_OWN in granted,
        can_view_team=c.ATTENDANCE_VIEW_TEAM in granted,
        can_view_all=c.ATTENDANCE_VIEW_ALL in granted,
    )


def require_permission(actor: Actor, permission: str) -> None:
    if not actor.has(permission):
        raise AuthorizationError(f"Missing permission: {permission}")


class PermissionService:
    """Use case: resolve and manage role-based permission strings."""

    def __init__(self, role_permissions: RolePermissionRepository, users: UserRepository):
        self._role_permissions = role_permissions
        self._users = users

    def get_user_permissions(self, user_id: int) -> list[str]:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.role:
            return []
        return self.permissions_for_role(user.role)

    def permissions_for_role(self, role: Role) -> list[str]:
        if role == Role.ADMIN:
            return list(c.ALL_PERMISSIONS)
        return list(self._role_permissions.get_permissions(role))

    def actor_for(self, user_id: int) -> Actor:
        """Resolve the role and permissions from the stored user on every call."""
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active or not user.role:
            raise AuthenticationError("Account is unknown or inactive")
        return Actor(user_id=user.user_id, role=user.role, permissions=frozenset(self.permissions_for_role(user.role)))

    def list_role_permissions(self) -> dict[str, list[str]]:
        stored = self._role_permissions.list_all()
        out = {Role.ADMIN.value: list(c.ALL_PERMISSIONS)}
        for role in Role:
            if role != Role.ADMIN:
                out[role.value] = list(stored.get(role, []))
        return out

    def set_role_permissions(self, *, actor: Actor, role: Role | str, permissions: Sequence[str]) -> list[str]:
        require_permission(actor, c.PERMISSIONS_MANAGE)
        role = as_role(role)
        if role == Role.ADMIN:
            raise ValidationError("Admin permissions are implicit and cannot be changed")

        unknown = sorted(set(permissions) - set(c.ALL_PERMISSIONS))
        if unknown:
            raise ValidationError(f"Unknown permissions: {', '.join(unknown)}")

        ordered = [p for p in c.ALL_PERMISSIONS if p in set(permissions)]
        self._role_permissions.set_permissions(role, ordered)
        logger.info("role %s permissions set by user %s: %s", role.value, actor.user_id, ordered)
        return ordered

    def seed_default_permissions(self) -> None:
        for role, permissions in DEFAULT_ROLE_PERMISSIONS.items():
            self._role_permissions.set_permissions(role, list(permissions))
