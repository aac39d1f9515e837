from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from ..core.enums import Role


@dataclass(frozen=True)
class AttendancePermissions:
    """Which attendance records a viewer may see."""

    can_view_own: bool
    can_view_team: bool
    can_view_all: bool

    @property
    def has_any_permission(self) -> bool:
        return self.can_view_own or self.can_view_team or self.can_view_all


@dataclass(frozen=True)
class Actor:
    """The authenticated user an operation runs on behalf of."""

    user_id: int
    role: Role
    permissions: FrozenSet[str] = field(default_factory=frozenset)

    def has(self, permission: str) -> bool:
        return self.role == Role.ADMIN or permission in self.permissions
