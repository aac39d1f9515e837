from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import Role


class RolePermissionRepository(Protocol):
    def get_permissions(self, role: Role) -> Sequence[str]:
        raise NotImplementedError

    def set_permissions(self, role: Role, permissions: Sequence[str]) -> None:
        """Replace the full permission list of a role."""

        raise NotImplementedError

    def list_all(self) -> dict[Role, list[str]]:
        raise NotImplementedError
