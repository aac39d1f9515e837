from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import RolePermissionRepository


class MySQLRolePermissionRepository(RolePermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_permissions(self, role: Role) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT permission FROM role_permissions WHERE role=%s ORDER BY permission",
                (role.value,),
            )
            return [r["permission"] for r in fetchall(cur)]

    def set_permissions(self, role: Role, permissions: Sequence[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM role_permissions WHERE role=%s", (role.value,))
            if permissions:
                cur.executemany(
                    "INSERT INTO role_permissions(role, permission) VALUES(%s,%s)",
                    [(role.value, p) for p in permissions],
                )

    def list_all(self) -> dict[Role, list[str]]:
        out: dict[Role, list[str]] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role, permission FROM role_permissions ORDER BY role, permission")
            for r in fetchall(cur):
                out.setdefault(Role(r["role"]), []).append(r["permission"])
        return out
