from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TeamMemberRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Team, TeamMember
from .repository import TeamRepository


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_led_team_ids(self, user_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT team_id FROM team_members WHERE user_id=%s AND role=%s",
                (int(user_id), TeamMemberRole.LEAD.value),
            )
            return [int(r["team_id"]) for r in fetchall(cur)]

    def list_member_user_ids(self, team_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM team_members WHERE team_id=%s", (int(team_id),))
            return [int(r["user_id"]) for r in fetchall(cur)]

    def is_member(self, team_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM team_members WHERE team_id=%s AND user_id=%s",
                (int(team_id), int(user_id)),
            )
            return fetchone(cur) is not None

    def create_team(self, *, name: str, description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO teams(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)

    def get_team(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT team_id, name, description, created_at FROM teams WHERE team_id=%s",
                (int(team_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Team(team_id=int(r["team_id"]), name=r["name"], description=r.get("description"), created_at=r.get("created_at"))

    def list_teams(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT team_id, name, description, created_at FROM teams ORDER BY name")
            return [
                Team(team_id=int(r["team_id"]), name=r["name"], description=r.get("description"), created_at=r.get("created_at"))
                for r in fetchall(cur)
            ]

    def add_member(self, *, team_id: int, user_id: int, role: TeamMemberRole) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO team_members(team_id, user_id, role) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE role=VALUES(role), member_id=LAST_INSERT_ID(member_id)
                """,
                (int(team_id), int(user_id), role.value),
            )
            return int(cur.lastrowid)

    def remove_member(self, *, team_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM team_members WHERE team_id=%s AND user_id=%s", (int(team_id), int(user_id)))
            return cur.rowcount > 0

    def list_members(self, team_id: int) -> Sequence[TeamMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member_id, team_id, user_id, role FROM team_members WHERE team_id=%s ORDER BY role, user_id",
                (int(team_id),),
            )
            return [
                TeamMember(
                    member_id=int(r["member_id"]),
                    team_id=int(r["team_id"]),
                    user_id=int(r["user_id"]),
                    role=TeamMemberRole(r["role"]),
                )
                for r in fetchall(cur)
            ]
