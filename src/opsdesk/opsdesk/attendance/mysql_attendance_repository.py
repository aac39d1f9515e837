from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_float, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, role, team_id, office_id, work_date,
    check_in_time, check_in_latitude, check_in_longitude, within_geofence, reason,
    check_out_time, check_out_latitude, check_out_longitude, check_out_within_geofence, check_out_reason
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        role=Role(r["role"]),
        team_id=int(r["team_id"]) if r.get("team_id") is not None else None,
        office_id=r.get("office_id"),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_in_latitude=float(r["check_in_latitude"]),
        check_in_longitude=float(r["check_in_longitude"]),
        within_geofence=as_bool(r["within_geofence"]),
        reason=r.get("reason"),
        check_out_time=r.get("check_out_time"),
        check_out_latitude=as_float(r.get("check_out_latitude")),
        check_out_longitude=as_float(r.get("check_out_longitude")),
        check_out_within_geofence=(
            as_bool(r["check_out_within_geofence"]) if r.get("check_out_within_geofence") is not None else None
        ),
        check_out_reason=r.get("check_out_reason"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE user_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE user_id=%s
                ORDER BY check_in_time DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_range(self, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date DESC, check_in_time DESC
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: int,
        role: Role,
        team_id: Optional[int],
        office_id: Optional[str],
        work_date: date,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        within_geofence: bool,
        reason: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, role, team_id, office_id, work_date, check_in_time,
                    check_in_latitude, check_in_longitude, within_geofence, reason
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    role.value,
                    team_id,
                    office_id,
                    work_date,
                    check_in_time,
                    latitude,
                    longitude,
                    int(within_geofence),
                    reason,
                ),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        within_geofence: bool,
        reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_latitude=%s, check_out_longitude=%s,
                    check_out_within_geofence=%s, check_out_reason=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, latitude, longitude, int(within_geofence), reason, int(attendance_id)),
            )
            return cur.rowcount > 0
