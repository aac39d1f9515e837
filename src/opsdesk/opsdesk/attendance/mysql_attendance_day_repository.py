from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Sequence

from ..core.enums import DayStatus, LeavePaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall
from .model import DailyAttendance
from .repository import AttendanceDayRepository


class MySQLAttendanceDayRepository(AttendanceDayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_days(self, days: Iterable[DailyAttendance]) -> int:
        rows = [
            (
                d.user_id,
                d.work_date,
                d.status.value,
                d.leave_request_id,
                d.payment_type.value if d.payment_type else None,
                d.updated_at or datetime.now(),
            )
            for d in days
        ]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_days(user_id, work_date, status, leave_request_id, payment_type, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), leave_request_id=VALUES(leave_request_id),
                    payment_type=VALUES(payment_type), updated_at=VALUES(updated_at)
                """,
                rows,
            )
        return len(rows)

    def delete_days(self, *, user_id: int, work_dates: Iterable[date], leave_request_id: int) -> int:
        rows = [(int(user_id), d, int(leave_request_id)) for d in work_dates]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany("DELETE FROM attendance_days WHERE user_id=%s AND work_date=%s AND leave_request_id=%s", rows)
            return int(cur.rowcount or 0)

    def list_range(self, *, user_id: int, start: date, end: date) -> Sequence[DailyAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, status, leave_request_id, payment_type, updated_at
                FROM attendance_days
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(user_id), start, end),
            )
            return [
                DailyAttendance(
                    user_id=int(r["user_id"]),
                    work_date=as_date(r["work_date"]),
                    status=DayStatus(r["status"]),
                    leave_request_id=int(r["leave_request_id"]) if r.get("leave_request_id") is not None else None,
                    payment_type=LeavePaymentType(r["payment_type"]) if r.get("payment_type") else None,
                    updated_at=r.get("updated_at"),
                )
                for r in fetchall(cur)
            ]
