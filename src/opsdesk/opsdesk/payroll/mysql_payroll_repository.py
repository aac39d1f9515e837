from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import MonthlyPayroll
from .repository import PayrollRepository

_COLUMNS = "user_id, year, month, present_days, leave_days, total_days, created_at, updated_at"


def _to_payroll(r: dict) -> MonthlyPayroll:
    return MonthlyPayroll(
        user_id=int(r["user_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        present_days=int(r["present_days"] or 0),
        leave_days=int(r["leave_days"] or 0),
        total_days=int(r["total_days"] or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, user_id: int, year: int, month: int) -> Optional[MonthlyPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_months WHERE user_id=%s AND year=%s AND month=%s",
                (int(user_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_payroll(r) if r else None

    def create(self, payroll: MonthlyPayroll) -> None:
        now = datetime.now()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO payroll_months({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payroll.user_id,
                    payroll.year,
                    payroll.month,
                    payroll.present_days,
                    payroll.leave_days,
                    payroll.total_days,
                    payroll.created_at or now,
                    payroll.updated_at or now,
                ),
            )

    def update_counters(
        self,
        *,
        user_id: int,
        year: int,
        month: int,
        present_days: int,
        leave_days: int,
        total_days: int,
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_months
                SET present_days=%s, leave_days=%s, total_days=%s, updated_at=%s
                WHERE user_id=%s AND year=%s AND month=%s
                """,
                (present_days, leave_days, total_days, updated_at, int(user_id), int(year), int(month)),
            )
            return cur.rowcount > 0

    def list_month(self, *, year: int, month: int) -> Sequence[MonthlyPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_months WHERE year=%s AND month=%s ORDER BY user_id",
                (int(year), int(month)),
            )
            return [_to_payroll(r) for r in fetchall(cur)]

    def list_for_user(self, *, user_id: int, limit: int) -> Sequence[MonthlyPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM payroll_months
                WHERE user_id=%s
                ORDER BY year DESC, month DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_payroll(r) for r in fetchall(cur)]
