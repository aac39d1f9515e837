from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import AttendanceRecord, DailyAttendance


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        """Most recent record without a check-out."""

        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError


class AttendanceDayRepository(Protocol):
    def upsert_days(self, days: Iterable[DailyAttendance]) -> int:
        """Merge-write ledger rows in one transaction; returns rows written."""

        raise NotImplementedError

    def delete_days(self, *, user_id: int, work_dates: Iterable[date], leave_request_id: int) -> int:
        """Remove the rows on work_dates that were booked by leave_request_id."""

        raise NotImplementedError

    def list_range(self, *, user_id: int, start: date, end: date) -> Sequence[DailyAttendance]:
        raise NotImplementedError
