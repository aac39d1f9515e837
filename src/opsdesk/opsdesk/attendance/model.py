from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, LeavePaymentType, Role


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out pair with where it happened."""

    attendance_id: int
    user_id: int
    role: Role
    work_date: date
    check_in_time: datetime
    check_in_latitude: float
    check_in_longitude: float
    within_geofence: bool
    team_id: Optional[int] = None
    office_id: Optional[str] = None
    reason: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    check_out_within_geofence: Optional[bool] = None
    check_out_reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class DailyAttendance:
    """One row of the per-day ledger, keyed by (user_id, work_date)."""

    user_id: int
    work_date: date
    status: DayStatus
    leave_request_id: Optional[int] = None
    payment_type: Optional[LeavePaymentType] = None
    updated_at: Optional[datetime] = None
