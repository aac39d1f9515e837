from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime
from typing import Collection, Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import optional_text, require_month
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import DayStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ReasonRequiredError, ValidationError
from ..offices.geofence import DistanceCheck
from ..offices.service import OfficeService
from ..permissions.visibility import AttendanceVisibilityService
from ..users.repository import UserRepository
from .model import AttendanceRecord
from .repository import AttendanceDayRepository, AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        days: AttendanceDayRepository,
        users: UserRepository,
        offices: OfficeService,
        visibility: AttendanceVisibilityService,
    ):
        self._attendance = attendance
        self._days = days
        self._users = users
        self._offices = offices
        self._visibility = visibility

    def _verify_location(
        self, *, action: str, office_id: str, latitude: float, longitude: float, reason: Optional[str]
    ) -> tuple[DistanceCheck, Optional[str]]:
        reason = optional_text(reason, "Reason")
        check = self._offices.check(office_id=office_id, latitude=latitude, longitude=longitude)
        if check.within_geofence:
            return check, None

        reason = (reason or "").strip()
        if not reason:
            raise ReasonRequiredError(
                f"You are {check.distance_meters} m from {check.office.name}; "
                f"a reason is required to {action} outside the office",
                distance_meters=check.distance_meters,
                office=check.office,
            )
        return check, reason

    def check_in(
        self,
        user_id: int,
        *,
        office_id: str,
        latitude: float,
        longitude: float,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        now = now or datetime.now()

        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise ValidationError("User does not exist")

        if self._attendance.get_open_for_user(user.user_id):
            raise ValidationError("You are already checked in")

        check, reason = self._verify_location(
            action="check in", office_id=office_id, latitude=latitude, longitude=longitude, reason=reason
        )

        attendance_id = self._attendance.create_checkin(
            user_id=user.user_id,
            role=user.role,
            team_id=user.team_id,
            office_id=check.office.office_id,
            work_date=now.date(),
            check_in_time=now,
            latitude=float(latitude),
            longitude=float(longitude),
            within_geofence=check.within_geofence,
            reason=reason,
        )
        if not check.within_geofence:
            logger.info(
                "user %s checked in %.2f m from %s: %s",
                user.user_id, check.distance_meters, check.office.office_id, reason,
            )
        return attendance_id

    def check_out(
        self,
        user_id: int,
        *,
        office_id: str,
        latitude: float,
        longitude: float,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        now = now or datetime.now()

        record = self._attendance.get_open_for_user(int(user_id))
        if not record:
            raise ValidationError("No active check-in found")

        check, reason = self._verify_location(
            action="check out", office_id=office_id, latitude=latitude, longitude=longitude, reason=reason
        )

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            latitude=float(latitude),
            longitude=float(longitude),
            within_geofence=check.within_geofence,
            reason=reason,
        )
        if not ok:
            raise ValidationError("Check-out failed")
        if not check.within_geofence:
            logger.info(
                "user %s checked out %.2f m from %s: %s",
                record.user_id, check.distance_meters, check.office.office_id, reason,
            )
        return record.attendance_id

    def current_status(self, user_id: int) -> dict:
        record = self._attendance.get_open_for_user(int(user_id))
        if not record:
            return {"checked_in": False, "check_in_time": None, "attendance_id": None}
        return {
            "checked_in": True,
            "check_in_time": record.check_in_time.isoformat(),
            "attendance_id": record.attendance_id,
        }

    def list_visible_records(
        self,
        *,
        viewer_id: int,
        role: Role,
        permissions: Collection[str],
        start: date,
        end: date,
    ) -> list[dict]:
        if end < start:
            raise ValidationError("End date must be on or after start date")

        record_filter = self._visibility.build_filter(viewer_id, role, permissions)
        records = self._attendance.list_range(start=start, end=end)
        return [self._to_ui(r) for r in record_filter(records)]

    def get_visible_record(
        self,
        attendance_id: int,
        *,
        viewer_id: int,
        role: Role,
        permissions: Collection[str],
    ) -> dict:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        if not self._visibility.can_view_record(record.user_id, viewer_id, role, permissions):
            raise AuthorizationError("You cannot view this attendance record")
        return self._to_ui(record)

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [self._to_ui(r) for r in self._attendance.get_recent_for_user(int(user_id), int(limit))]

    def month_summary(self, user_id: int, *, year: int, month: int) -> dict:
        year, month = require_month(year, month)
        start, end = month_bounds(year, month)
        days = self._days.list_range(user_id=int(user_id), start=start, end=end)
        counts = Counter(d.status for d in days)
        return {
            "user_id": int(user_id),
            "year": year,
            "month": month,
            "present_days": counts.get(DayStatus.PRESENT, 0),
            "absent_days": counts.get(DayStatus.ABSENT, 0),
            "leave_days": counts.get(DayStatus.LEAVE, 0),
            "days": [
                {
                    "date": d.work_date.strftime("%Y-%m-%d"),
                    "status": d.status.value,
                    "leave_request_id": d.leave_request_id,
                    "payment_type": d.payment_type.value if d.payment_type else None,
                }
                for d in days
            ],
        }

    @staticmethod
    def _to_ui(r: AttendanceRecord) -> dict:
        return {
            "attendance_id": r.attendance_id,
            "user_id": r.user_id,
            "role": r.role.value,
            "team_id": r.team_id,
            "office_id": r.office_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else None,
            "check_in_location": {"latitude": r.check_in_latitude, "longitude": r.check_in_longitude},
            "check_out_location": (
                {"latitude": r.check_out_latitude, "longitude": r.check_out_longitude}
                if r.check_out_latitude is not None
                else None
            ),
            "within_geofence": r.within_geofence,
            "reason": r.reason,
            "check_out_within_geofence": r.check_out_within_geofence,
            "check_out_reason": r.check_out_reason,
        }
