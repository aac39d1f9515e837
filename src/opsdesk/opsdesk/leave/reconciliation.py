"""Leave -> attendance/payroll bookkeeping.

Approving a leave books one ledger row per day of the span and bumps the
monthly payroll counters; rejecting or deleting it does the inverse.
Neither direction is idempotent: applying one twice double-counts.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.model import DailyAttendance
from ..attendance.repository import AttendanceDayRepository
from ..common.datetime_utils import iter_days
from ..core.enums import DayStatus, LeavePaymentType, LeaveStatus
from ..payroll.model import MonthlyPayroll
from ..payroll.repository import PayrollRepository
from .model import LeaveRequest
from .validation import calculate_leave_days

logger = logging.getLogger(__name__)


def day_status_for(payment_type: LeavePaymentType) -> DayStatus:
    """Paid leave counts as a present day, unpaid leave as a leave day."""
    return DayStatus.PRESENT if LeavePaymentType(payment_type) == LeavePaymentType.PAID else DayStatus.LEAVE


class LeaveAttendanceService:
    def __init__(
        self,
        days: AttendanceDayRepository,
        payroll: PayrollRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._days = days
        self._payroll = payroll
        self._clock = clock or datetime.now

    def update_attendance_for_leave(self, leave: LeaveRequest, payment_type: LeavePaymentType) -> None:
        payment_type = LeavePaymentType(payment_type)
        status = day_status_for(payment_type)
        now = self._clock()

        written = self._days.upsert_days(
            DailyAttendance(
                user_id=leave.user_id,
                work_date=day,
                status=status,
                leave_request_id=leave.request_id,
                payment_type=payment_type,
                updated_at=now,
            )
            for day in iter_days(leave.start_date, leave.end_date)
        )
        logger.info("booked %d %s day(s) for user %s (leave %s)", written, status.value, leave.user_id, leave.request_id)

        self.update_payroll_for_leave(leave, payment_type)

    def update_payroll_for_leave(self, leave: LeaveRequest, payment_type: LeavePaymentType) -> None:
        # The whole span is booked against the start date's month.
        payment_type = LeavePaymentType(payment_type)
        year, month = leave.start_date.year, leave.start_date.month
        days = calculate_leave_days(leave.start_date, leave.end_date)
        paid = payment_type == LeavePaymentType.PAID
        now = self._clock()

        current = self._payroll.get(user_id=leave.user_id, year=year, month=month)
        if current is None:
            self._payroll.create(
                MonthlyPayroll(
                    user_id=leave.user_id,
                    year=year,
                    month=month,
                    present_days=days if paid else 0,
                    leave_days=0 if paid else days,
                    total_days=days,
                    created_at=now,
                    updated_at=now,
                )
            )
            logger.info("created payroll %d-%02d for user %s", year, month, leave.user_id)
            return

        self._payroll.update_counters(
            user_id=leave.user_id,
            year=year,
            month=month,
            present_days=current.present_days + (days if paid else 0),
            leave_days=current.leave_days + (0 if paid else days),
            total_days=current.total_days + days,
            updated_at=now,
        )
        logger.info(
            "payroll %d-%02d for user %s: +%d %s leave day(s)", year, month, leave.user_id, days, payment_type.value
        )

    def revert_attendance_for_leave(self, leave: LeaveRequest) -> None:
        removed = self._days.delete_days(
            user_id=leave.user_id,
            work_dates=list(iter_days(leave.start_date, leave.end_date)),
            leave_request_id=leave.request_id,
        )
        logger.info("reverted %d ledger day(s) for leave %s", removed, leave.request_id)

        if leave.status == LeaveStatus.APPROVED and leave.payment_type:
            self.revert_payroll_for_leave(leave)

    def revert_payroll_for_leave(self, leave: LeaveRequest) -> None:
        year, month = leave.start_date.year, leave.start_date.month
        current = self._payroll.get(user_id=leave.user_id, year=year, month=month)
        if current is None:
            return

        days = calculate_leave_days(leave.start_date, leave.end_date)
        paid = leave.payment_type == LeavePaymentType.PAID
        self._payroll.update_counters(
            user_id=leave.user_id,
            year=year,
            month=month,
            present_days=max(0, current.present_days - days) if paid else current.present_days,
            leave_days=current.leave_days if paid else max(0, current.leave_days - days),
            total_days=max(0, current.total_days - days),
            updated_at=self._clock(),
        )
        logger.info(
            "payroll %d-%02d for user %s: -%d %s leave day(s)",
            year, month, leave.user_id, days, leave.payment_type.value if leave.payment_type else "?",
        )
