from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import optional_text, require_month
from ..core.constants import MONTHLY_LEAVE_ALLOCATION, UNLIMITED_ALLOCATION
from ..core.enums import LeavePaymentType, LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..permissions.model import Actor
from ..users.repository import UserRepository
from .model import LeaveRequest
from .reconciliation import LeaveAttendanceService
from .repository import LeaveRepository
from .validation import (
    calculate_leave_days,
    can_approve_leave,
    can_delete_leave,
    validate_leave_approval,
    validate_leave_request,
)

logger = logging.getLogger(__name__)

# Roles that only ever see their own leave requests.
SELF_SCOPED_ROLES = (Role.EMPLOYEE, Role.TEAM_LEAD)


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        reconciliation: LeaveAttendanceService,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._leaves = leaves
        self._users = users
        self._reconciliation = reconciliation
        self._clock = clock or datetime.now

    def _scoped_user_id(self, actor: Actor, user_id: Optional[int]) -> Optional[int]:
        if actor.role in SELF_SCOPED_ROLES:
            if user_id is not None and int(user_id) != actor.user_id:
                raise AuthorizationError("You can only view your own leave requests")
            return actor.user_id
        return int(user_id) if user_id is not None else None

    def create_request(
        self,
        *,
        actor: Actor,
        leave_type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: str,
    ) -> int:
        reason = optional_text(reason, "Reason") or ""
        user = self._users.get_by_id(actor.user_id)
        if not user or not user.is_active:
            raise ValidationError("User does not exist")

        result = validate_leave_request(
            user_id=user.user_id,
            user_name=user.name,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            today=self._clock().date(),
        )
        if not result.is_valid:
            raise ValidationError("; ".join(result.errors))

        return self._leaves.create(
            user_id=user.user_id,
            user_name=user.name,
            role=user.role,
            leave_type=LeaveType(leave_type),
            start_date=start_date,
            end_date=end_date,
            reason=reason.strip(),
            requested_at=self._clock(),
        )

    def list_requests(
        self,
        *,
        actor: Actor,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[dict]:
        try:
            status_filter = LeaveStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown status: {status}")

        start_from = start_to = None
        if year and month:
            start_from, start_to = month_bounds(*require_month(year, month))

        rows = self._leaves.list_requests(
            user_id=self._scoped_user_id(actor, user_id),
            status=status_filter,
            start_from=start_from,
            start_to=start_to,
        )
        return [self.to_ui(r) for r in rows]

    def decide(
        self,
        *,
        actor: Actor,
        request_id: int,
        status: str,
        rejection_reason: Optional[str] = None,
        payment_type: Optional[str] = None,
    ) -> LeaveRequest:
        rejection_reason = optional_text(rejection_reason, "Rejection reason")
        result = validate_leave_approval(status, rejection_reason, payment_type)
        if not result.is_valid:
            raise ValidationError("; ".join(result.errors))

        req = self._leaves.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if not can_approve_leave(actor.role, req.role):
            raise AuthorizationError("Insufficient permissions to approve/reject this request")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        new_status = LeaveStatus(status)
        pay = LeavePaymentType(payment_type) if new_status == LeaveStatus.APPROVED else None
        reason = ((rejection_reason or "").strip() or None) if new_status == LeaveStatus.REJECTED else None

        decided = self._leaves.decide(
            request_id=req.request_id,
            status=new_status,
            decided_by=actor.user_id,
            decided_at=self._clock(),
            rejection_reason=reason,
            payment_type=pay,
        )
        if not decided:
            raise ValidationError("Leave request has already been processed")

        if new_status == LeaveStatus.APPROVED:
            self._reconciliation.update_attendance_for_leave(req, pay)
        else:
            # req still carries the pre-decision status, so payroll is left alone.
            self._reconciliation.revert_attendance_for_leave(req)

        logger.info("leave %s %s by user %s", req.request_id, new_status.value, actor.user_id)
        updated = self._leaves.get(req.request_id)
        if not updated:
            raise NotFoundError("Leave request not found")
        return updated

    def delete_request(self, *, actor: Actor, request_id: int) -> None:
        req = self._leaves.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")

        if req.status == LeaveStatus.APPROVED:
            # Revoking an approved leave unwinds its ledger rows and payroll counters.
            if actor.role not in (Role.ADMIN, Role.HR):
                raise AuthorizationError("Insufficient permissions to delete this request")
            self._reconciliation.revert_attendance_for_leave(req)
        elif req.status == LeaveStatus.PENDING:
            if not can_delete_leave(actor.role, req.user_id, actor.user_id, req.status):
                raise AuthorizationError("Insufficient permissions to delete this request")
        else:
            raise ValidationError("Only pending or approved requests can be deleted")

        if not self._leaves.delete(req.request_id):
            raise ValidationError("Deleting the leave request failed")
        logger.info("leave %s (%s) deleted by user %s", req.request_id, req.status.value, actor.user_id)

    def leave_balance(
        self,
        *,
        actor: Actor,
        user_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> dict:
        today = self._clock().date()
        year, month = require_month(year or today.year, month or today.month)
        target = self._scoped_user_id(actor, user_id) or actor.user_id
        start, end = month_bounds(year, month)

        balance = {
            LeaveType.MONTHLY.value: _bucket(MONTHLY_LEAVE_ALLOCATION),
            LeaveType.EMERGENCY.value: _bucket(UNLIMITED_ALLOCATION),
            LeaveType.MISCELLANEOUS.value: _bucket(UNLIMITED_ALLOCATION),
        }
        for req in self._leaves.list_requests(user_id=target, start_from=start, start_to=end):
            bucket = balance[req.leave_type.value]
            days = calculate_leave_days(req.start_date, req.end_date)
            if req.status == LeaveStatus.APPROVED:
                bucket["used"] += days
            elif req.status == LeaveStatus.PENDING:
                bucket["pending"] += days

        monthly = balance[LeaveType.MONTHLY.value]
        monthly["remaining"] = max(0, monthly["allocated"] - monthly["used"])

        return {"user_id": target, "year": year, "month": month, "leave_balance": balance}

    @staticmethod
    def to_ui(r: LeaveRequest) -> dict:
        return {
            "id": r.request_id,
            "user_id": r.user_id,
            "user_name": r.user_name,
            "role": r.role.value,
            "leave_type": r.leave_type.value,
            "start_date": r.start_date.isoformat(),
            "end_date": r.end_date.isoformat(),
            "days": r.days,
            "reason": r.reason,
            "status": r.status.value,
            "requested_at": r.requested_at.isoformat() if r.requested_at else None,
            "decided_by": r.decided_by,
            "decided_at": r.decided_at.isoformat() if r.decided_at else None,
            "rejection_reason": r.rejection_reason,
            "payment_type": r.payment_type.value if r.payment_type else None,
        }


def _bucket(allocated: int) -> dict:
    return {"allocated": allocated, "used": 0, "pending": 0, "remaining": allocated}
