"""Leave request rules that need no storage: field validation and role hierarchy."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MIN_LEAVE_REASON_LENGTH
from ..core.enums import LeavePaymentType, LeaveStatus, LeaveType, Role


@dataclass(frozen=True)
class LeaveValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def _valid(enum_cls, value) -> bool:
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True


def validate_leave_request(
    *,
    user_id: Optional[int],
    user_name: Optional[str],
    leave_type: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    reason: Optional[str],
    today: Optional[date] = None,
) -> LeaveValidationResult:
    errors: list[str] = []
    today = today or date.today()

    if not user_id:
        errors.append("User ID is required")
    if not user_name or not user_name.strip():
        errors.append("User name is required")
    if not leave_type:
        errors.append("Leave type is required")
    if not start_date:
        errors.append("Start date is required")
    if not end_date:
        errors.append("End date is required")
    if not reason or not reason.strip():
        errors.append("Reason is required")

    if start_date and end_date:
        if start_date < today:
            errors.append("Start date cannot be in the past")
        if end_date < start_date:
            errors.append("End date must be after start date")

    if reason and reason.strip() and len(reason.strip()) < MIN_LEAVE_REASON_LENGTH:
        errors.append(f"Reason must be at least {MIN_LEAVE_REASON_LENGTH} characters long")

    if leave_type and not _valid(LeaveType, leave_type):
        errors.append("Invalid leave type")

    return LeaveValidationResult(is_valid=not errors, errors=errors)


def validate_leave_approval(
    status: Optional[str],
    rejection_reason: Optional[str] = None,
    payment_type: Optional[str] = None,
) -> LeaveValidationResult:
    errors: list[str] = []

    if status not in (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value):
        errors.append('Status must be either "approved" or "rejected"')

    if status == LeaveStatus.REJECTED.value and not (rejection_reason or "").strip():
        errors.append("Rejection reason is required for rejected requests")

    if status == LeaveStatus.APPROVED.value:
        if not payment_type:
            errors.append("Payment type is required for approved requests")
        elif not _valid(LeavePaymentType, payment_type):
            errors.append('Payment type must be either "paid" or "unpaid"')

    return LeaveValidationResult(is_valid=not errors, errors=errors)


def can_approve_leave(approver_role: Role | str, target_role: Role | str) -> bool:
    approver = Role(approver_role)
    target = Role(target_role)

    if approver == Role.ADMIN:
        return True
    if approver == Role.HR:
        return target not in (Role.ADMIN, Role.SUB_ADMIN)
    if approver == Role.SUB_ADMIN:
        return target in (Role.EMPLOYEE, Role.TEAM_LEAD)
    return False


def can_delete_leave(
    role: Role | str,
    request_user_id: int,
    current_user_id: int,
    request_status: LeaveStatus | str,
) -> bool:
    """Pending requests only: Admin/HR may delete any, users their own."""
    if LeaveStatus(request_status) != LeaveStatus.PENDING:
        return False
    if Role(role) in (Role.ADMIN, Role.HR):
        return True
    return int(request_user_id) == int(current_user_id)


def calculate_leave_days(start_date: date, end_date: date) -> int:
    """Inclusive day count of [start_date, end_date]."""
    return (end_date - start_date).days + 1
