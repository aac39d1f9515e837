from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeavePaymentType, LeaveStatus, LeaveType, Role


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    user_name: str
    role: Role
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    requested_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    payment_type: Optional[LeavePaymentType] = None

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1
