from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeavePaymentType, LeaveStatus, LeaveType, Role
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        user_name: str,
        role: Role,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        requested_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
    ) -> Sequence[LeaveRequest]:
        """Filter on start_date within [start_from, start_to]; newest request first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        decided_by: int,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
        payment_type: Optional[LeavePaymentType] = None,
    ) -> bool:
        """Only a pending request can be decided; returns False otherwise."""

        raise NotImplementedError

    def delete(self, request_id: int) -> bool:
        raise NotImplementedError
