from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, stored verbatim in the database."""

    ADMIN = "Admin"
    SUB_ADMIN = "Sub-Admin"
    HR = "HR"
    TEAM_LEAD = "Team Lead"
    EMPLOYEE = "Employee"


class DayStatus(str, Enum):
    """Status of one calendar day in the per-day attendance ledger."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeavePaymentType(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class LeaveType(str, Enum):
    MONTHLY = "monthly"
    EMERGENCY = "emergency"
    MISCELLANEOUS = "miscellaneous"


class TeamMemberRole(str, Enum):
    LEAD = "lead"
    MEMBER = "member"
