from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_month
from ..core.constants import PAYROLL_VIEW_ALL, PAYROLL_VIEW_OWN
from ..permissions.model import Actor
from ..permissions.service import require_permission
from .model import MonthlyPayroll
from .repository import PayrollRepository

DEFAULT_HISTORY_MONTHS = 12


@dataclass(frozen=True)
class PayrollView:
    user_id: int
    year: int
    month: int
    present_days: int
    leave_days: int
    total_days: int

    @classmethod
    def from_model(cls, p: MonthlyPayroll) -> "PayrollView":
        return cls(
            user_id=p.user_id,
            year=p.year,
            month=p.month,
            present_days=p.present_days,
            leave_days=p.leave_days,
            total_days=p.total_days,
        )

    @classmethod
    def empty(cls, *, user_id: int, year: int, month: int) -> "PayrollView":
        return cls(user_id=user_id, year=year, month=month, present_days=0, leave_days=0, total_days=0)


class PayrollService:
    def __init__(self, payroll: PayrollRepository):
        self._payroll = payroll

    def get_for_user(self, *, actor: Actor, user_id: Optional[int] = None, year: int, month: int) -> PayrollView:
        """Own payroll needs payroll:view:own, anyone else's needs payroll:view:all."""
        year, month = require_month(year, month)
        target = int(user_id) if user_id is not None else actor.user_id
        require_permission(actor, PAYROLL_VIEW_OWN if target == actor.user_id else PAYROLL_VIEW_ALL)

        p = self._payroll.get(user_id=target, year=year, month=month)
        if not p:
            return PayrollView.empty(user_id=target, year=year, month=month)
        return PayrollView.from_model(p)

    def list_month(self, *, actor: Actor, year: int, month: int) -> list[PayrollView]:
        require_permission(actor, PAYROLL_VIEW_ALL)
        year, month = require_month(year, month)
        return [PayrollView.from_model(p) for p in self._payroll.list_month(year=year, month=month)]

    def history(self, *, actor: Actor, limit: int = DEFAULT_HISTORY_MONTHS) -> list[PayrollView]:
        require_permission(actor, PAYROLL_VIEW_OWN)
        return [PayrollView.from_model(p) for p in self._payroll.list_for_user(user_id=actor.user_id, limit=int(limit))]
