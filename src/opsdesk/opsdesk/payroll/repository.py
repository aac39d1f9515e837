from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import MonthlyPayroll


class PayrollRepository(Protocol):
    def get(self, *, user_id: int, year: int, month: int) -> Optional[MonthlyPayroll]:
        raise NotImplementedError

    def create(self, payroll: MonthlyPayroll) -> None:
        raise NotImplementedError

    def update_counters(
        self,
        *,
        user_id: int,
        year: int,
        month: int,
        present_days: int,
        leave_days: int,
        total_days: int,
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def list_month(self, *, year: int, month: int) -> Sequence[MonthlyPayroll]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, limit: int) -> Sequence[MonthlyPayroll]:
        """Newest period first."""

        raise NotImplementedError
