from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MonthlyPayroll:
    """Monthly day counters per user; key is (user_id, year, month)."""

    user_id: int
    year: int
    month: int
    present_days: int = 0
    leave_days: int = 0
    total_days: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month:02d}"
