from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TeamMemberRole


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TeamMember:
    """Membership row; `role == lead` grants team-scoped attendance visibility."""

    member_id: int
    team_id: int
    user_id: int
    role: TeamMemberRole
