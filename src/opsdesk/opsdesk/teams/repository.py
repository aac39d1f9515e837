from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TeamMemberRole
from .model import Team, TeamMember


class TeamRepository(Protocol):
    def list_led_team_ids(self, user_id: int) -> Sequence[int]:
        """Teams in which the user is a lead."""

        raise NotImplementedError

    def list_member_user_ids(self, team_id: int) -> Sequence[int]:
        raise NotImplementedError

    def is_member(self, team_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def create_team(self, *, name: str, description: Optional[str] = None) -> int:
        raise NotImplementedError

    def get_team(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def list_teams(self) -> Sequence[Team]:
        raise NotImplementedError

    def add_member(self, *, team_id: int, user_id: int, role: TeamMemberRole) -> int:
        """Insert or update the membership; returns member_id."""

        raise NotImplementedError

    def remove_member(self, *, team_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def list_members(self, team_id: int) -> Sequence[TeamMember]:
        raise NotImplementedError
