from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import TEAMS_MANAGE
from ..core.enums import TeamMemberRole
from ..core.exceptions import NotFoundError, ValidationError
from ..permissions.model import Actor
from ..permissions.service import require_permission
from ..users.repository import UserRepository
from .repository import TeamRepository


class TeamService:
    """Use case: manage teams and their leads/members (admin)."""

    def __init__(self, teams: TeamRepository, users: UserRepository):
        self._teams = teams
        self._users = users

    def create_team(self, *, actor: Actor, name: str, description: Optional[str] = None) -> int:
        require_permission(actor, TEAMS_MANAGE)
        name = require_non_empty(name, "Team name")
        description = description.strip() if description else None
        return self._teams.create_team(name=name, description=description or None)

    def list_teams(self) -> list[dict]:
        out = []
        for team in self._teams.list_teams():
            members = self._teams.list_members(team.team_id)
            out.append(
                {
                    "team_id": team.team_id,
                    "name": team.name,
                    "description": team.description,
                    "leads": [m.user_id for m in members if m.role == TeamMemberRole.LEAD],
                    "members": [m.user_id for m in members],
                }
            )
        return out

    def add_member(self, *, actor: Actor, team_id: int, user_id: int, role: TeamMemberRole | str = TeamMemberRole.MEMBER) -> int:
        require_permission(actor, TEAMS_MANAGE)
        try:
            role = TeamMemberRole(role)
        except ValueError:
            raise ValidationError("Member role must be 'lead' or 'member'")

        if not self._teams.get_team(int(team_id)):
            raise NotFoundError("Team not found")
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        return self._teams.add_member(team_id=int(team_id), user_id=int(user_id), role=role)

    def remove_member(self, *, actor: Actor, team_id: int, user_id: int) -> None:
        require_permission(actor, TEAMS_MANAGE)
        if not self._teams.remove_member(team_id=int(team_id), user_id=int(user_id)):
            raise NotFoundError("Team member not found")
