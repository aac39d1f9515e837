"""Attendance visibility rules.

Given a viewer and their granted permission strings, decide which
attendance records (and whose) the viewer may see.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Collection, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..teams.repository import TeamRepository
from ..users.repository import UserRepository
from .service import as_role, check_attendance_permissions

logger = logging.getLogger(__name__)

RecordFilter = Callable[[Sequence[Any]], list]

NO_PERMISSION_MESSAGE = "No attendance permissions granted"


class AttendanceVisibilityService:
    def __init__(self, users: UserRepository, teams: TeamRepository):
        self._users = users
        self._teams = teams

    def build_filter(self, user_id: int, role: Role | str, permissions: Collection[str]) -> RecordFilter:
        """Pick the record filter for a viewer; `all` beats `team` beats `own`."""
        granted = check_attendance_permissions(role, permissions)
        viewer_id = int(user_id)

        if granted.can_view_all:
            return self._all_except_admins
        if granted.can_view_team:
            return lambda records: self._team_records(viewer_id, records)
        if granted.can_view_own:
            return lambda records: [r for r in records if _owner(r) == viewer_id]

        raise AuthorizationError(NO_PERMISSION_MESSAGE)

    def can_view_record(
        self,
        record_user_id: Optional[int],
        viewer_user_id: int,
        viewer_role: Role | str,
        viewer_permissions: Collection[str],
    ) -> bool:
        if record_user_id is not None and int(record_user_id) == int(viewer_user_id):
            return True
        if as_role(viewer_role) == Role.ADMIN:
            return True

        granted = check_attendance_permissions(viewer_role, viewer_permissions)
        if granted.can_view_all:
            if record_user_id is None:
                return True
            return self._users.get_roles([int(record_user_id)]).get(int(record_user_id)) != Role.ADMIN

        if granted.can_view_team and record_user_id is not None:
            for team_id in self._teams.list_led_team_ids(int(viewer_user_id)):
                if self._teams.is_member(team_id, int(record_user_id)):
                    return True

        return False

    def _all_except_admins(self, records: Sequence[Any]) -> list:
        owners = {o for o in (_owner(r) for r in records) if o is not None}
        roles = self._users.get_roles(owners)
        # Records without an owner, or whose owner no longer exists, stay visible.
        return [r for r in records if _owner(r) is None or roles.get(_owner(r)) != Role.ADMIN]

    def _team_records(self, viewer_id: int, records: Sequence[Any]) -> list:
        led_team_ids = self._teams.list_led_team_ids(viewer_id)
        if not led_team_ids:
            logger.debug("user %s leads no team; falling back to own records", viewer_id)
            return [r for r in records if _owner(r) == viewer_id]

        members: set[int] = set()
        for team_id in led_team_ids:
            members.update(int(u) for u in self._teams.list_member_user_ids(team_id))
        return [r for r in records if _owner(r) in members]


def _owner(record: Any) -> Optional[int]:
    value = record.get("user_id") if isinstance(record, dict) else getattr(record, "user_id", None)
    return int(value) if value is not None else None
