from __future__ import annotations

import pytest

from src.opsdesk.opsdesk.core import constants as c
from src.opsdesk.opsdesk.core.enums import Role
from src.opsdesk.opsdesk.core.exceptions import AuthorizationError, ValidationError
from src.opsdesk.opsdesk.permissions.visibility import AttendanceVisibilityService

from tests.fakes import demo_teams, demo_users

RECORDS = [
    {"id": "a", "user_id": 1},
    {"id": "b", "user_id": 3},
    {"id": "c", "user_id": 4},
    {"id": "d", "user_id": 6},
    {"id": "e", "user_id": None},
    {"id": "f", "user_id": 99},
    {"id": "g", "user_id": 4},
]


def _ids(rows):
    return [r["id"] for r in rows]


@pytest.fixture
def users():
    return demo_users()


@pytest.fixture
def svc(users):
    return AttendanceVisibilityService(users, demo_teams())


def test_all_mode_hides_admin_records_only(svc, users):
    f = svc.build_filter(2, Role.HR, [c.ATTENDANCE_VIEW_ALL])
    assert _ids(f(RECORDS)) == ["b", "c", "d", "e", "f", "g"]
    # one batched role lookup, not one per record
    assert users.role_lookups == 1


def test_admin_viewer_uses_all_mode(svc):
    f = svc.build_filter(1, Role.ADMIN, [])
    assert "a" not in _ids(f(RECORDS))


def test_all_beats_team_and_own(svc):
    f = svc.build_filter(7, Role.SUB_ADMIN, [c.ATTENDANCE_VIEW_OWN, c.ATTENDANCE_VIEW_TEAM, c.ATTENDANCE_VIEW_ALL])
    assert len(f(RECORDS)) == 6


def test_team_mode_keeps_members_of_led_teams_including_lead(svc):
    f = svc.build_filter(3, Role.TEAM_LEAD, [c.ATTENDANCE_VIEW_OWN, c.ATTENDANCE_VIEW_TEAM])
    assert _ids(f(RECORDS)) == ["b", "c", "g"]


def test_team_mode_without_led_team_falls_back_to_own(svc):
    f = svc.build_filter(4, Role.EMPLOYEE, [c.ATTENDANCE_VIEW_TEAM])
    assert _ids(f(RECORDS)) == ["c", "g"]


def test_own_mode(svc):
    f = svc.build_filter(6, Role.EMPLOYEE, [c.ATTENDANCE_VIEW_OWN])
    assert _ids(f(RECORDS)) == ["d"]


def test_no_permission_raises(svc):
    with pytest.raises(AuthorizationError, match="No attendance permissions granted"):
        svc.build_filter(4, Role.EMPLOYEE, [c.DASHBOARD_VIEW])


def test_filter_accepts_objects_with_user_id(svc):
    class Row:
        def __init__(self, user_id):
            self.user_id = user_id

    rows = [Row(4), Row(5), Row(6)]
    f = svc.build_filter(3, Role.TEAM_LEAD, [c.ATTENDANCE_VIEW_TEAM])
    assert [r.user_id for r in f(rows)] == [4, 5]


def test_can_view_own_record_without_any_permission(svc):
    assert svc.can_view_record(4, 4, Role.EMPLOYEE, [])


def test_admin_can_view_admin_record(svc):
    assert svc.can_view_record(1, 1, Role.ADMIN, [])
    assert svc.can_view_record(1, 99, Role.ADMIN, [])


def test_view_all_cannot_see_admin_record(svc):
    assert not svc.can_view_record(1, 2, Role.HR, [c.ATTENDANCE_VIEW_ALL])
    assert svc.can_view_record(6, 2, Role.HR, [c.ATTENDANCE_VIEW_ALL])
    assert svc.can_view_record(None, 2, Role.HR, [c.ATTENDANCE_VIEW_ALL])


def test_view_team_sees_led_members_only(svc):
    assert svc.can_view_record(5, 3, Role.TEAM_LEAD, [c.ATTENDANCE_VIEW_TEAM])
    assert not svc.can_view_record(6, 3, Role.TEAM_LEAD, [c.ATTENDANCE_VIEW_TEAM])


def test_own_only_cannot_see_others(svc):
    assert not svc.can_view_record(5, 4, Role.EMPLOYEE, [c.ATTENDANCE_VIEW_OWN])


def test_unknown_viewer_role_is_a_validation_error(svc):
    with pytest.raises(ValidationError):
        svc.can_view_record(5, 4, "Intern", [c.ATTENDANCE_VIEW_OWN])
