from __future__ import annotations

from dataclasses import replace

import pytest

from src.opsdesk.opsdesk.core import constants as c
from src.opsdesk.opsdesk.core.enums import Role
from src.opsdesk.opsdesk.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.opsdesk.opsdesk.permissions.model import Actor
from src.opsdesk.opsdesk.permissions.service import PermissionService, check_attendance_permissions

from tests.fakes import InMemoryRolePermissions, demo_users


def _service(matrix=None) -> tuple[PermissionService, InMemoryRolePermissions]:
    repo = InMemoryRolePermissions(matrix)
    return PermissionService(repo, demo_users()), repo


def test_admin_gets_every_attendance_flag_even_with_empty_list():
    granted = check_attendance_permissions(Role.ADMIN, [])
    assert (granted.can_view_own, granted.can_view_team, granted.can_view_all) == (True, True, True)
    assert granted.has_any_permission


def test_flags_are_membership_tests_for_other_roles():
    granted = check_attendance_permissions("Team Lead", [c.ATTENDANCE_VIEW_OWN, c.ATTENDANCE_VIEW_TEAM])
    assert granted.can_view_own and granted.can_view_team
    assert not granted.can_view_all


def test_no_attendance_permission_means_no_flag():
    granted = check_attendance_permissions(Role.EMPLOYEE, [c.DASHBOARD_VIEW, c.PAYROLL_VIEW_OWN])
    assert not granted.has_any_permission


def test_user_permissions_by_role():
    svc, _ = _service()
    assert svc.get_user_permissions(1) == list(c.ALL_PERMISSIONS)
    assert c.ATTENDANCE_VIEW_ALL in svc.get_user_permissions(2)
    assert c.ATTENDANCE_VIEW_TEAM in svc.get_user_permissions(3)
    assert svc.get_user_permissions(999) == []


def test_role_without_stored_row_gets_empty_list():
    svc, _ = _service(matrix={})
    assert svc.get_user_permissions(4) == []


def test_actor_for_resolves_role_when_not_given():
    svc, _ = _service()
    actor = svc.actor_for(3)
    assert actor.role == Role.TEAM_LEAD
    assert actor.has(c.ATTENDANCE_VIEW_TEAM)
    assert not actor.has(c.ATTENDANCE_VIEW_ALL)


def test_actor_for_follows_the_stored_user():
    users = demo_users()
    svc = PermissionService(InMemoryRolePermissions(), users)
    users.users[4] = replace(users.users[4], role=Role.HR)
    assert svc.actor_for(4).has(c.ATTENDANCE_VIEW_ALL)

    users.set_active(4, is_active=False)
    with pytest.raises(AuthenticationError):
        svc.actor_for(4)
    with pytest.raises(AuthenticationError):
        svc.actor_for(999)


def test_unknown_role_string_is_a_validation_error():
    with pytest.raises(ValidationError, match="Unknown role"):
        check_attendance_permissions("Intern", [c.ATTENDANCE_VIEW_OWN])


def test_set_role_permissions_orders_and_persists():
    svc, repo = _service()
    admin = svc.actor_for(1)
    saved = svc.set_role_permissions(
        actor=admin, role="Employee", permissions=[c.TASKS_VIEW, c.ATTENDANCE_VIEW_OWN, c.TASKS_VIEW]
    )
    assert saved == [c.ATTENDANCE_VIEW_OWN, c.TASKS_VIEW]
    assert repo.get_permissions(Role.EMPLOYEE) == saved


def test_set_role_permissions_rejects_unknown_strings_and_admin():
    svc, _ = _service()
    admin = svc.actor_for(1)
    with pytest.raises(ValidationError):
        svc.set_role_permissions(actor=admin, role=Role.HR, permissions=["attendance:delete:all"])
    with pytest.raises(ValidationError):
        svc.set_role_permissions(actor=admin, role=Role.ADMIN, permissions=[])
    with pytest.raises(ValidationError):
        svc.set_role_permissions(actor=admin, role="Intern", permissions=[])


def test_set_role_permissions_requires_permissions_manage():
    svc, _ = _service()
    hr = svc.actor_for(2)
    with pytest.raises(AuthorizationError):
        svc.set_role_permissions(actor=hr, role=Role.EMPLOYEE, permissions=[])


def test_list_role_permissions_reports_admin_as_everything():
    svc, _ = _service(matrix={})
    listing = svc.list_role_permissions()
    assert listing["Admin"] == list(c.ALL_PERMISSIONS)
    assert listing["Employee"] == []
    assert set(listing) == {r.value for r in Role}


def test_seed_default_permissions_writes_matrix():
    svc, repo = _service(matrix={})
    svc.seed_default_permissions()

    assert c.PERMISSIONS_MANAGE not in repo.get_permissions(Role.SUB_ADMIN)
    assert c.USERS_MANAGE in repo.get_permissions(Role.SUB_ADMIN)
    assert set(repo.get_permissions(Role.HR)) == {
        c.DASHBOARD_VIEW,
        c.ATTENDANCE_VIEW_OWN,
        c.ATTENDANCE_VIEW_ALL,
        c.PAYROLL_VIEW_OWN,
        c.PAYROLL_VIEW_ALL,
        c.USERS_MANAGE,
    }
    assert c.ATTENDANCE_VIEW_TEAM in repo.get_permissions(Role.TEAM_LEAD)
    assert c.ATTENDANCE_VIEW_TEAM not in repo.get_permissions(Role.EMPLOYEE)


def test_actor_has_is_true_for_admin_without_listing():
    actor = Actor(user_id=1, role=Role.ADMIN)
    assert actor.has(c.TEAMS_MANAGE)
