from __future__ import annotations

from ..core import constants as c
from ..core.enums import Role

DEFAULT_ROLE_PERMISSIONS: dict[Role, tuple[str, ...]] = {
    Role.SUB_ADMIN: tuple(p for p in c.ALL_PERMISSIONS if p != c.PERMISSIONS_MANAGE),
    Role.HR: (
        c.DASHBOARD_VIEW,
        c.ATTENDANCE_VIEW_OWN,
        c.ATTENDANCE_VIEW_ALL,
        c.PAYROLL_VIEW_OWN,
        c.PAYROLL_VIEW_ALL,
        c.USERS_MANAGE,
    ),
    Role.TEAM_LEAD: (
        c.DASHBOARD_VIEW,
        c.ATTENDANCE_VIEW_OWN,
        c.ATTENDANCE_VIEW_TEAM,
        c.PAYROLL_VIEW_OWN,
        c.TASKS_VIEW,
        c.TIMESHEET_VIEW,
    ),
    Role.EMPLOYEE: (
        c.DASHBOARD_VIEW,
        c.ATTENDANCE_VIEW_OWN,
        c.PAYROLL_VIEW_OWN,
        c.TASKS_VIEW,
        c.TIMESHEET_VIEW,
    ),
}
