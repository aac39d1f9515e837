"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30

EARTH_RADIUS_METERS = 6371000.0
DEFAULT_GEOFENCE_RADIUS_METERS = 50.0

MONTHLY_LEAVE_ALLOCATION = 2
UNLIMITED_ALLOCATION = -1
MIN_LEAVE_REASON_LENGTH = 10
MIN_PASSWORD_LENGTH = 6

# Permission strings
DASHBOARD_VIEW = "dashboard:view"
ATTENDANCE_VIEW_OWN = "attendance:view:own"
ATTENDANCE_VIEW_TEAM = "attendance:view:team"
ATTENDANCE_VIEW_ALL = "attendance:view:all"
PAYROLL_VIEW_OWN = "payroll:view:own"
PAYROLL_VIEW_ALL = "payroll:view:all"
CLIENTS_VIEW = "clients:view"
TICKETS_VIEW = "tickets:view"
LEAD_GENERATION_VIEW = "lead-generation:view"
TASKS_VIEW = "tasks:view"
TIMESHEET_VIEW = "timesheet:view"
USERS_MANAGE = "users:manage"
PERMISSIONS_MANAGE = "permissions:manage"
AUDIT_LOG_VIEW = "audit-log:view"
TEAMS_MANAGE = "teams:manage"

ALL_PERMISSIONS = (
    DASHBOARD_VIEW,
    ATTENDANCE_VIEW_OWN,
    ATTENDANCE_VIEW_TEAM,
    ATTENDANCE_VIEW_ALL,
    PAYROLL_VIEW_OWN,
    PAYROLL_VIEW_ALL,
    CLIENTS_VIEW,
    TICKETS_VIEW,
    LEAD_GENERATION_VIEW,
    TASKS_VIEW,
    TIMESHEET_VIEW,
    USERS_MANAGE,
    PERMISSIONS_MANAGE,
    AUDIT_LOG_VIEW,
    TEAMS_MANAGE,
)
