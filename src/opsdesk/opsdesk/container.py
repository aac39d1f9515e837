from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_day_repository import MySQLAttendanceDayRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceDayRepository, AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.reconciliation import LeaveAttendanceService
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.repository import OfficeRepository
from .offices.service import OfficeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .permissions.mysql_role_permission_repository import MySQLRolePermissionRepository
from .permissions.repository import RolePermissionRepository
from .permissions.service import PermissionService
from .permissions.visibility import AttendanceVisibilityService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository
from .teams.service import TeamService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    role_permissions_repo: RolePermissionRepository
    teams_repo: TeamRepository
    offices_repo: OfficeRepository
    attendance_repo: AttendanceRepository
    attendance_days_repo: AttendanceDayRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    auth_service: AuthService
    user_service: UserService
    permission_service: PermissionService
    visibility_service: AttendanceVisibilityService
    team_service: TeamService
    office_service: OfficeService
    attendance_service: AttendanceService
    leave_attendance_service: LeaveAttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService


def assemble(
    *,
    users_repo: UserRepository,
    role_permissions_repo: RolePermissionRepository,
    teams_repo: TeamRepository,
    offices_repo: OfficeRepository,
    attendance_repo: AttendanceRepository,
    attendance_days_repo: AttendanceDayRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
    geofence_radius_meters: Optional[float] = None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    permission_service = PermissionService(role_permissions_repo, users_repo)
    visibility_service = AttendanceVisibilityService(users_repo, teams_repo)
    team_service = TeamService(teams_repo, users_repo)
    office_service = OfficeService(offices_repo, radius_meters=geofence_radius_meters)
    attendance_service = AttendanceService(
        attendance_repo,
        attendance_days_repo,
        users_repo,
        office_service,
        visibility_service,
    )
    leave_attendance_service = LeaveAttendanceService(attendance_days_repo, payroll_repo)
    leave_service = LeaveService(leaves_repo, users_repo, leave_attendance_service)
    payroll_service = PayrollService(payroll_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        role_permissions_repo=role_permissions_repo,
        teams_repo=teams_repo,
        offices_repo=offices_repo,
        attendance_repo=attendance_repo,
        attendance_days_repo=attendance_days_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        auth_service=auth_service,
        user_service=user_service,
        permission_service=permission_service,
        visibility_service=visibility_service,
        team_service=team_service,
        office_service=office_service,
        attendance_service=attendance_service,
        leave_attendance_service=leave_attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, geofence_radius_meters: Optional[float] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        role_permissions_repo=MySQLRolePermissionRepository(conn),
        teams_repo=MySQLTeamRepository(conn),
        offices_repo=MySQLOfficeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        attendance_days_repo=MySQLAttendanceDayRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        geofence_radius_meters=geofence_radius_meters,
    )
