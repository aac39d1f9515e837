"""In-memory repositories shared by the service and API tests."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from src.opsdesk.opsdesk.attendance.model import AttendanceRecord, DailyAttendance
from src.opsdesk.opsdesk.container import Container, assemble
from src.opsdesk.opsdesk.core.enums import LeaveStatus, LeaveType, Role, TeamMemberRole
from src.opsdesk.opsdesk.leave.model import LeaveRequest
from src.opsdesk.opsdesk.offices.defaults import DEFAULT_OFFICES
from src.opsdesk.opsdesk.offices.model import Office
from src.opsdesk.opsdesk.payroll.model import MonthlyPayroll
from src.opsdesk.opsdesk.permissions.defaults import DEFAULT_ROLE_PERMISSIONS
from src.opsdesk.opsdesk.teams.model import Team, TeamMember
from src.opsdesk.opsdesk.users.model import User

PASSWORD = "secret123"
PASSWORD_HASH = generate_password_hash(PASSWORD)


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self.users: dict[int, User] = {u.user_id: u for u in users}
        self.role_lookups = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_roles(self, user_ids):
        self.role_lookups += 1
        return {int(i): self.users[int(i)].role for i in user_ids if int(i) in self.users}

    def create_user(self, *, name, email, password_hash, role, team_id=None):
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(
            user_id=user_id, name=name, email=email, password_hash=password_hash, role=Role(role), team_id=team_id
        )
        return user_id

    def set_active(self, user_id, *, is_active):
        user = self.users.get(int(user_id))
        if not user:
            return False
        self.users[int(user_id)] = replace(user, is_active=is_active)
        return True

    def list_users(self):
        return sorted(self.users.values(), key=lambda u: u.user_id)


class InMemoryRolePermissions:
    def __init__(self, matrix: Optional[dict] = None):
        source = DEFAULT_ROLE_PERMISSIONS if matrix is None else matrix
        self.matrix: dict[Role, list[str]] = {Role(r): list(p) for r, p in source.items()}

    def get_permissions(self, role):
        return list(self.matrix.get(Role(role), []))

    def set_permissions(self, role, permissions):
        self.matrix[Role(role)] = list(permissions)

    def list_all(self):
        return {r: list(p) for r, p in self.matrix.items()}


class InMemoryTeams:
    def __init__(self):
        self.teams: dict[int, Team] = {}
        self.members: dict[int, TeamMember] = {}

    def list_led_team_ids(self, user_id):
        return sorted({m.team_id for m in self.members.values() if m.user_id == int(user_id) and m.role == TeamMemberRole.LEAD})

    def list_member_user_ids(self, team_id):
        return [m.user_id for m in self.members.values() if m.team_id == int(team_id)]

    def is_member(self, team_id, user_id):
        return int(user_id) in self.list_member_user_ids(team_id)

    def create_team(self, *, name, description=None):
        team_id = max(self.teams, default=0) + 1
        self.teams[team_id] = Team(team_id=team_id, name=name, description=description)
        return team_id

    def get_team(self, team_id):
        return self.teams.get(int(team_id))

    def list_teams(self):
        return list(self.teams.values())

    def add_member(self, *, team_id, user_id, role):
        for member_id, m in self.members.items():
            if m.team_id == int(team_id) and m.user_id == int(user_id):
                self.members[member_id] = replace(m, role=TeamMemberRole(role))
                return member_id
        member_id = max(self.members, default=0) + 1
        self.members[member_id] = TeamMember(
            member_id=member_id, team_id=int(team_id), user_id=int(user_id), role=TeamMemberRole(role)
        )
        return member_id

    def remove_member(self, *, team_id, user_id):
        for member_id, m in list(self.members.items()):
            if m.team_id == int(team_id) and m.user_id == int(user_id):
                del self.members[member_id]
                return True
        return False

    def list_members(self, team_id):
        return [m for m in self.members.values() if m.team_id == int(team_id)]


class InMemoryOffices:
    def __init__(self, offices: Iterable[Office] = DEFAULT_OFFICES):
        self.offices: dict[str, Office] = {o.office_id: o for o in offices}

    def get_by_id(self, office_id):
        return self.offices.get(office_id)

    def list_offices(self, *, active_only=True):
        return [o for o in self.offices.values() if o.is_active or not active_only]

    def upsert(self, office):
        self.offices[office.office_id] = office


class InMemoryAttendance:
    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        self.records: dict[int, AttendanceRecord] = {r.attendance_id: r for r in records}

    def get_by_id(self, attendance_id):
        return self.records.get(int(attendance_id))

    def get_open_for_user(self, user_id):
        return next((r for r in self.records.values() if r.user_id == int(user_id) and r.is_open), None)

    def get_recent_for_user(self, user_id, limit):
        rows = [r for r in self.records.values() if r.user_id == int(user_id)]
        return sorted(rows, key=lambda r: r.check_in_time, reverse=True)[:limit]

    def list_range(self, *, start, end):
        return sorted(
            (r for r in self.records.values() if start <= r.work_date <= end),
            key=lambda r: r.check_in_time,
            reverse=True,
        )

    def create_checkin(
        self, *, user_id, role, team_id, office_id, work_date, check_in_time, latitude, longitude, within_geofence, reason=None
    ):
        attendance_id = max(self.records, default=0) + 1
        self.records[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            role=role,
            work_date=work_date,
            check_in_time=check_in_time,
            check_in_latitude=latitude,
            check_in_longitude=longitude,
            within_geofence=within_geofence,
            team_id=team_id,
            office_id=office_id,
            reason=reason,
        )
        return attendance_id

    def update_checkout(self, *, attendance_id, check_out_time, latitude, longitude, within_geofence, reason=None):
        record = self.records.get(int(attendance_id))
        if not record or not record.is_open:
            return False
        self.records[record.attendance_id] = replace(
            record,
            check_out_time=check_out_time,
            check_out_latitude=latitude,
            check_out_longitude=longitude,
            check_out_within_geofence=within_geofence,
            check_out_reason=reason,
        )
        return True


class InMemoryAttendanceDays:
    def __init__(self):
        self.days: dict[tuple[int, date], DailyAttendance] = {}

    def upsert_days(self, days):
        count = 0
        for d in days:
            self.days[(d.user_id, d.work_date)] = d
            count += 1
        return count

    def delete_days(self, *, user_id, work_dates, leave_request_id):
        removed = 0
        for day in work_dates:
            key = (int(user_id), day)
            if key in self.days and self.days[key].leave_request_id == int(leave_request_id):
                del self.days[key]
                removed += 1
        return removed

    def list_range(self, *, user_id, start, end):
        return sorted(
            (d for (uid, day), d in self.days.items() if uid == int(user_id) and start <= day <= end),
            key=lambda d: d.work_date,
        )


class InMemoryLeaves:
    def __init__(self):
        self.requests: dict[int, LeaveRequest] = {}

    def create(self, *, user_id, user_name, role, leave_type, start_date, end_date, reason, requested_at):
        request_id = max(self.requests, default=0) + 1
        self.requests[request_id] = LeaveRequest(
            request_id=request_id,
            user_id=user_id,
            user_name=user_name,
            role=role,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            requested_at=requested_at,
        )
        return request_id

    def add(self, request: LeaveRequest) -> LeaveRequest:
        self.requests[request.request_id] = request
        return request

    def get(self, request_id):
        return self.requests.get(int(request_id))

    def list_requests(self, *, user_id=None, status=None, start_from=None, start_to=None):
        rows = [
            r
            for r in self.requests.values()
            if (user_id is None or r.user_id == user_id)
            and (status is None or r.status == status)
            and (start_from is None or r.start_date >= start_from)
            and (start_to is None or r.start_date <= start_to)
        ]
        return sorted(rows, key=lambda r: r.requested_at, reverse=True)

    def decide(self, *, request_id, status, decided_by, decided_at, rejection_reason=None, payment_type=None):
        req = self.requests.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.requests[req.request_id] = replace(
            req,
            status=status,
            decided_by=decided_by,
            decided_at=decided_at,
            rejection_reason=rejection_reason,
            payment_type=payment_type,
        )
        return True

    def delete(self, request_id):
        return self.requests.pop(int(request_id), None) is not None


class InMemoryPayroll:
    def __init__(self):
        self.rows: dict[tuple[int, int, int], MonthlyPayroll] = {}

    def get(self, *, user_id, year, month):
        return self.rows.get((int(user_id), int(year), int(month)))

    def create(self, payroll):
        self.rows[(payroll.user_id, payroll.year, payroll.month)] = payroll

    def update_counters(self, *, user_id, year, month, present_days, leave_days, total_days, updated_at):
        key = (int(user_id), int(year), int(month))
        if key not in self.rows:
            return False
        self.rows[key] = replace(
            self.rows[key],
            present_days=present_days,
            leave_days=leave_days,
            total_days=total_days,
            updated_at=updated_at,
        )
        return True

    def list_month(self, *, year, month):
        return [p for (_, y, m), p in sorted(self.rows.items()) if (y, m) == (int(year), int(month))]

    def list_for_user(self, *, user_id, limit):
        rows = [p for (uid, _, _), p in self.rows.items() if uid == int(user_id)]
        return sorted(rows, key=lambda p: (p.year, p.month), reverse=True)[:limit]


def make_user(user_id: int, role: Role, *, name: Optional[str] = None, team_id=None, is_active=True) -> User:
    return User(
        user_id=user_id,
        name=name or f"User {user_id}",
        email=f"user{user_id}@opsdesk.test",
        password_hash=PASSWORD_HASH,
        role=role,
        team_id=team_id,
        is_active=is_active,
    )


def make_leave(
    request_id: int,
    *,
    user_id: int = 4,
    role: Role = Role.EMPLOYEE,
    start: date = date(2026, 3, 10),
    end: date = date(2026, 3, 12),
    status: LeaveStatus = LeaveStatus.PENDING,
    payment_type=None,
    leave_type="monthly",
    requested_at: Optional[datetime] = None,
) -> LeaveRequest:
    return LeaveRequest(
        request_id=request_id,
        user_id=user_id,
        user_name=f"User {user_id}",
        role=role,
        leave_type=LeaveType(leave_type),
        start_date=start,
        end_date=end,
        reason="Family function out of town",
        status=status,
        requested_at=requested_at or datetime(2026, 3, 1, 9, 0, 0),
        payment_type=payment_type,
    )


# Demo org used by most tests:
#   1 Admin, 2 HR, 3 Team Lead (leads team 1), 4 and 5 Employees in team 1,
#   6 Employee in team 2, 7 Sub-Admin
def demo_users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, Role.ADMIN, name="Admin"),
            make_user(2, Role.HR, name="Hema"),
            make_user(3, Role.TEAM_LEAD, name="Tarun", team_id=1),
            make_user(4, Role.EMPLOYEE, name="Esha", team_id=1),
            make_user(5, Role.EMPLOYEE, name="Eli", team_id=1),
            make_user(6, Role.EMPLOYEE, name="Omar", team_id=2),
            make_user(7, Role.SUB_ADMIN, name="Sam"),
        ]
    )


def demo_teams() -> InMemoryTeams:
    teams = InMemoryTeams()
    t1 = teams.create_team(name="Engineering")
    t2 = teams.create_team(name="Sales")
    teams.add_member(team_id=t1, user_id=3, role=TeamMemberRole.LEAD)
    teams.add_member(team_id=t1, user_id=4, role=TeamMemberRole.MEMBER)
    teams.add_member(team_id=t1, user_id=5, role=TeamMemberRole.MEMBER)
    teams.add_member(team_id=t2, user_id=6, role=TeamMemberRole.MEMBER)
    return teams


def build_fake_container(**overrides) -> Container:
    repos = dict(
        users_repo=demo_users(),
        role_permissions_repo=InMemoryRolePermissions(),
        teams_repo=demo_teams(),
        offices_repo=InMemoryOffices(),
        attendance_repo=InMemoryAttendance(),
        attendance_days_repo=InMemoryAttendanceDays(),
        leaves_repo=InMemoryLeaves(),
        payroll_repo=InMemoryPayroll(),
    )
    repos.update(overrides)
    return assemble(**repos)
