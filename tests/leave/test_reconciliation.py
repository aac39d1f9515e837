from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.opsdesk.opsdesk.core.enums import DayStatus, LeavePaymentType, LeaveStatus
from src.opsdesk.opsdesk.leave.reconciliation import LeaveAttendanceService, day_status_for
from src.opsdesk.opsdesk.payroll.model import MonthlyPayroll

from tests.fakes import InMemoryAttendanceDays, InMemoryPayroll, make_leave

NOW = datetime(2026, 3, 5, 12, 0, 0)


@pytest.fixture
def repos():
    return InMemoryAttendanceDays(), InMemoryPayroll()


@pytest.fixture
def svc(repos):
    days, payroll = repos
    return LeaveAttendanceService(days, payroll, clock=lambda: NOW)


def _counters(payroll, user_id=4, year=2026, month=3):
    p = payroll.get(user_id=user_id, year=year, month=month)
    return (p.present_days, p.leave_days, p.total_days) if p else None


def test_day_status_for_payment_type():
    assert day_status_for(LeavePaymentType.PAID) == DayStatus.PRESENT
    assert day_status_for("unpaid") == DayStatus.LEAVE


def test_paid_leave_books_present_days_and_new_payroll(svc, repos):
    days, payroll = repos
    leave = make_leave(11, start=date(2026, 3, 10), end=date(2026, 3, 12))

    svc.update_attendance_for_leave(leave, LeavePaymentType.PAID)

    booked = days.list_range(user_id=4, start=date(2026, 3, 1), end=date(2026, 3, 31))
    assert [d.work_date.day for d in booked] == [10, 11, 12]
    assert all(d.status == DayStatus.PRESENT and d.leave_request_id == 11 for d in booked)
    assert all(d.payment_type == LeavePaymentType.PAID and d.updated_at == NOW for d in booked)
    assert _counters(payroll) == (3, 0, 3)


def test_unpaid_leave_adds_to_existing_payroll(svc, repos):
    days, payroll = repos
    payroll.create(MonthlyPayroll(user_id=4, year=2026, month=3, present_days=5, leave_days=1, total_days=6))

    svc.update_attendance_for_leave(make_leave(12, start=date(2026, 3, 20), end=date(2026, 3, 21)), "unpaid")

    assert {d.status for d in days.days.values()} == {DayStatus.LEAVE}
    assert _counters(payroll) == (5, 3, 8)


def test_span_across_months_books_to_start_month(svc, repos):
    days, payroll = repos
    leave = make_leave(13, start=date(2026, 3, 30), end=date(2026, 4, 2))

    svc.update_attendance_for_leave(leave, LeavePaymentType.PAID)

    assert len(days.days) == 4
    assert _counters(payroll) == (4, 0, 4)
    assert _counters(payroll, month=4) is None


def test_revert_approved_leave_undoes_both(svc, repos):
    days, payroll = repos
    leave = make_leave(14, start=date(2026, 3, 10), end=date(2026, 3, 11))
    payroll.create(MonthlyPayroll(user_id=4, year=2026, month=3, present_days=4, leave_days=0, total_days=4))

    svc.update_attendance_for_leave(leave, LeavePaymentType.PAID)
    assert _counters(payroll) == (6, 0, 6)

    approved = replace(leave, status=LeaveStatus.APPROVED, payment_type=LeavePaymentType.PAID)
    svc.revert_attendance_for_leave(approved)

    assert days.days == {}
    assert _counters(payroll) == (4, 0, 4)


def test_revert_of_pending_leave_only_deletes_days(svc, repos):
    days, payroll = repos
    payroll.create(MonthlyPayroll(user_id=4, year=2026, month=3, present_days=4, leave_days=2, total_days=6))
    leave = make_leave(15, start=date(2026, 3, 10), end=date(2026, 3, 10))
    svc.update_attendance_for_leave(leave, LeavePaymentType.UNPAID)

    svc.revert_attendance_for_leave(leave)

    assert days.days == {}
    assert _counters(payroll) == (4, 3, 7)


def test_revert_clamps_at_zero(svc, repos):
    _, payroll = repos
    payroll.create(MonthlyPayroll(user_id=4, year=2026, month=3, present_days=1, leave_days=0, total_days=1))
    leave = make_leave(
        16,
        start=date(2026, 3, 10),
        end=date(2026, 3, 14),
        status=LeaveStatus.APPROVED,
        payment_type=LeavePaymentType.PAID,
    )

    svc.revert_payroll_for_leave(leave)

    assert _counters(payroll) == (0, 0, 0)


def test_revert_unpaid_touches_leave_counter_only(svc, repos):
    _, payroll = repos
    payroll.create(MonthlyPayroll(user_id=4, year=2026, month=3, present_days=7, leave_days=3, total_days=10))
    leave = make_leave(
        17,
        start=date(2026, 3, 10),
        end=date(2026, 3, 11),
        status=LeaveStatus.APPROVED,
        payment_type=LeavePaymentType.UNPAID,
    )

    svc.revert_payroll_for_leave(leave)

    assert _counters(payroll) == (7, 1, 8)


def test_revert_without_payroll_row_is_noop(svc, repos):
    _, payroll = repos
    leave = make_leave(18, status=LeaveStatus.APPROVED, payment_type=LeavePaymentType.PAID)
    svc.revert_attendance_for_leave(leave)
    assert payroll.rows == {}


def test_applying_twice_double_counts(svc, repos):
    _, payroll = repos
    leave = make_leave(19, start=date(2026, 3, 10), end=date(2026, 3, 11))

    svc.update_attendance_for_leave(leave, LeavePaymentType.PAID)
    svc.update_attendance_for_leave(leave, LeavePaymentType.PAID)

    assert _counters(payroll) == (4, 0, 4)


def test_revert_leaves_other_leaves_days_alone(svc, repos):
    days, _ = repos
    svc.update_attendance_for_leave(make_leave(20, start=date(2026, 3, 10), end=date(2026, 3, 12)), "paid")
    overlapping = make_leave(21, start=date(2026, 3, 11), end=date(2026, 3, 13))

    svc.revert_attendance_for_leave(overlapping)

    kept = days.list_range(user_id=4, start=date(2026, 3, 1), end=date(2026, 3, 31))
    assert [(d.work_date.day, d.leave_request_id) for d in kept] == [(10, 20), (11, 20), (12, 20)]
