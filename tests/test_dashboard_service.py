# /tests/test_dashboard_service.py

from datetime import datetime

import pytest

from app.core.principal import Principal, Role
from app.models.dashboard_model import NotificationType, Severity
from app.services.dashboard_service import DashboardService, _round2

FIXED_NOW = datetime(2024, 5, 14, 10, 30)


class FakeStats:
    """Returns canned figures and records the student scope each call received."""

    def __init__(self, present=0, attendance=0, overdue=0, non_present=0, low_grades=0, average=None,
                 student_for_user=None, linked=None):
        self.present = present
        self.attendance = attendance
        self.overdue = overdue
        self.non_present = non_present
        self.low_grades = low_grades
        self.average = average
        self.student_for_user = student_for_user or {}
        self.linked = linked or {}
        self.scopes = []

    def get_student_id_for_user(self, user_id):
        return self.student_for_user.get(user_id)

    def get_linked_student_ids(self, user_id):
        return sorted(self.linked.get(user_id, []))

    def count_students(self):
        return 412

    def count_teachers(self):
        return 28

    def count_classes(self):
        return 14

    def count_payments(self, student_ids=None):
        self.scopes.append(student_ids)
        return 9

    def count_overdue_payments(self, before, student_ids=None):
        assert before == datetime(2024, 5, 14)
        self.scopes.append(student_ids)
        return self.overdue

    def count_attendance(self, start, end, student_ids=None, status=None, exclude_status=None):
        assert (start, end) == (datetime(2024, 5, 14), datetime(2024, 5, 15))
        self.scopes.append(student_ids)
        if status == "PRESENT":
            return self.present
        if exclude_status == "PRESENT":
            return self.non_present
        return self.attendance

    def average_grade(self, student_ids=None):
        self.scopes.append(student_ids)
        return self.average

    def count_grades_below(self, threshold, student_ids=None):
        self.scopes.append(student_ids)
        return self.low_grades


def make_service(stats, threshold=70):
    return DashboardService(stats, low_grade_threshold=threshold, clock=lambda: FIXED_NOW)


ADMIN = Principal(id=1, role=Role.ADMIN)
TEACHER = Principal(id=2, role=Role.TEACHER)
STUDENT = Principal(id=30, role=Role.STUDENT)
PARENT = Principal(id=40, role=Role.PARENT)


def test_round2_rounds_half_up():
    assert _round2(0.125) == 0.13
    assert _round2(70) == 70.0
    assert _round2(81.2549) == 81.25


# --- KPIs ---

@pytest.mark.asyncio
async def test_admin_kpis_are_global():
    stats = FakeStats(present=7, attendance=10, overdue=2, average=81.125)
    kpis = await make_service(stats).kpis(ADMIN)

    assert kpis.total_students == 412
    assert kpis.total_teachers == 28
    assert kpis.total_classes == 14
    assert kpis.total_payments == 9
    assert kpis.attendance_rate_today == 70.0
    assert kpis.overdue_payments == 2
    assert kpis.average_grade == 81.13
    assert all(scope is None for scope in stats.scopes)


@pytest.mark.asyncio
async def test_teacher_kpis_are_unscoped():
    stats = FakeStats(attendance=3, present=3)
    kpis = await make_service(stats).kpis(TEACHER)
    assert kpis.total_students == 412
    assert kpis.attendance_rate_today == 100.0
    assert all(scope is None for scope in stats.scopes)


@pytest.mark.asyncio
async def test_no_attendance_today_gives_zero_rate():
    kpis = await make_service(FakeStats()).kpis(ADMIN)
    assert kpis.attendance_today == 0
    assert kpis.attendance_rate_today == 0
    assert kpis.average_grade == 0


@pytest.mark.asyncio
async def test_student_kpis_are_limited_to_own_record():
    stats = FakeStats(present=1, attendance=1, average=90, student_for_user={30: 10})
    kpis = await make_service(stats).kpis(STUDENT)

    assert kpis.total_students == 1
    assert kpis.total_teachers == 0
    assert kpis.total_classes == 0
    assert kpis.attendance_rate_today == 100.0
    assert all(scope == [10] for scope in stats.scopes)


@pytest.mark.asyncio
async def test_student_without_record_gets_all_zero_snapshot():
    stats = FakeStats(present=5, attendance=5)
    kpis = await make_service(stats).kpis(STUDENT)
    assert kpis.model_dump() == {key: 0 for key in kpis.model_dump()}
    assert stats.scopes == []


@pytest.mark.asyncio
async def test_parent_kpis_count_linked_children():
    stats = FakeStats(linked={40: [20, 10]})
    kpis = await make_service(stats).kpis(PARENT)
    assert kpis.total_students == 2
    assert all(scope == [10, 20] for scope in stats.scopes)


@pytest.mark.asyncio
async def test_parent_without_links_gets_all_zero_snapshot():
    kpis = await make_service(FakeStats()).kpis(PARENT)
    assert kpis.total_students == 0
    assert kpis.total_payments == 0


@pytest.mark.asyncio
async def test_first_failing_count_fails_the_whole_call():
    class BrokenStats(FakeStats):
        def count_payments(self, student_ids=None):
            raise RuntimeError("connection reset")

    with pytest.raises(RuntimeError, match="connection reset"):
        await make_service(BrokenStats()).kpis(ADMIN)


# --- Notifications ---

@pytest.mark.asyncio
async def test_single_attendance_alert():
    stats = FakeStats(non_present=3)
    result = await make_service(stats).notifications(ADMIN)

    assert result.total == 1
    item = result.items[0]
    assert item.type is NotificationType.ATTENDANCE_ALERT
    assert item.severity is Severity.MEDIUM
    assert item.count == 3
    assert item.link == "/dashboard/attendance"


@pytest.mark.asyncio
async def test_notifications_keep_fixed_order_and_severities():
    stats = FakeStats(overdue=1, non_present=2, low_grades=4)
    result = await make_service(stats, threshold=75).notifications(ADMIN)

    assert [item.type for item in result.items] == [
        NotificationType.PAYMENT_OVERDUE,
        NotificationType.ATTENDANCE_ALERT,
        NotificationType.GRADE_ALERT,
    ]
    assert [item.severity for item in result.items] == [Severity.HIGH, Severity.MEDIUM, Severity.MEDIUM]
    assert [item.id for item in result.items] == ["payment-overdue", "attendance-alert", "grade-alert"]
    assert "75" in result.items[2].message


@pytest.mark.asyncio
async def test_no_alerts_gives_empty_list():
    result = await make_service(FakeStats()).notifications(ADMIN)
    assert result.total == 0
    assert result.items == []


@pytest.mark.asyncio
async def test_parent_notifications_are_scoped_to_linked_children():
    stats = FakeStats(overdue=1, linked={40: [10]})
    result = await make_service(stats).notifications(PARENT)
    assert result.total == 1
    assert all(scope == [10] for scope in stats.scopes)


@pytest.mark.asyncio
async def test_student_without_record_gets_no_notifications():
    stats = FakeStats(overdue=4)
    result = await make_service(stats).notifications(STUDENT)
    assert result.total == 0
    assert stats.scopes == []
