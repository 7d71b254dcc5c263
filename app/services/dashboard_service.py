# /app/services/dashboard_service.py

"""
The aggregation engine behind the dashboard KPIs and the notification feed.

Both operations start from the requesting principal and shape their input
set first: students are limited to their own record and parents to their
linked children before any counting query runs. Admins and teachers get the
unscoped, school-wide view. Teachers are deliberately *not* narrowed to the
classes they teach here, which differs from the per-record scope rules; see
DESIGN.md before changing it.

All counts needed for one response are independent, so they run concurrently
on worker threads and are joined before the result is composed. The first
failing count fails the whole call; a partial snapshot is never returned.
"""

import asyncio
import math
from datetime import datetime, timedelta
from functools import partial
from typing import Callable, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.principal import Principal, Role
from app.db.database import get_session_factory
from app.models.dashboard_model import (
    KpiSnapshot,
    NotificationItem,
    NotificationList,
    NotificationType,
    Severity,
)
from app.models.record_model import AttendanceStatus
from .database_helpers.stats_repository_sql import StatsRepositorySQL


def _round2(value: float) -> float:
    """Rounds half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


async def _run_concurrently(*calls: Callable) -> List:
    return list(await asyncio.gather(*(asyncio.to_thread(call) for call in calls)))


class DashboardService:
    def __init__(
        self,
        stats: StatsRepositorySQL,
        low_grade_threshold: float = settings.low_grade_threshold,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.stats = stats
        self.low_grade_threshold = low_grade_threshold
        self._clock = clock

    # --- Scope & Time Window ---

    async def _scoped_student_ids(self, principal: Principal) -> Optional[List[int]]:
        """None means unscoped; an empty list means the principal owns no students."""
        if principal.role is Role.STUDENT:
            student_id = await asyncio.to_thread(self.stats.get_student_id_for_user, principal.id)
            return [student_id] if student_id is not None else []
        if principal.role is Role.PARENT:
            return list(await asyncio.to_thread(self.stats.get_linked_student_ids, principal.id))
        return None

    def _today_window(self) -> Tuple[datetime, datetime]:
        now = self._clock()
        start_of_today = datetime(now.year, now.month, now.day)
        return start_of_today, start_of_today + timedelta(days=1)

    # --- KPIs ---

    async def kpis(self, principal: Principal) -> KpiSnapshot:
        start_of_today, start_of_tomorrow = self._today_window()
        student_ids = await self._scoped_student_ids(principal)
        if student_ids is not None and not student_ids:
            return KpiSnapshot()

        stats = self.stats
        scoped_calls = [
            partial(stats.count_attendance, start_of_today, start_of_tomorrow, student_ids),
            partial(stats.count_attendance, start_of_today, start_of_tomorrow, student_ids, status=AttendanceStatus.PRESENT.value),
            partial(stats.count_payments, student_ids),
            partial(stats.count_overdue_payments, start_of_today, student_ids),
            partial(stats.average_grade, student_ids),
        ]

        if student_ids is None:
            results = await _run_concurrently(stats.count_students, stats.count_teachers, stats.count_classes, *scoped_calls)
            total_students, total_teachers, total_classes = results[:3]
            scoped_results = results[3:]
        else:
            scoped_results = await _run_concurrently(*scoped_calls)
            total_students = 1 if principal.role is Role.STUDENT else len(student_ids)
            total_teachers = total_classes = 0

        attendance_today, attendance_present_today, total_payments, overdue_payments, average_grade = scoped_results

        return KpiSnapshot(
            total_students=total_students,
            total_teachers=total_teachers,
            total_classes=total_classes,
            total_payments=total_payments,
            attendance_today=attendance_today,
            attendance_present_today=attendance_present_today,
            attendance_rate_today=_round2(attendance_present_today * 100 / attendance_today) if attendance_today > 0 else 0,
            overdue_payments=overdue_payments,
            average_grade=_round2(average_grade) if average_grade else 0,
        )

    # --- Notifications ---

    async def notifications(self, principal: Principal) -> NotificationList:
        start_of_today, start_of_tomorrow = self._today_window()
        student_ids = await self._scoped_student_ids(principal)
        if student_ids is not None and not student_ids:
            return NotificationList(total=0, items=[])

        overdue_payments, attendance_alerts, grade_alerts = await _run_concurrently(
            partial(self.stats.count_overdue_payments, start_of_today, student_ids),
            partial(
                self.stats.count_attendance, start_of_today, start_of_tomorrow, student_ids,
                exclude_status=AttendanceStatus.PRESENT.value,
            ),
            partial(self.stats.count_grades_below, self.low_grade_threshold, student_ids),
        )

        # Insertion order is the display order: payments, attendance, grades.
        items: List[NotificationItem] = []
        if overdue_payments > 0:
            items.append(NotificationItem(
                id="payment-overdue",
                type=NotificationType.PAYMENT_OVERDUE,
                severity=Severity.HIGH,
                title="Overdue payments",
                message=f"{overdue_payments} payment(s) are past their due date.",
                count=overdue_payments,
                link="/dashboard/payments",
            ))
        if attendance_alerts > 0:
            items.append(NotificationItem(
                id="attendance-alert",
                type=NotificationType.ATTENDANCE_ALERT,
                severity=Severity.MEDIUM,
                title="Attendance alert for today",
                message=f"{attendance_alerts} non-present attendance record(s) today.",
                count=attendance_alerts,
                link="/dashboard/attendance",
            ))
        if grade_alerts > 0:
            items.append(NotificationItem(
                id="grade-alert",
                type=NotificationType.GRADE_ALERT,
                severity=Severity.MEDIUM,
                title="Grades below threshold",
                message=f"{grade_alerts} grade(s) are below {self.low_grade_threshold:g}.",
                count=grade_alerts,
                link="/dashboard/grades",
            ))

        return NotificationList(total=len(items), items=items)


# --- DEPENDENCY PROVIDER ---
def get_dashboard_service(session_factory: sessionmaker = Depends(get_session_factory)) -> DashboardService:
    return DashboardService(StatsRepositorySQL(session_factory))
