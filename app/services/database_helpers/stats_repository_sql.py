# /app/services/database_helpers/stats_repository_sql.py

"""
Counting and averaging queries behind the dashboard KPIs and notifications.

Unlike the other repositories this one is built on a session *factory*: the
aggregation service runs several of these methods at the same time on worker
threads, and a SQLAlchemy session must never be shared between threads. Every
method therefore opens, uses and closes its own session.

`student_ids=None` means "unscoped"; an empty collection means "no students"
and short-circuits to zero without touching the database.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from app.db.models.school_models import SchoolClass
from app.db.models.people_models import Teacher, Student, Parent, parent_students
from app.db.models.record_models import Grade, Attendance, Payment


class StatsRepositorySQL:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # --- Scope Lookups ---

    def get_student_id_for_user(self, user_id: int) -> Optional[int]:
        with self._session_factory() as db:
            row = db.query(Student.id).filter(Student.user_id == user_id).first()
            return row[0] if row else None

    def get_linked_student_ids(self, user_id: int) -> List[int]:
        with self._session_factory() as db:
            rows = (
                db.query(parent_students.c.student_id)
                .join(Parent, Parent.id == parent_students.c.parent_id)
                .filter(Parent.user_id == user_id)
                .all()
            )
            return sorted(row[0] for row in rows)

    # --- Global Counts ---

    def count_students(self) -> int:
        with self._session_factory() as db:
            return db.query(Student).count()

    def count_teachers(self) -> int:
        with self._session_factory() as db:
            return db.query(Teacher).count()

    def count_classes(self) -> int:
        with self._session_factory() as db:
            return db.query(SchoolClass).count()

    # --- Scopable Counts ---

    def count_payments(self, student_ids: Optional[Iterable[int]] = None) -> int:
        ids = None if student_ids is None else list(student_ids)
        if ids == []:
            return 0
        with self._session_factory() as db:
            query = db.query(Payment)
            if ids is not None:
                query = query.filter(Payment.student_id.in_(ids))
            return query.count()

    def count_overdue_payments(self, before: datetime, student_ids: Optional[Iterable[int]] = None) -> int:
        """Payments not yet paid whose due date lies before `before`."""
        ids = None if student_ids is None else list(student_ids)
        if ids == []:
            return 0
        with self._session_factory() as db:
            query = db.query(Payment).filter(Payment.status != "PAID", Payment.due_date < before)
            if ids is not None:
                query = query.filter(Payment.student_id.in_(ids))
            return query.count()

    def count_attendance(
        self,
        start: datetime,
        end: datetime,
        student_ids: Optional[Iterable[int]] = None,
        status: Optional[str] = None,
        exclude_status: Optional[str] = None,
    ) -> int:
        """Attendance rows dated in `[start, end)`, optionally filtered by status."""
        ids = None if student_ids is None else list(student_ids)
        if ids == []:
            return 0
        with self._session_factory() as db:
            query = db.query(Attendance).filter(Attendance.date >= start, Attendance.date < end)
            if status is not None:
                query = query.filter(Attendance.status == status)
            if exclude_status is not None:
                query = query.filter(Attendance.status != exclude_status)
            if ids is not None:
                query = query.filter(Attendance.student_id.in_(ids))
            return query.count()

    def average_grade(self, student_ids: Optional[Iterable[int]] = None) -> Optional[float]:
        ids = None if student_ids is None else list(student_ids)
        if ids == []:
            return None
        with self._session_factory() as db:
            query = db.query(func.avg(Grade.score))
            if ids is not None:
                query = query.filter(Grade.student_id.in_(ids))
            value = query.scalar()
            return float(value) if value is not None else None

    def count_grades_below(self, threshold: float, student_ids: Optional[Iterable[int]] = None) -> int:
        ids = None if student_ids is None else list(student_ids)
        if ids == []:
            return 0
        with self._session_factory() as db:
            query = db.query(Grade).filter(Grade.score < threshold)
            if ids is not None:
                query = query.filter(Grade.student_id.in_(ids))
            return query.count()
