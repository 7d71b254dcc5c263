# /app/services/database_helpers/record_repository_sql.py

"""
Raw SQLAlchemy queries for grades, attendance and payments.

These queries are deliberately unscoped: deciding which rows a principal may
see is the job of the scope resolver, applied by the record service after the
rows are fetched.
"""

from typing import Dict, List, Optional

from sqlalchemy.orm import joinedload

from app.db.models.people_models import Student
from app.db.models.record_models import Grade, Attendance, Payment
from .base_repository_sql import BaseRepositorySQL


class RecordRepositorySQL(BaseRepositorySQL):

    # --- Grade Methods ---

    def get_all_grades(self) -> List[Grade]:
        return self.db.query(Grade).order_by(Grade.created_at.desc(), Grade.id.desc()).all()

    def get_grades_by_student_id(self, student_id: int) -> List[Grade]:
        return (
            self.db.query(Grade)
            .options(joinedload(Grade.subject), joinedload(Grade.teacher))
            .filter(Grade.student_id == student_id)
            .order_by(Grade.created_at.desc(), Grade.id.desc())
            .all()
        )

    def get_grades_by_subject_id(self, subject_id: int) -> List[Grade]:
        return (
            self.db.query(Grade)
            .join(Student, Student.id == Grade.student_id)
            .filter(Grade.subject_id == subject_id)
            .order_by(Student.name.asc())
            .all()
        )

    def get_grade_by_id(self, grade_id: int) -> Optional[Grade]:
        return self.db.query(Grade).filter(Grade.id == grade_id).first()

    def find_grade(self, student_id: int, subject_id: int, term: str, academic_year: str) -> Optional[Grade]:
        return (
            self.db.query(Grade)
            .filter(
                Grade.student_id == student_id,
                Grade.subject_id == subject_id,
                Grade.term == term,
                Grade.academic_year == academic_year,
            )
            .first()
        )

    def add_grade(self, record: Dict) -> Grade:
        return self._add(Grade(**record))

    def update_grade(self, grade: Grade, data: Dict) -> Grade:
        return self._update(grade, data)

    def delete_grade(self, grade: Grade) -> None:
        self._delete(grade)

    # --- Attendance Methods ---

    def get_all_attendances(self) -> List[Attendance]:
        return self.db.query(Attendance).order_by(Attendance.date.desc(), Attendance.id.desc()).all()

    def get_attendances_by_student_id(self, student_id: int) -> List[Attendance]:
        return (
            self.db.query(Attendance)
            .filter(Attendance.student_id == student_id)
            .order_by(Attendance.date.desc(), Attendance.id.desc())
            .all()
        )

    def get_attendance_by_id(self, attendance_id: int) -> Optional[Attendance]:
        return self.db.query(Attendance).filter(Attendance.id == attendance_id).first()

    def add_attendance(self, record: Dict) -> Attendance:
        return self._add(Attendance(**record))

    def update_attendance(self, attendance: Attendance, data: Dict) -> Attendance:
        return self._update(attendance, data)

    def delete_attendance(self, attendance: Attendance) -> None:
        self._delete(attendance)

    # --- Payment Methods ---

    def get_all_payments(self) -> List[Payment]:
        return self.db.query(Payment).order_by(Payment.created_at.desc(), Payment.id.desc()).all()

    def get_payments_by_student_id(self, student_id: int) -> List[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.student_id == student_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    def get_payment_by_id(self, payment_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def add_payment(self, record: Dict) -> Payment:
        return self._add(Payment(**record))

    def update_payment(self, payment: Payment, data: Dict) -> Payment:
        return self._update(payment, data)

    def delete_payment(self, payment: Payment) -> None:
        self._delete(payment)
