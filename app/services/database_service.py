# /app/services/database_service.py

"""
The `DatabaseService` facade: one object per request that exposes every data
access operation the services and routers need, delegating to the specialist
SQL repositories. It owns no logic of its own.
"""

from typing import Dict, Generator, Iterable, List, Optional, Set, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.roster_repository_sql import RosterRepositorySQL
from .database_helpers.record_repository_sql import RecordRepositorySQL
from .database_helpers.audit_repository_sql import AuditRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.roster_repo = RosterRepositorySQL(db_session)
        self.record_repo = RecordRepositorySQL(db_session)
        self.audit_repo = AuditRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: int): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_username(self, username: str): return self.user_repo.get_user_by_username(username)
    def find_user_by_username_or_email(self, username: str, email: str): return self.user_repo.find_user_by_username_or_email(username, email)
    def add_user(self, record: Dict): return self.user_repo.add_user(record)
    def get_users(self, role: Optional[str] = None) -> List: return self.user_repo.get_users(role)

    # --- SCHOOL STRUCTURE METHODS (DELEGATED) ---
    def get_all_schools(self) -> List: return self.roster_repo.get_all_schools()
    def get_school_by_id(self, school_id: int): return self.roster_repo.get_school_by_id(school_id)
    def add_school(self, record: Dict): return self.roster_repo.add_school(record)
    def update_school(self, school, data: Dict): return self.roster_repo.update_school(school, data)
    def delete_school(self, school): self.roster_repo.delete_school(school)
    def get_all_classes(self) -> List: return self.roster_repo.get_all_classes()
    def get_class_by_id(self, class_id: int): return self.roster_repo.get_class_by_id(class_id)
    def add_class(self, record: Dict): return self.roster_repo.add_class(record)
    def update_class(self, school_class, data: Dict): return self.roster_repo.update_class(school_class, data)
    def delete_class(self, school_class): self.roster_repo.delete_class(school_class)
    def get_all_subjects(self) -> List: return self.roster_repo.get_all_subjects()
    def get_subject_by_id(self, subject_id: int): return self.roster_repo.get_subject_by_id(subject_id)
    def add_subject(self, record: Dict): return self.roster_repo.add_subject(record)
    def update_subject(self, subject, data: Dict): return self.roster_repo.update_subject(subject, data)
    def delete_subject(self, subject): self.roster_repo.delete_subject(subject)
    def get_all_schedules(self) -> List: return self.roster_repo.get_all_schedules()
    def get_schedule_by_id(self, schedule_id: int): return self.roster_repo.get_schedule_by_id(schedule_id)
    def add_schedule(self, record: Dict): return self.roster_repo.add_schedule(record)
    def delete_schedule(self, schedule): self.roster_repo.delete_schedule(schedule)

    # --- PEOPLE METHODS (DELEGATED) ---
    def get_all_teachers(self) -> List: return self.roster_repo.get_all_teachers()
    def get_teacher_by_id(self, teacher_id: int): return self.roster_repo.get_teacher_by_id(teacher_id)
    def add_teacher(self, record: Dict): return self.roster_repo.add_teacher(record)
    def update_teacher(self, teacher, data: Dict): return self.roster_repo.update_teacher(teacher, data)
    def delete_teacher(self, teacher): self.roster_repo.delete_teacher(teacher)
    def get_all_students(self) -> List: return self.roster_repo.get_all_students()
    def get_student_by_id(self, student_id: int): return self.roster_repo.get_student_by_id(student_id)
    def add_student(self, record: Dict): return self.roster_repo.add_student(record)
    def update_student(self, student, data: Dict): return self.roster_repo.update_student(student, data)
    def delete_student(self, student): self.roster_repo.delete_student(student)
    def get_all_parents(self) -> List: return self.roster_repo.get_all_parents()
    def get_parent_by_id(self, parent_id: int): return self.roster_repo.get_parent_by_id(parent_id)
    def add_parent(self, record: Dict, student_ids: Iterable[int]): return self.roster_repo.add_parent(record, student_ids)
    def delete_parent(self, parent): self.roster_repo.delete_parent(parent)

    # --- OWNERSHIP LOOKUPS (used by the scope resolver) ---
    def get_teacher_by_user_id(self, user_id: int): return self.roster_repo.get_teacher_by_user_id(user_id)
    def get_student_by_user_id(self, user_id: int): return self.roster_repo.get_student_by_user_id(user_id)
    def teacher_has_schedule_for_class(self, teacher_id: int, class_id: int) -> bool: return self.roster_repo.teacher_has_schedule_for_class(teacher_id, class_id)
    def get_class_ids_for_teacher(self, teacher_id: int) -> Set[int]: return self.roster_repo.get_class_ids_for_teacher(teacher_id)
    def get_student_class_map(self, student_ids: Iterable[int]) -> Dict[int, int]: return self.roster_repo.get_student_class_map(student_ids)
    def get_linked_student_ids(self, user_id: int) -> Set[int]: return self.roster_repo.get_linked_student_ids(user_id)

    # --- GRADE, ATTENDANCE & PAYMENT METHODS (DELEGATED) ---
    def get_all_grades(self) -> List: return self.record_repo.get_all_grades()
    def get_grades_by_student_id(self, student_id: int) -> List: return self.record_repo.get_grades_by_student_id(student_id)
    def get_grades_by_subject_id(self, subject_id: int) -> List: return self.record_repo.get_grades_by_subject_id(subject_id)
    def get_grade_by_id(self, grade_id: int): return self.record_repo.get_grade_by_id(grade_id)
    def find_grade(self, student_id: int, subject_id: int, term: str, academic_year: str): return self.record_repo.find_grade(student_id, subject_id, term, academic_year)
    def add_grade(self, record: Dict): return self.record_repo.add_grade(record)
    def update_grade(self, grade, data: Dict): return self.record_repo.update_grade(grade, data)
    def delete_grade(self, grade): self.record_repo.delete_grade(grade)
    def get_all_attendances(self) -> List: return self.record_repo.get_all_attendances()
    def get_attendances_by_student_id(self, student_id: int) -> List: return self.record_repo.get_attendances_by_student_id(student_id)
    def get_attendance_by_id(self, attendance_id: int): return self.record_repo.get_attendance_by_id(attendance_id)
    def add_attendance(self, record: Dict): return self.record_repo.add_attendance(record)
    def update_attendance(self, attendance, data: Dict): return self.record_repo.update_attendance(attendance, data)
    def delete_attendance(self, attendance): self.record_repo.delete_attendance(attendance)
    def get_all_payments(self) -> List: return self.record_repo.get_all_payments()
    def get_payments_by_student_id(self, student_id: int) -> List: return self.record_repo.get_payments_by_student_id(student_id)
    def get_payment_by_id(self, payment_id: int): return self.record_repo.get_payment_by_id(payment_id)
    def add_payment(self, record: Dict): return self.record_repo.add_payment(record)
    def update_payment(self, payment, data: Dict): return self.record_repo.update_payment(payment, data)
    def delete_payment(self, payment): self.record_repo.delete_payment(payment)

    # --- AUDIT LOG METHODS (DELEGATED) ---
    def add_audit_entry(self, record: Dict): return self.audit_repo.add_entry(record)
    def get_audit_entries(self, page: int, page_size: int, method: Optional[str] = None, path: Optional[str] = None, user_id: Optional[int] = None) -> Tuple[List, int]:
        return self.audit_repo.get_entries(page, page_size, method=method, path=path, user_id=user_id)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a request-scoped DatabaseService."""
    yield DatabaseService(db_session=db)
