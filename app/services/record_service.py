# /app/services/record_service.py

"""
Business logic for grades, attendance and payments: the endpoints where the
scope resolver does its real work.

Every operation follows the same order. The target row (or, for creates, the
referenced student) is fetched first and a missing row raises `NotFound`;
only then is the scope resolver asked, and a miss raises `Forbidden`. List
operations fetch rows unscoped and keep only those whose student passes
`filter_ids` for the principal.
"""

from typing import Iterable, List

from app.core.errors import BadRequest, Conflict, Forbidden, NotFound
from app.core.principal import Principal, Role
from app.models import record_model
from .access_helpers.resources import Action, AttendanceRef, GradeRef, PaymentRef, StudentRef
from .access_helpers.scope_resolver import ScopeResolver
from .database_service import DatabaseService


# --- Shared Helpers ---

def _require_student(db: DatabaseService, student_id: int):
    student = db.get_student_by_id(student_id)
    if student is None:
        raise NotFound("Student not found")
    return student


def _visible_rows(scope: ScopeResolver, principal: Principal, rows: Iterable) -> List:
    rows = list(rows)
    allowed = scope.filter_ids(principal, {row.student_id for row in rows})
    return [row for row in rows if row.student_id in allowed]


def _rows_for_student(db: DatabaseService, scope: ScopeResolver, principal: Principal, student_id: int, fetch) -> List:
    _require_student(db, student_id)
    scope.ensure_in_scope(principal, StudentRef(student_id), Action.VIEW)
    return fetch(student_id)


# --- Grades ---

def list_grades(db: DatabaseService, scope: ScopeResolver, principal: Principal) -> List:
    return _visible_rows(scope, principal, db.get_all_grades())


def list_grades_for_subject(db: DatabaseService, scope: ScopeResolver, principal: Principal, subject_id: int) -> List:
    if db.get_subject_by_id(subject_id) is None:
        raise NotFound("Subject not found")
    return _visible_rows(scope, principal, db.get_grades_by_subject_id(subject_id))


def list_grades_for_student(db: DatabaseService, scope: ScopeResolver, principal: Principal, student_id: int) -> List:
    return _rows_for_student(db, scope, principal, student_id, db.get_grades_by_student_id)


def _grade_author(db: DatabaseService, principal: Principal, requested_teacher_id) -> int:
    """
    Teachers always record grades as themselves; admins must name the teacher.
    """
    if principal.role is Role.TEACHER:
        own = db.get_teacher_by_user_id(principal.id)
        if own is None:
            raise Forbidden()
        if requested_teacher_id is not None and requested_teacher_id != own.id:
            raise Forbidden()
        return own.id

    if requested_teacher_id is None:
        raise BadRequest("teacherId is required")
    if db.get_teacher_by_id(requested_teacher_id) is None:
        raise NotFound("Teacher not found")
    return requested_teacher_id


def create_grade(db: DatabaseService, scope: ScopeResolver, principal: Principal, payload: record_model.GradeCreate):
    _require_student(db, payload.student_id)
    if db.get_subject_by_id(payload.subject_id) is None:
        raise NotFound("Subject not found")

    teacher_id = _grade_author(db, principal, payload.teacher_id)
    scope.ensure_in_scope(principal, GradeRef(None, payload.student_id, teacher_id), Action.CREATE)

    if db.find_grade(payload.student_id, payload.subject_id, payload.term, payload.academic_year):
        raise Conflict(message="A grade for this student, subject and term already exists")

    record = payload.model_dump()
    record["teacher_id"] = teacher_id
    return db.add_grade(record)


def _require_grade(db: DatabaseService, grade_id: int):
    grade = db.get_grade_by_id(grade_id)
    if grade is None:
        raise NotFound("Grade not found")
    return grade


def update_grade(db: DatabaseService, scope: ScopeResolver, principal: Principal, grade_id: int, payload: record_model.GradeUpdate):
    grade = _require_grade(db, grade_id)
    scope.ensure_in_scope(principal, GradeRef(grade.id, grade.student_id, grade.teacher_id), Action.MODIFY)
    return db.update_grade(grade, {"score": payload.score})


def delete_grade(db: DatabaseService, scope: ScopeResolver, principal: Principal, grade_id: int) -> None:
    grade = _require_grade(db, grade_id)
    scope.ensure_in_scope(principal, GradeRef(grade.id, grade.student_id, grade.teacher_id), Action.MODIFY)
    db.delete_grade(grade)


# --- Attendance ---

def list_attendances(db: DatabaseService, scope: ScopeResolver, principal: Principal) -> List:
    return _visible_rows(scope, principal, db.get_all_attendances())


def list_attendances_for_student(db: DatabaseService, scope: ScopeResolver, principal: Principal, student_id: int) -> List:
    return _rows_for_student(db, scope, principal, student_id, db.get_attendances_by_student_id)


def create_attendance(db: DatabaseService, scope: ScopeResolver, principal: Principal, payload: record_model.AttendanceCreate):
    _require_student(db, payload.student_id)
    scope.ensure_in_scope(principal, AttendanceRef(None, payload.student_id), Action.CREATE)
    record = payload.model_dump()
    record["status"] = payload.status.value
    return db.add_attendance(record)


def _require_attendance(db: DatabaseService, attendance_id: int):
    attendance = db.get_attendance_by_id(attendance_id)
    if attendance is None:
        raise NotFound("Attendance not found")
    return attendance


def update_attendance(db: DatabaseService, scope: ScopeResolver, principal: Principal, attendance_id: int, payload: record_model.AttendanceUpdate):
    attendance = _require_attendance(db, attendance_id)
    scope.ensure_in_scope(principal, AttendanceRef(attendance.id, attendance.student_id), Action.MODIFY)

    update_data = payload.model_dump(exclude_unset=True)
    if not update_data:
        raise BadRequest("No update data provided.")
    if update_data.get("status") is not None:
        update_data["status"] = payload.status.value
    return db.update_attendance(attendance, update_data)


def delete_attendance(db: DatabaseService, scope: ScopeResolver, principal: Principal, attendance_id: int) -> None:
    attendance = _require_attendance(db, attendance_id)
    scope.ensure_in_scope(principal, AttendanceRef(attendance.id, attendance.student_id), Action.MODIFY)
    db.delete_attendance(attendance)


# --- Payments ---

def list_payments(db: DatabaseService, scope: ScopeResolver, principal: Principal) -> List:
    return _visible_rows(scope, principal, db.get_all_payments())


def list_payments_for_student(db: DatabaseService, scope: ScopeResolver, principal: Principal, student_id: int) -> List:
    return _rows_for_student(db, scope, principal, student_id, db.get_payments_by_student_id)


def create_payment(db: DatabaseService, scope: ScopeResolver, principal: Principal, payload: record_model.PaymentCreate):
    _require_student(db, payload.student_id)
    scope.ensure_in_scope(principal, PaymentRef(None, payload.student_id), Action.CREATE)
    record = payload.model_dump()
    record["status"] = record_model.PaymentStatus.PENDING.value
    return db.add_payment(record)


def _require_payment(db: DatabaseService, payment_id: int):
    payment = db.get_payment_by_id(payment_id)
    if payment is None:
        raise NotFound("Payment not found")
    return payment


def update_payment(db: DatabaseService, scope: ScopeResolver, principal: Principal, payment_id: int, payload: record_model.PaymentUpdate):
    payment = _require_payment(db, payment_id)
    scope.ensure_in_scope(principal, PaymentRef(payment.id, payment.student_id), Action.MODIFY)
    update_data = {"status": payload.status.value}
    if payload.paid_at is not None:
        update_data["paid_at"] = payload.paid_at
    return db.update_payment(payment, update_data)


def delete_payment(db: DatabaseService, scope: ScopeResolver, principal: Principal, payment_id: int) -> None:
    payment = _require_payment(db, payment_id)
    scope.ensure_in_scope(principal, PaymentRef(payment.id, payment.student_id), Action.MODIFY)
    db.delete_payment(payment)
