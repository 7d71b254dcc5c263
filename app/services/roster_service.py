# /app/services/roster_service.py

"""
Business logic for the school structure and its people.

Apart from the student endpoints these are admin-managed resources guarded by
the role gate alone. Students are different: anyone may ask for them, so
reads go through the scope resolver.
"""

from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from app.core.errors import BadRequest, NotFound
from app.core.principal import Principal
from app.models import people_model, school_model
from .access_helpers.resources import Action, StudentRef
from .access_helpers.scope_resolver import ScopeResolver
from .database_service import DatabaseService


# --- Shared Helpers ---

def get_or_404(fetch: Callable, item_id: int, label: str):
    item = fetch(item_id)
    if item is None:
        raise NotFound(f"{label} not found")
    return item


def _update_data(update: BaseModel) -> Dict:
    data = update.model_dump(exclude_unset=True)
    if not data:
        raise BadRequest("No update data provided.")
    return data


def _check_references(db: DatabaseService, school_id: Optional[int] = None, class_id: Optional[int] = None, user_id: Optional[int] = None) -> None:
    if school_id is not None:
        get_or_404(db.get_school_by_id, school_id, "School")
    if class_id is not None:
        get_or_404(db.get_class_by_id, class_id, "Class")
    if user_id is not None:
        get_or_404(db.get_user_by_id, user_id, "User")


# --- Students ---

def list_students(db: DatabaseService, scope: ScopeResolver, principal: Principal) -> List:
    students = db.get_all_students()
    allowed = scope.filter_ids(principal, {student.id for student in students})
    return [student for student in students if student.id in allowed]


def get_student(db: DatabaseService, scope: ScopeResolver, principal: Principal, student_id: int):
    student = get_or_404(db.get_student_by_id, student_id, "Student")
    scope.ensure_in_scope(principal, StudentRef(student.id), Action.VIEW)
    return student


def create_student(db: DatabaseService, payload: people_model.StudentCreate):
    _check_references(db, school_id=payload.school_id, class_id=payload.class_id, user_id=payload.user_id)
    return db.add_student(payload.model_dump())


def update_student(db: DatabaseService, student_id: int, payload: people_model.StudentUpdate):
    student = get_or_404(db.get_student_by_id, student_id, "Student")
    data = _update_data(payload)
    if data.get("class_id") is not None:
        _check_references(db, class_id=data["class_id"])
    return db.update_student(student, data)


def delete_student(db: DatabaseService, student_id: int) -> None:
    db.delete_student(get_or_404(db.get_student_by_id, student_id, "Student"))


# --- Teachers ---

def create_teacher(db: DatabaseService, payload: people_model.TeacherCreate):
    _check_references(db, school_id=payload.school_id, user_id=payload.user_id)
    return db.add_teacher(payload.model_dump())


def update_teacher(db: DatabaseService, teacher_id: int, payload: people_model.TeacherUpdate):
    teacher = get_or_404(db.get_teacher_by_id, teacher_id, "Teacher")
    return db.update_teacher(teacher, _update_data(payload))


def delete_teacher(db: DatabaseService, teacher_id: int) -> None:
    db.delete_teacher(get_or_404(db.get_teacher_by_id, teacher_id, "Teacher"))


# --- Parents ---

def create_parent(db: DatabaseService, payload: people_model.ParentCreate):
    _check_references(db, user_id=payload.user_id)
    for student_id in payload.student_ids:
        get_or_404(db.get_student_by_id, student_id, "Student")
    record = payload.model_dump(exclude={"student_ids"})
    return db.add_parent(record, payload.student_ids)


def delete_parent(db: DatabaseService, parent_id: int) -> None:
    db.delete_parent(get_or_404(db.get_parent_by_id, parent_id, "Parent"))


# --- Schools, Classes & Subjects ---

def create_school(db: DatabaseService, payload: school_model.SchoolCreate):
    return db.add_school(payload.model_dump())


def update_school(db: DatabaseService, school_id: int, payload: school_model.SchoolUpdate):
    school = get_or_404(db.get_school_by_id, school_id, "School")
    return db.update_school(school, _update_data(payload))


def delete_school(db: DatabaseService, school_id: int) -> None:
    db.delete_school(get_or_404(db.get_school_by_id, school_id, "School"))


def create_class(db: DatabaseService, payload: school_model.ClassCreate):
    _check_references(db, school_id=payload.school_id)
    return db.add_class(payload.model_dump())


def update_class(db: DatabaseService, class_id: int, payload: school_model.ClassUpdate):
    school_class = get_or_404(db.get_class_by_id, class_id, "Class")
    return db.update_class(school_class, _update_data(payload))


def delete_class(db: DatabaseService, class_id: int) -> None:
    db.delete_class(get_or_404(db.get_class_by_id, class_id, "Class"))


def create_subject(db: DatabaseService, payload: school_model.SubjectCreate):
    return db.add_subject(payload.model_dump())


def update_subject(db: DatabaseService, subject_id: int, payload: school_model.SubjectUpdate):
    subject = get_or_404(db.get_subject_by_id, subject_id, "Subject")
    return db.update_subject(subject, _update_data(payload))


def delete_subject(db: DatabaseService, subject_id: int) -> None:
    db.delete_subject(get_or_404(db.get_subject_by_id, subject_id, "Subject"))


# --- Schedules ---

def create_schedule(db: DatabaseService, payload: school_model.ScheduleCreate):
    get_or_404(db.get_teacher_by_id, payload.teacher_id, "Teacher")
    get_or_404(db.get_class_by_id, payload.class_id, "Class")
    get_or_404(db.get_subject_by_id, payload.subject_id, "Subject")
    return db.add_schedule(payload.model_dump())


def delete_schedule(db: DatabaseService, schedule_id: int) -> None:
    db.delete_schedule(get_or_404(db.get_schedule_by_id, schedule_id, "Schedule"))
