# /app/services/database_helpers/roster_repository_sql.py

"""
Raw SQLAlchemy queries for the school structure and the people in it:
schools, classes, subjects, schedules, teachers, students and parents.

Besides plain CRUD this repository answers the ownership questions the scope
resolver asks: which teacher profile belongs to a user, whether a teacher has
a schedule entry for a class, and which students a parent is linked to.
"""

from typing import Dict, Iterable, List, Optional, Set

from app.db.models.school_models import School, SchoolClass, Subject, Schedule
from app.db.models.people_models import Teacher, Student, Parent, parent_students
from .base_repository_sql import BaseRepositorySQL


class RosterRepositorySQL(BaseRepositorySQL):

    # --- School Methods ---

    def get_all_schools(self) -> List[School]:
        return self.db.query(School).order_by(School.name.asc()).all()

    def get_school_by_id(self, school_id: int) -> Optional[School]:
        return self.db.query(School).filter(School.id == school_id).first()

    def add_school(self, record: Dict) -> School:
        return self._add(School(**record))

    def update_school(self, school: School, data: Dict) -> School:
        return self._update(school, data)

    def delete_school(self, school: School) -> None:
        self._delete(school)

    # --- Class Methods ---

    def get_all_classes(self) -> List[SchoolClass]:
        return self.db.query(SchoolClass).order_by(SchoolClass.name.asc()).all()

    def get_class_by_id(self, class_id: int) -> Optional[SchoolClass]:
        return self.db.query(SchoolClass).filter(SchoolClass.id == class_id).first()

    def add_class(self, record: Dict) -> SchoolClass:
        return self._add(SchoolClass(**record))

    def update_class(self, school_class: SchoolClass, data: Dict) -> SchoolClass:
        return self._update(school_class, data)

    def delete_class(self, school_class: SchoolClass) -> None:
        self._delete(school_class)

    # --- Subject Methods ---

    def get_all_subjects(self) -> List[Subject]:
        return self.db.query(Subject).order_by(Subject.name.asc()).all()

    def get_subject_by_id(self, subject_id: int) -> Optional[Subject]:
        return self.db.query(Subject).filter(Subject.id == subject_id).first()

    def add_subject(self, record: Dict) -> Subject:
        return self._add(Subject(**record))

    def update_subject(self, subject: Subject, data: Dict) -> Subject:
        return self._update(subject, data)

    def delete_subject(self, subject: Subject) -> None:
        self._delete(subject)

    # --- Schedule Methods ---

    def get_all_schedules(self) -> List[Schedule]:
        return self.db.query(Schedule).order_by(Schedule.class_id.asc(), Schedule.day_of_week.asc()).all()

    def get_schedule_by_id(self, schedule_id: int) -> Optional[Schedule]:
        return self.db.query(Schedule).filter(Schedule.id == schedule_id).first()

    def add_schedule(self, record: Dict) -> Schedule:
        return self._add(Schedule(**record))

    def delete_schedule(self, schedule: Schedule) -> None:
        self._delete(schedule)

    def teacher_has_schedule_for_class(self, teacher_id: int, class_id: int) -> bool:
        return (
            self.db.query(Schedule.id)
            .filter(Schedule.teacher_id == teacher_id, Schedule.class_id == class_id)
            .first()
            is not None
        )

    def get_class_ids_for_teacher(self, teacher_id: int) -> Set[int]:
        rows = self.db.query(Schedule.class_id).filter(Schedule.teacher_id == teacher_id).distinct().all()
        return {row[0] for row in rows}

    # --- Teacher Methods ---

    def get_all_teachers(self) -> List[Teacher]:
        return self.db.query(Teacher).order_by(Teacher.name.asc()).all()

    def get_teacher_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self.db.query(Teacher).filter(Teacher.id == teacher_id).first()

    def get_teacher_by_user_id(self, user_id: int) -> Optional[Teacher]:
        return self.db.query(Teacher).filter(Teacher.user_id == user_id).first()

    def add_teacher(self, record: Dict) -> Teacher:
        return self._add(Teacher(**record))

    def update_teacher(self, teacher: Teacher, data: Dict) -> Teacher:
        return self._update(teacher, data)

    def delete_teacher(self, teacher: Teacher) -> None:
        self._delete(teacher)

    # --- Student Methods ---

    def get_all_students(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.name.asc()).all()

    def get_student_by_id(self, student_id: int) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def get_student_by_user_id(self, user_id: int) -> Optional[Student]:
        return self.db.query(Student).filter(Student.user_id == user_id).first()

    def get_student_class_map(self, student_ids: Iterable[int]) -> Dict[int, int]:
        """Maps each existing student id to its class id."""
        ids = list(student_ids)
        if not ids:
            return {}
        rows = self.db.query(Student.id, Student.class_id).filter(Student.id.in_(ids)).all()
        return {student_id: class_id for student_id, class_id in rows}

    def add_student(self, record: Dict) -> Student:
        return self._add(Student(**record))

    def update_student(self, student: Student, data: Dict) -> Student:
        return self._update(student, data)

    def delete_student(self, student: Student) -> None:
        self._delete(student)

    # --- Parent Methods ---

    def get_all_parents(self) -> List[Parent]:
        return self.db.query(Parent).order_by(Parent.name.asc()).all()

    def get_parent_by_id(self, parent_id: int) -> Optional[Parent]:
        return self.db.query(Parent).filter(Parent.id == parent_id).first()

    def add_parent(self, record: Dict, student_ids: Iterable[int]) -> Parent:
        parent = Parent(**record)
        ids = list(student_ids)
        if ids:
            parent.students = self.db.query(Student).filter(Student.id.in_(ids)).all()
        return self._add(parent)

    def delete_parent(self, parent: Parent) -> None:
        self._delete(parent)

    def get_linked_student_ids(self, user_id: int) -> Set[int]:
        """Student ids linked to the parent profile of the given user (empty when none)."""
        rows = (
            self.db.query(parent_students.c.student_id)
            .join(Parent, Parent.id == parent_students.c.parent_id)
            .filter(Parent.user_id == user_id)
            .all()
        )
        return {row[0] for row in rows}
