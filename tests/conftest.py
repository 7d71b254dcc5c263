# /tests/conftest.py

"""
Shared fixtures: a throwaway SQLite database per test, a seeded school and a
TestClient wired to both through dependency overrides.
"""

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.security import create_access_token, hash_password
from app.db import base  # noqa: F401
from app.db.base_class import Base
from app.db.database import get_db, get_session_factory
from app.db.models.people_models import Parent, Student, Teacher
from app.db.models.school_models import Schedule, School, SchoolClass, Subject
from app.db.models.user_models import User
from app.main import app


class RecordingAuditRecorder:
    """Stands in for the real recorder; keeps every observe() call."""

    def __init__(self):
        self.calls = []

    def observe(self, principal, method, path, status_code, ip, user_agent, request_body):
        self.calls.append(SimpleNamespace(
            principal=principal, method=method, path=path, status_code=status_code,
            ip=ip, user_agent=user_agent, request_body=request_body,
        ))
        return None


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def school(session_factory):
    """
    One school with two classes. `teacher_one` teaches class A, `teacher_two`
    teaches class B. `student_one` is in class A, `student_two` in class B, and
    `parent` is linked to `student_one` only.
    """
    with session_factory() as db:
        password_hash = hash_password("secret-pass")

        def user(username, role):
            row = User(username=username, email=f"{username}@school.test", password_hash=password_hash, role=role)
            db.add(row)
            return row

        admin = user("admin", "ADMIN")
        t1_user, t2_user = user("teacher_one", "TEACHER"), user("teacher_two", "TEACHER")
        s1_user, s2_user = user("student_one", "STUDENT"), user("student_two", "STUDENT")
        p_user = user("parent", "PARENT")
        db.flush()

        campus = School(name="Harapan Bangsa", address="Jl. Merdeka 1")
        db.add(campus)
        db.flush()
        class_a = SchoolClass(name="X-A", level="10", school_id=campus.id)
        class_b = SchoolClass(name="X-B", level="10", school_id=campus.id)
        math = Subject(code="MTK", name="Mathematics")
        db.add_all([class_a, class_b, math])
        db.flush()

        teacher_one = Teacher(nip="T-001", name="Ana Putri", user_id=t1_user.id, school_id=campus.id)
        teacher_two = Teacher(nip="T-002", name="Budi Santoso", user_id=t2_user.id, school_id=campus.id)
        student_one = Student(
            nis="S-001", nisn="0001", name="Citra", email="citra@school.test",
            date_of_birth=date(2009, 1, 2), class_id=class_a.id, school_id=campus.id, user_id=s1_user.id,
        )
        student_two = Student(
            nis="S-002", nisn="0002", name="Dewi", email="dewi@school.test",
            class_id=class_b.id, school_id=campus.id, user_id=s2_user.id,
        )
        db.add_all([teacher_one, teacher_two, student_one, student_two])
        db.flush()

        db.add_all([
            Schedule(teacher_id=teacher_one.id, class_id=class_a.id, subject_id=math.id, day_of_week=1),
            Schedule(teacher_id=teacher_two.id, class_id=class_b.id, subject_id=math.id, day_of_week=2),
        ])
        parent = Parent(name="Eka", user_id=p_user.id)
        parent.students.append(student_one)
        db.add(parent)
        db.commit()

        return SimpleNamespace(
            admin_user=admin.id, teacher_one_user=t1_user.id, teacher_two_user=t2_user.id,
            student_one_user=s1_user.id, student_two_user=s2_user.id, parent_user=p_user.id,
            school=campus.id, class_a=class_a.id, class_b=class_b.id, subject=math.id,
            teacher_one=teacher_one.id, teacher_two=teacher_two.id,
            student_one=student_one.id, student_two=student_two.id, parent=parent.id,
        )


@pytest.fixture
def audit_recorder():
    return RecordingAuditRecorder()


@pytest.fixture
def client(session_factory, audit_recorder):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    original_recorder = app.state.audit_recorder
    app.state.audit_recorder = audit_recorder

    # Not used as a context manager, so the startup hook never touches the
    # configured database.
    yield TestClient(app)

    app.state.audit_recorder = original_recorder
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    def build(user_id, role="ADMIN"):
        return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}
    return build
