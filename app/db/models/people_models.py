# /app/db/models/people_models.py

"""
Profiles attached to user accounts: teachers, students and parents.

A student's `user_id` is what makes a STUDENT principal the owner of that
record; the `parent_students` link table does the same for PARENT principals.
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey, Table
from sqlalchemy.orm import relationship

from ..base_class import Base


parent_students = Table(
    "parent_students",
    Base.metadata,
    Column("parent_id", Integer, ForeignKey("parents.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    nip = Column(String, unique=True, nullable=False)
    name = Column(String, index=True, nullable=False)
    phone = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False)

    user = relationship("User", back_populates="teacher")
    schedules = relationship("Schedule", back_populates="teacher", cascade="all, delete-orphan")


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    nis = Column(String, unique=True, nullable=False)
    nisn = Column(String, unique=True, nullable=False)
    name = Column(String, index=True, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    address = Column(String, nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    user = relationship("User", back_populates="student")
    school_class = relationship("SchoolClass", back_populates="students")
    parents = relationship("Parent", secondary=parent_students, back_populates="students")
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan")
    attendances = relationship("Attendance", back_populates="student", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan")


class Parent(Base):
    __tablename__ = "parents"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    user = relationship("User", back_populates="parent")
    students = relationship("Student", secondary=parent_students, back_populates="parents")

    @property
    def student_ids(self):
        return sorted(student.id for student in self.students)
