# /app/db/models/school_models.py

"""
School structure: schools, the classes inside them, subjects, and the
schedule entries that tie a teacher to a class. A schedule entry is the
ownership fact behind every teacher scope decision.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    address = Column(String, nullable=True)

    classes = relationship("SchoolClass", back_populates="school", cascade="all, delete-orphan")


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    level = Column(String, nullable=False)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)

    school = relationship("School", back_populates="classes")
    students = relationship("Student", back_populates="school_class")
    schedules = relationship("Schedule", back_populates="school_class", cascade="all, delete-orphan")


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    day_of_week = Column(Integer, nullable=True)
    start_time = Column(String, nullable=True)
    end_time = Column(String, nullable=True)

    teacher = relationship("Teacher", back_populates="schedules")
    school_class = relationship("SchoolClass", back_populates="schedules")
    subject = relationship("Subject")
