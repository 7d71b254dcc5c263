# /app/models/school_model.py

"""
API contracts for the school structure: schools, classes, subjects and the
schedule entries that assign teachers to classes.
"""

from typing import Optional

from pydantic import Field

from .base_model import ApiModel


# --- Schools ---

class SchoolCreate(ApiModel):
    name: str = Field(..., min_length=1)
    address: Optional[str] = None


class SchoolUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None


class School(SchoolCreate):
    id: int


# --- Classes ---

class ClassCreate(ApiModel):
    name: str = Field(..., min_length=1)
    level: str = Field(..., min_length=1)
    school_id: int


class ClassUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    level: Optional[str] = Field(default=None, min_length=1)


class SchoolClass(ClassCreate):
    id: int


# --- Subjects ---

class SubjectCreate(ApiModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class SubjectUpdate(ApiModel):
    code: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class Subject(SubjectCreate):
    id: int


# --- Schedules ---

class ScheduleCreate(ApiModel):
    teacher_id: int
    class_id: int
    subject_id: int
    day_of_week: Optional[int] = Field(default=None, ge=1, le=7)
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class Schedule(ScheduleCreate):
    id: int
