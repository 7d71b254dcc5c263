# /app/models/people_model.py

"""
API contracts for teacher, student and parent profiles. Every profile is tied
to exactly one user account through `user_id`.
"""

from datetime import date
from typing import List, Optional

from pydantic import Field

from .base_model import ApiModel


# --- Teachers ---

class TeacherCreate(ApiModel):
    nip: str = Field(..., min_length=1, description="The official teacher registration number.")
    name: str = Field(..., min_length=2)
    phone: Optional[str] = None
    user_id: int
    school_id: int


class TeacherUpdate(ApiModel):
    nip: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = None


class Teacher(TeacherCreate):
    id: int


# --- Students ---

class StudentBase(ApiModel):
    nis: str = Field(..., min_length=1, description="The school-local student number.")
    nisn: str = Field(..., min_length=1, description="The national student number.")
    name: str = Field(..., min_length=2)
    email: str = Field(..., min_length=3)
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    class_id: int


class StudentCreate(StudentBase):
    school_id: int
    user_id: int


class StudentUpdate(ApiModel):
    """All fields optional to allow partial updates."""
    nis: Optional[str] = Field(default=None, min_length=1)
    nisn: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[str] = Field(default=None, min_length=3)
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    class_id: Optional[int] = None


class Student(StudentBase):
    id: int
    school_id: int
    user_id: int


# --- Parents ---

class ParentCreate(ApiModel):
    name: str = Field(..., min_length=2)
    phone: Optional[str] = None
    user_id: int
    student_ids: List[int] = Field(default_factory=list, description="Students this parent is linked to.")


class Parent(ApiModel):
    id: int
    name: str
    phone: Optional[str] = None
    user_id: int
    student_ids: List[int] = Field(default_factory=list)
