# /app/models/record_model.py

"""
API contracts for the per-student records: grades, attendance and payments.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base_model import ApiModel


# --- Core Enumerations ---

class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    SICK = "SICK"
    PERMISSION = "PERMISSION"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


# --- Grades ---

class GradeCreate(ApiModel):
    student_id: int
    subject_id: int
    teacher_id: Optional[int] = Field(default=None, description="Defaults to the calling teacher; required for admins.")
    score: float = Field(..., ge=0, le=100)
    term: str = Field(..., min_length=1)
    academic_year: str = Field(..., min_length=1)


class GradeUpdate(ApiModel):
    score: float = Field(..., ge=0, le=100)


class Grade(ApiModel):
    id: int
    student_id: int
    subject_id: int
    teacher_id: int
    score: float
    term: str
    academic_year: str
    created_at: Optional[datetime] = None


# --- Attendance ---

class AttendanceCreate(ApiModel):
    student_id: int
    date: datetime
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceUpdate(ApiModel):
    status: Optional[AttendanceStatus] = None
    note: Optional[str] = None


class Attendance(ApiModel):
    id: int
    student_id: int
    date: datetime
    status: AttendanceStatus
    note: Optional[str] = None


# --- Payments ---

class PaymentCreate(ApiModel):
    student_id: int
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    due_date: datetime


class PaymentUpdate(ApiModel):
    status: PaymentStatus
    paid_at: Optional[datetime] = None


class Payment(ApiModel):
    id: int
    student_id: int
    amount: float
    description: str
    due_date: datetime
    status: PaymentStatus
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
