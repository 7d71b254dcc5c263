# /app/models/dashboard_model.py

"""
Data contracts for the dashboard KPI and notification endpoints. Both are
recomputed on every request and never stored.
"""

from enum import Enum
from typing import List

from pydantic import Field

from .base_model import ApiModel


class KpiSnapshot(ApiModel):
    """
    Role-shaped dashboard counters. For students and parents every figure is
    limited to their own students; admins and teachers see global figures.
    """
    total_students: int = Field(default=0, examples=[412])
    total_teachers: int = Field(default=0, examples=[28])
    total_classes: int = Field(default=0, examples=[14])
    total_payments: int = Field(default=0, examples=[1320])
    attendance_today: int = Field(default=0, description="Attendance rows dated today.")
    attendance_present_today: int = Field(default=0)
    attendance_rate_today: float = Field(default=0, description="Percentage present, two decimals.", examples=[70.0])
    overdue_payments: int = Field(default=0, description="Unpaid payments due before today.")
    average_grade: float = Field(default=0, examples=[81.25])


class NotificationType(str, Enum):
    PAYMENT_OVERDUE = "PAYMENT_OVERDUE"
    ATTENDANCE_ALERT = "ATTENDANCE_ALERT"
    GRADE_ALERT = "GRADE_ALERT"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class NotificationItem(ApiModel):
    id: str
    type: NotificationType
    severity: Severity
    title: str
    message: str
    count: int
    link: str


class NotificationList(ApiModel):
    total: int
    items: List[NotificationItem]
