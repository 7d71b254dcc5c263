# /app/services/access_helpers/resources.py

"""
References to the entities a request wants to touch, as seen by the scope
resolver. They are built by the record service from rows it has just fetched
(or from a create payload) and never outlive the request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Action(str, Enum):
    VIEW = "view"
    CREATE = "create"
    # Covers both update and delete of an existing row.
    MODIFY = "modify"


@dataclass(frozen=True)
class StudentRef:
    id: int

    @property
    def student_id(self) -> int:
        return self.id


@dataclass(frozen=True)
class ClassRef:
    id: int


@dataclass(frozen=True)
class GradeRef:
    id: Optional[int]
    student_id: int
    teacher_id: Optional[int]


@dataclass(frozen=True)
class AttendanceRef:
    id: Optional[int]
    student_id: int


@dataclass(frozen=True)
class PaymentRef:
    id: Optional[int]
    student_id: int


ResourceRef = Union[StudentRef, ClassRef, GradeRef, AttendanceRef, PaymentRef]


@dataclass(frozen=True)
class OwnershipFact:
    """A scope decision plus the reason for it. Valid only for the pair it was computed for."""
    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed
