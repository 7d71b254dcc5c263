# /app/core/principal.py

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"


ALL_ROLES = frozenset(Role)


@dataclass(frozen=True)
class Principal:
    """The verified identity making the current request. Built fresh per request."""
    id: int
    role: Role
