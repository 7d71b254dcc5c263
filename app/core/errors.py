# /app/core/errors.py

"""
The error taxonomy shared by the access-control layer, the services and the
routers.

Every error carries its HTTP status and a deliberately generic client message.
The exception handlers registered in `app.main` turn them into JSON bodies, so
services never build HTTP responses themselves.
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError


class ApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class BadRequest(ApiError):
    status_code = 400
    default_message = "Bad request"


class Unauthenticated(ApiError):
    """Missing, malformed, expired or orphaned credential. Never says which."""
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ApiError):
    """Role gate or ownership miss. Never reveals whether the target exists."""
    status_code = 403
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Data already exists"

    def __init__(self, field: Optional[str] = None, message: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_body(self) -> dict:
        return {"error": self.message, "field": self.field}


# --- Unique-violation parsing ---

UNIQUE_VIOLATION_SQLSTATE = "23505"

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<cols>[\w\., ]+)")
_POSTGRES_UNIQUE = re.compile(r"Key \((?P<cols>[^)]+)\)=")


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True only for uniqueness violations. NOT NULL, foreign-key and check
    violations are not conflicts and stay server errors.
    """
    orig = exc.orig
    # psycopg2 exposes `pgcode`, psycopg 3 `sqlstate`.
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_SQLSTATE
    return _SQLITE_UNIQUE.search(str(orig)) is not None


def _violating_columns(message: str) -> list:
    match = _SQLITE_UNIQUE.search(message)
    if match:
        return [part.strip().split(".")[-1] for part in match.group("cols").split(",")]
    match = _POSTGRES_UNIQUE.search(message)
    if match:
        return [part.strip() for part in match.group("cols").split(",")]
    return []


def conflict_from_integrity_error(exc: IntegrityError) -> Conflict:
    """
    Builds a `Conflict` naming the column that violated a uniqueness
    constraint. When several columns are reported `name` wins, otherwise the
    first one is used. Callers check `is_unique_violation` first.
    """
    columns = _violating_columns(str(exc.orig))
    if not columns:
        return Conflict()
    field = "name" if "name" in columns else columns[0]
    return Conflict(field=field)
