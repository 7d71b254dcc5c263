# /app/services/database_helpers/base_repository_sql.py

"""
Shared write helpers for the SQL repositories.

Every write goes through `_commit`, which rolls back on any integrity error.
A unique-constraint violation becomes a `Conflict` naming the offending
column; every other integrity error is re-raised as a server error.
"""

from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import conflict_from_integrity_error, is_unique_violation


class BaseRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if not is_unique_violation(exc):
                raise
            raise conflict_from_integrity_error(exc) from exc

    def _add(self, obj):
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def _update(self, obj, data: Dict[str, Any]):
        for key, value in data.items():
            setattr(obj, key, value)
        self._commit()
        self.db.refresh(obj)
        return obj

    def _delete(self, obj) -> None:
        self.db.delete(obj)
        self._commit()
