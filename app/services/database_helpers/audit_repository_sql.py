# /app/services/database_helpers/audit_repository_sql.py

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from app.db.models.audit_models import AuditLog
from .base_repository_sql import BaseRepositorySQL


class AuditRepositorySQL(BaseRepositorySQL):

    def add_entry(self, record: Dict) -> AuditLog:
        return self._add(AuditLog(**record))

    def get_entries(
        self,
        page: int,
        page_size: int,
        method: Optional[str] = None,
        path: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[List[AuditLog], int]:
        """
        Returns one page of entries (newest first) together with the total
        number of entries matching the same filters.
        """
        query = self.db.query(AuditLog)
        if method:
            query = query.filter(AuditLog.method == method)
        if path:
            query = query.filter(func.lower(AuditLog.path).contains(path.lower(), autoescape=True))
        if user_id is not None:
            query = query.filter(AuditLog.user_id == user_id)

        total = query.count()
        items = (
            query.options(joinedload(AuditLog.user))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return items, total
