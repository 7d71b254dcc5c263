# /app/models/audit_model.py

from datetime import datetime
from typing import Any, List, Optional

from .auth_model import UserSummary
from .base_model import ApiModel


class AuditLogRecord(ApiModel):
    id: int
    user_id: Optional[int] = None
    user: Optional[UserSummary] = None
    method: str
    path: str
    status_code: int
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    request_body: Any = None
    created_at: Optional[datetime] = None


class Pagination(ApiModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class AuditLogPage(ApiModel):
    """Response of GET /api/audit-logs."""
    data: List[AuditLogRecord]
    pagination: Pagination
