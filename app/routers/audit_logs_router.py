# /app/routers/audit_logs_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.deps import require_roles
from ..core.principal import Principal, Role
from ..models.audit_model import AuditLogPage
from ..services import audit_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=AuditLogPage, summary="Browse the Audit Trail")
def list_audit_logs(
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    method: Optional[str] = Query(None),
    path: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: DatabaseService = Depends(get_db_service),
    principal: Principal = Depends(require_roles(Role.ADMIN)),
):
    """
    Returns audit entries newest first. Paging values outside their range are
    clamped, not rejected.
    """
    return audit_service.list_audit_logs(
        db=db, page=page, page_size=page_size, method=method, path=path, user_id=user_id
    )
