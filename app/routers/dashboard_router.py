# /app/routers/dashboard_router.py

from fastapi import APIRouter, Depends

from ..core.deps import require_roles
from ..core.principal import Principal
from ..models.dashboard_model import KpiSnapshot, NotificationList
from ..services.dashboard_service import DashboardService, get_dashboard_service

router = APIRouter()
notifications_router = APIRouter()


@router.get("/kpis", response_model=KpiSnapshot, summary="Get Dashboard KPIs")
async def get_kpis(
    dashboard: DashboardService = Depends(get_dashboard_service),
    principal: Principal = Depends(require_roles()),
):
    """
    Headline counts for the dashboard, restricted to the caller's own student
    (students) or linked children (parents).
    """
    return await dashboard.kpis(principal)


@notifications_router.get("", response_model=NotificationList, summary="Get Dashboard Notifications")
async def get_notifications(
    dashboard: DashboardService = Depends(get_dashboard_service),
    principal: Principal = Depends(require_roles()),
):
    return await dashboard.notifications(principal)
