# =============================================================================
# app/routers/dashboard.py - Dashboard Overview
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_admin
from app.dependencies import RecordStoreDep
from core.models.dashboard import DashboardStats
from core.services.stats_service import get_dashboard_stats

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Counts of students, activities and uploaded assets."""
    return await get_dashboard_stats(records)
