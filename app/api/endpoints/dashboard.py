"""
Dashboard endpoint - per-seller listing statistics.
"""

from fastapi import APIRouter

from app.core.dependencies import CurrentIdentity, ListingServiceDep
from app.schemas.dashboard import DashboardStats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(svc: ListingServiceDep, identity: CurrentIdentity):
    """Totals for the requester: all, available, sold, and summed price."""
    return await svc.dashboard_stats(identity)
