"""HTTP routes for the admin dashboard."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.application.observability import DashboardServiceProbe
from dashboard.application.services import DashboardService
from dashboard.dependencies import get_dashboard_service, get_dashboard_service_probe
from dashboard.presentation.models import DashboardResponse
from infrastructure.database.exceptions import DatabaseError
from shared_kernel.auth.dependencies import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/dashboard", dependencies=[Depends(require_admin)])
async def get_dashboard(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    probe: Annotated[DashboardServiceProbe, Depends(get_dashboard_service_probe)],
) -> DashboardResponse:
    """Catalog statistics, month-over-month growth and recent activity."""
    try:
        summary = await service.build_summary()
    except DatabaseError as e:
        probe.request_failed(error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard data",
        ) from e

    return DashboardResponse.from_domain(summary)
