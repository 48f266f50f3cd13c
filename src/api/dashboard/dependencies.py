"""Dependency injection for the admin dashboard."""

from typing import Annotated

from fastapi import Depends

from dashboard.application.observability import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from dashboard.application.services import DashboardService
from dashboard.infrastructure.repository import MongoDashboardRepository
from infrastructure.database.dependencies import (
    MongoConnectionCache,
    get_connection_cache,
)
from infrastructure.settings import get_mongo_settings


def get_dashboard_service_probe() -> DashboardServiceProbe:
    return DefaultDashboardServiceProbe()


def get_dashboard_service(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
    probe: Annotated[DashboardServiceProbe, Depends(get_dashboard_service_probe)],
) -> DashboardService:
    """Get DashboardService bound to the shared connection cache."""
    repository = MongoDashboardRepository(cache, get_mongo_settings())
    return DashboardService(repository=repository, probe=probe)
