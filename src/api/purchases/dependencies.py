"""Dependency injection for the Purchases bounded context."""

from typing import Annotated

from fastapi import Depends

from infrastructure.database.dependencies import (
    MongoConnectionCache,
    get_connection_cache,
)
from infrastructure.settings import get_mongo_settings
from purchases.application.observability import (
    DefaultPurchaseServiceProbe,
    PurchaseServiceProbe,
)
from purchases.application.services import PurchaseService
from purchases.infrastructure.repository import MongoPurchaseRepository


def get_purchase_service_probe() -> PurchaseServiceProbe:
    return DefaultPurchaseServiceProbe()


def get_purchase_service(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
    probe: Annotated[PurchaseServiceProbe, Depends(get_purchase_service_probe)],
) -> PurchaseService:
    """Get PurchaseService bound to the shared connection cache."""
    repository = MongoPurchaseRepository(cache, get_mongo_settings())
    return PurchaseService(repository=repository, probe=probe)
