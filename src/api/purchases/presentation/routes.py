"""HTTP routes for a listener's purchase history.

Starting and verifying a payment is handled by the storefront's payment
provider integration, not by this service.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from infrastructure.database.exceptions import DatabaseError
from purchases.application.observability import PurchaseServiceProbe
from purchases.application.services import PurchaseService
from purchases.dependencies import get_purchase_service, get_purchase_service_probe
from purchases.domain.value_objects import ItemType, PurchaseFilter, PurchaseStatus
from purchases.presentation.models import PurchaseListResponse
from shared_kernel.auth.dependencies import get_current_principal
from shared_kernel.auth.jwt_validator import Principal

router = APIRouter(prefix="/api", tags=["purchases"])


@router.get("/purchase")
async def list_purchases(
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[PurchaseService, Depends(get_purchase_service)],
    probe: Annotated[PurchaseServiceProbe, Depends(get_purchase_service_probe)],
    purchase_status: Annotated[PurchaseStatus | None, Query(alias="status")] = None,
    item_type: Annotated[ItemType | None, Query(alias="itemType")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> PurchaseListResponse:
    """List the caller's purchases, newest first."""
    filters = PurchaseFilter(
        user_id=principal.user_id,
        status=purchase_status,
        item_type=item_type,
        page=page,
        limit=limit,
    )
    try:
        result = await service.list_purchases(filters)
    except DatabaseError as e:
        probe.request_failed(error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch purchases",
        ) from e

    return PurchaseListResponse.from_page(result)
