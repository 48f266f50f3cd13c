"""HTTP routes for the contact form."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from contact.application.services import ContactService
from contact.dependencies import get_contact_service
from contact.ports.notifier import ContactDeliveryError
from contact.presentation.models import ContactRequest
from shared_kernel.api_models import MessageResponse

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact")
async def submit_contact_message(
    request: ContactRequest,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> MessageResponse:
    """Send a message to the site owner."""
    try:
        await service.submit(request.to_message())
    except ContactDeliveryError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to send your message right now",
        ) from e

    return MessageResponse(message="Message sent successfully")
