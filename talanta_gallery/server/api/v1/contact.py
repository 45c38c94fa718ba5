"""
Contact Form API Endpoint.

Forwards the message to the gallery admin and sends the visitor a
confirmation. Nothing is stored.
"""

from __future__ import annotations

from fastapi import APIRouter

from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.contact import ContactRequest, ContactResponse
from talanta_gallery.notifications.order_receipts import send_contact_confirmation, send_contact_notification
from talanta_gallery.server.services.deps import MailerDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ContactResponse,
    summary="Send Contact Message",
    description="`email_sent` is true when the message reached the gallery admin.",
)
async def contact(payload: ContactRequest, mailer: MailerDep) -> ContactResponse:
    forwarded = await send_contact_notification(mailer, payload)
    confirmed = await send_contact_confirmation(mailer, payload)
    logger.info(f"Contact form '{payload.subject}': forwarded={forwarded}, confirmed={confirmed}")
    if not forwarded:
        return ContactResponse(
            message="We could not deliver your message right now. Please try again later.",
            email_sent=False,
        )
    return ContactResponse(message="Thank you for your message. We will get back to you soon.", email_sent=True)
