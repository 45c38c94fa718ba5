"""
Order receipt and contact-form emails.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from talanta_gallery.core.database.entities import Artwork, Order, OrderItem
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.contact import ContactRequest
from talanta_gallery.server.core.constant import CURRENCY

from .mailer import Mailer

logger = get_logger(__name__)

ADDRESS_FIELDS = ("line1", "line2", "street", "city", "state", "postal_code", "zip", "country")


def _address_lines(address: Dict[str, Any]) -> List[str]:
    known = [str(address[key]) for key in ADDRESS_FIELDS if address.get(key)]
    if known:
        return known
    return [str(value) for value in address.values() if value]


def receipt_context(order: Order, items: Sequence[Tuple[OrderItem, Optional[Artwork]]]) -> Dict[str, Any]:
    return {
        "order": order,
        "currency": CURRENCY,
        "address": _address_lines(order.get_customer_address()),
        "items": [
            {
                "title": artwork.title if artwork is not None else "Removed artwork",
                "quantity": item.quantity,
                "price": item.price,
                "line_total": item.line_total,
            }
            for item, artwork in items
        ],
    }


async def send_order_receipt(
    mailer: Mailer, order: Order, items: Sequence[Tuple[OrderItem, Optional[Artwork]]]
) -> bool:
    """Email the receipt for a newly placed order to the customer."""
    sent = await mailer.send(
        to=order.customer_email,
        subject=f"Order Receipt #{order.id} - Talanta Art Gallery",
        template="order_receipt",
        context=receipt_context(order, items),
    )
    if not sent:
        logger.warning(f"Order receipt for order {order.id} was not delivered")
    return sent


async def send_contact_notification(mailer: Mailer, contact: ContactRequest) -> bool:
    """Forward a contact-form message to the gallery admin, reply-to the visitor."""
    return await mailer.send(
        to=mailer.admin_email,
        subject=f"New Contact Form Submission - {contact.subject}",
        template="contact_admin",
        context={"contact": contact},
        reply_to=contact.email,
    )


async def send_contact_confirmation(mailer: Mailer, contact: ContactRequest) -> bool:
    return await mailer.send(
        to=contact.email,
        subject="Thank you for contacting Talanta Art Gallery",
        template="contact_confirmation",
        context={"contact": contact},
    )
