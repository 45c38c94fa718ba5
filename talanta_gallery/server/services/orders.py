"""
Order Service.

Order placement, payment recording and status changes. Allowed transitions:

    pending    -> processing | cancelled
    processing -> completed  | cancelled

Paying (or moving to processing) reserves the order's artworks and fails when
any of them is no longer available. Completing marks them sold. Cancelling a
processing order releases its reservations.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Set, Tuple

from talanta_gallery.core.database.entities import Artwork, Order, OrderItem
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import InvalidTransitionError, NotFoundError, ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.domain import ArtworkAvailability, OrderStatus
from talanta_gallery.core.models.io.orders import OrderCreate, OrderPaymentUpdate
from talanta_gallery.core.monitoring import log_order_created
from talanta_gallery.notifications.mailer import Mailer
from talanta_gallery.notifications.order_receipts import send_order_receipt

logger = get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.pending: {OrderStatus.processing, OrderStatus.cancelled},
    OrderStatus.processing: {OrderStatus.completed, OrderStatus.cancelled},
    OrderStatus.completed: set(),
    OrderStatus.cancelled: set(),
}


def can_transition(current: str, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(OrderStatus(current), set())


@dataclass
class OrderWithItems:
    order: Order
    items: List[Tuple[OrderItem, Optional[Artwork]]]
    email_sent: Optional[bool] = None


class OrderService:
    def __init__(self, repos: RepoBundle, mailer: Optional[Mailer] = None) -> None:
        self.repos = repos
        self.mailer = mailer

    async def create(self, payload: OrderCreate) -> OrderWithItems:
        """Place an order from the storefront cart.

        Each item is priced at the artwork's current price and the total is
        fixed here; neither is recomputed later.

        Raises:
            ValidationFailedError: An artwork does not exist or is not available
        """
        artworks = await self.repos.artworks.get_many(
            [item.artwork_id for item in payload.items], public_only=True
        )
        total = Decimal("0")
        priced: List[Tuple[int, int, Decimal]] = []
        for item in payload.items:
            artwork = artworks.get(item.artwork_id)
            if artwork is None:
                raise ValidationFailedError(f"Artwork {item.artwork_id} not found")
            if artwork.availability != ArtworkAvailability.available.value:
                raise ValidationFailedError(f"Artwork '{artwork.title}' is not available")
            price = Decimal(artwork.price)
            priced.append((artwork.id, item.quantity, price))
            total += price * item.quantity

        order = Order(
            customer_email=payload.customer_email,
            customer_name=payload.customer_name,
            total_amount=total,
            status=OrderStatus.pending.value,
            payment_method=payload.payment_method,
        )
        order.set_customer_address(payload.customer_address)
        try:
            order = await self.repos.orders.create(order, commit=False)
            await self.repos.orders.add_items(
                [
                    OrderItem(order_id=order.id, artwork_id=artwork_id, quantity=quantity, price=price)
                    for artwork_id, quantity, price in priced
                ]
            )
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            raise

        log_order_created(order.id, str(total), len(priced))
        logger.info(f"Order {order.id} placed by {order.customer_email}: total={total}")

        detail = await self.get(order.id)
        if self.mailer is not None:
            detail.email_sent = await send_order_receipt(self.mailer, detail.order, detail.items)
        return detail

    async def get(self, order_id: int) -> OrderWithItems:
        order = await self.repos.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        items = await self.repos.orders.get_items_with_artworks(order_id)
        return OrderWithItems(order=order, items=items)

    async def _artwork_ids(self, order_id: int) -> List[int]:
        return [item.artwork_id for item in await self.repos.orders.get_items(order_id) if item.artwork_id is not None]

    async def _apply(self, order: Order, target: OrderStatus) -> None:
        """Move the order to ``target`` and update its artworks without committing.

        Only a processing order holds reservations, so cancelling a pending
        order leaves artwork availability alone.

        Raises:
            ValidationFailedError: Reserving found an artwork that is no longer available
        """
        artwork_ids = sorted(set(await self._artwork_ids(order.id)))
        if target == OrderStatus.processing:
            reserved = await self.repos.artworks.set_availability(
                artwork_ids, ArtworkAvailability.reserved.value, only_from=ArtworkAvailability.available.value
            )
            if reserved != len(artwork_ids):
                raise ValidationFailedError(
                    f"Order {order.id} includes artworks that are no longer available",
                    details={"order_id": order.id},
                )
        elif target == OrderStatus.completed:
            await self.repos.artworks.set_availability(artwork_ids, ArtworkAvailability.sold.value)
        elif target == OrderStatus.cancelled and order.status == OrderStatus.processing.value:
            await self.repos.artworks.set_availability(
                artwork_ids, ArtworkAvailability.available.value, only_from=ArtworkAvailability.reserved.value
            )
        order.status = target.value
        await self.repos.orders.update(order, commit=False)

    async def record_payment(self, order_id: int, payment: OrderPaymentUpdate) -> OrderWithItems:
        """Record a payment and move the order from pending to processing."""
        detail = await self.get(order_id)
        order = detail.order
        if not can_transition(order.status, OrderStatus.processing):
            raise InvalidTransitionError("order", order.status, OrderStatus.processing.value)
        order.payment_id = payment.payment_id
        order.payment_method = payment.payment_method
        try:
            await self._apply(order, OrderStatus.processing)
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            raise
        logger.info(f"Payment {payment.payment_id} recorded for order {order_id}")
        return await self.get(order_id)

    async def change_status(self, order_id: int, target: OrderStatus) -> OrderWithItems:
        detail = await self.get(order_id)
        order = detail.order
        previous = order.status
        if not can_transition(previous, target):
            raise InvalidTransitionError("order", previous, target.value)
        try:
            await self._apply(order, target)
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            raise
        logger.info(f"Order {order_id} moved from {previous} to {target.value}")
        return await self.get(order_id)
