"""
Orders API Endpoints.

Checkout, order lookup, payment recording and the admin status workflow.
Prices come from the artworks at checkout; the client only sends artwork ids
and quantities.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from talanta_gallery.core.models.domain import OrderStatus
from talanta_gallery.core.models.io.orders import (
    OrderCreate,
    OrderDetail,
    OrderPaymentUpdate,
    OrderRead,
    OrderStatusUpdate,
    order_detail,
)
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.deps import MailerDep, ReposDep
from talanta_gallery.server.services.orders import OrderService

router = APIRouter()


@router.post(
    "",
    response_model=OrderDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Place Order",
    description="""
    Place an order for available artworks.

    Each line is priced at the artwork's current price and the total is the sum
    of price x quantity. A receipt is emailed to the customer; `email_sent`
    reports whether it was delivered.
    """,
    responses={400: {"description": "Artwork not found or not available"}},
)
async def create_order(payload: OrderCreate, repos: ReposDep, mailer: MailerDep) -> OrderDetail:
    result = await OrderService(repos, mailer).create(payload)
    return order_detail(result.order, result.items, email_sent=result.email_sent)


@router.get("", response_model=List[OrderRead], summary="List Orders")
async def list_orders(
    _: CurrentAdmin,
    repos: ReposDep,
    order_status: Optional[OrderStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[OrderRead]:
    orders = await repos.orders.list_orders(
        status=order_status.value if order_status else None, limit=limit, offset=offset
    )
    return [OrderRead.model_validate(o) for o in orders]


@router.get(
    "/{order_id}",
    response_model=OrderDetail,
    summary="Get Order",
    description="Order with its line items and the artworks they refer to.",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_id: int, repos: ReposDep) -> OrderDetail:
    result = await OrderService(repos).get(order_id)
    return order_detail(result.order, result.items)


@router.patch(
    "/{order_id}/payment",
    response_model=OrderDetail,
    summary="Record Payment",
    description="Record the payment reference, move the order to processing and reserve its artworks.",
    responses={
        400: {"description": "Order is not pending"},
        404: {"description": "Order not found"},
    },
)
async def record_payment(order_id: int, payload: OrderPaymentUpdate, repos: ReposDep) -> OrderDetail:
    result = await OrderService(repos).record_payment(order_id, payload)
    return order_detail(result.order, result.items)


@router.patch(
    "/{order_id}/status",
    response_model=OrderDetail,
    summary="Change Order Status",
    description="""
    Move an order along its workflow:

    - pending -> processing | cancelled
    - processing -> completed | cancelled

    Completing marks the artworks sold; cancelling releases reserved artworks.
    """,
    responses={
        400: {"description": "Transition not allowed"},
        404: {"description": "Order not found"},
    },
)
async def change_order_status(
    order_id: int, payload: OrderStatusUpdate, _: CurrentAdmin, repos: ReposDep
) -> OrderDetail:
    result = await OrderService(repos).change_status(order_id, payload.status)
    return order_detail(result.order, result.items)
