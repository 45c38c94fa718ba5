"""
Order I/O models for API requests and responses.

Prices are never accepted from the client: order lines carry only the artwork
and quantity, and the server snapshots each artwork's current price.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from talanta_gallery.core.models.domain import OrderStatus


class OrderItemCreate(BaseModel):
    artwork_id: int
    quantity: int = Field(default=1, ge=1, le=100)


class OrderCreate(BaseModel):
    """Body of ``POST /api/orders``."""

    customer_email: EmailStr
    customer_name: str = Field(min_length=1, max_length=255)
    customer_address: Dict[str, Any] = Field(default_factory=dict)
    items: List[OrderItemCreate] = Field(min_length=1)
    payment_method: Optional[str] = Field(default=None, max_length=64)

    @field_validator("customer_email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class OrderItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artwork_id: Optional[int] = None
    quantity: int
    price: Decimal
    artwork_title: Optional[str] = None
    artwork_image_url: Optional[str] = None


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_email: str
    customer_name: str
    customer_address: Dict[str, Any]
    total_amount: Decimal
    status: str
    payment_id: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("customer_address", mode="before")
    @classmethod
    def _parse_address(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value) if value else {}
            except json.JSONDecodeError:
                return {}
        return value


class OrderDetail(OrderRead):
    """Order with its line items."""

    items: List[OrderItemRead]
    email_sent: Optional[bool] = Field(default=None, description="Set on creation: whether the receipt was delivered")


class OrderPaymentUpdate(BaseModel):
    payment_id: str = Field(min_length=1, max_length=255)
    payment_method: str = Field(min_length=1, max_length=64)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


def order_detail(order, items, email_sent: Optional[bool] = None) -> OrderDetail:
    """Build ``OrderDetail`` from an order and its ``(OrderItem, Artwork | None)`` rows."""
    data = OrderRead.model_validate(order).model_dump()
    return OrderDetail(
        **data,
        items=[
            OrderItemRead(
                id=item.id,
                artwork_id=item.artwork_id,
                quantity=item.quantity,
                price=item.price,
                artwork_title=artwork.title if artwork is not None else None,
                artwork_image_url=artwork.image_url if artwork is not None else None,
            )
            for item, artwork in items
        ],
        email_sent=email_sent,
    )
