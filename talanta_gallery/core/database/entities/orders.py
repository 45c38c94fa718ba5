"""
Order entity models.

This module contains the storefront order and its line items. ``total_amount``
is computed once from the artworks' prices when the order is placed and is
never recomputed; each item keeps the unit price it was sold at.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class Order(Base, table=True):
    """Customer order.

    Table: orders
    """

    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_email: str = Field(max_length=255, index=True)
    customer_name: str = Field(max_length=255)
    customer_address: str = Field(default="{}", sa_type=Text, description="JSON object with the postal address")

    total_amount: Decimal = Field(max_digits=10, decimal_places=2)
    status: str = Field(default="pending", max_length=16, index=True)
    payment_id: Optional[str] = Field(default=None, max_length=255)
    payment_method: Optional[str] = Field(default=None, max_length=64)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    def get_customer_address(self) -> Dict[str, Any]:
        """Get the customer address as a dict."""
        try:
            return json.loads(self.customer_address) if self.customer_address else {}
        except (json.JSONDecodeError, TypeError):
            return {}

    def set_customer_address(self, address: Dict[str, Any]) -> None:
        """Set the customer address from a dict."""
        self.customer_address = json.dumps(address)

    def __repr__(self) -> str:
        return f"Order(id={self.id}, status={self.status}, total={self.total_amount})"


class OrderItem(Base, table=True):
    """One artwork line of an order.

    Table: order_items
    """

    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True, ondelete="CASCADE")
    artwork_id: Optional[int] = Field(default=None, foreign_key="artworks.id", index=True, ondelete="SET NULL")
    quantity: int = Field(default=1)
    price: Decimal = Field(max_digits=10, decimal_places=2)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __repr__(self) -> str:
        return f"OrderItem(order_id={self.order_id}, artwork_id={self.artwork_id}, quantity={self.quantity})"
