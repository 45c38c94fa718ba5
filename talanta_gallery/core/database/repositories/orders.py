"""
Order repository implementation.

This module provides data access operations for orders and their line items.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select

from ..entities.artworks import Artwork
from ..entities.orders import Order, OrderItem
from .base import BaseRepository, QueryBuilder


class OrderRepository(BaseRepository[Order]):
    """Repository for order data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Order)

    async def add_items(self, items: List[OrderItem]) -> None:
        """Stage order items in the current transaction without committing."""
        self.session.add_all(items)
        await self.session.flush()

    async def get_items(self, order_id: int) -> List[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_items_with_artworks(self, order_id: int) -> List[Tuple[OrderItem, Optional[Artwork]]]:
        """Order items joined to their artworks; the artwork is None if it was deleted."""
        stmt = (
            select(OrderItem, Artwork)
            .outerjoin(Artwork, Artwork.id == OrderItem.artwork_id)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        result = await self.session.execute(stmt)
        return [(item, artwork) for item, artwork in result.all()]

    async def list_orders(
        self, status: Optional[str] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Order]:
        stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())  # type: ignore
        stmt = QueryBuilder.apply_filters(stmt, Order, {"status": status})
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_artist(
        self, artist_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Order]:
        """Orders containing at least one artwork of the given artist, newest first."""
        order_ids = (
            select(OrderItem.order_id)
            .join(Artwork, Artwork.id == OrderItem.artwork_id)
            .where(Artwork.artist_id == artist_id)
        )
        stmt = (
            select(Order)
            .where(Order.id.in_(order_ids))  # type: ignore
            .order_by(Order.created_at.desc(), Order.id.desc())  # type: ignore
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def revenue(self, status: str = "completed") -> Decimal:
        """Sum of ``total_amount`` over orders in the given status."""
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0)).where(Order.status == status)
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))
