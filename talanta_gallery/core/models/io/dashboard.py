"""
Back-office dashboard I/O models.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    approved_artists: int
    pending_artists: int
    artworks: int
    available_artworks: int
    orders: int
    pending_orders: int
    revenue: Decimal
    users: int
    newsletter_subscribers: int
