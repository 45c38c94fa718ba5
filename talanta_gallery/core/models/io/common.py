"""
Shared I/O models.
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

ItemType = TypeVar("ItemType")
T = TypeVar("T")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


class Page(BaseModel, Generic[ItemType]):
    """One page of a server-side paginated listing."""

    items: List[ItemType]
    total: int = Field(description="Number of rows matching the filters")
    limit: int
    offset: int


def reject_null(value: Optional[T]) -> T:
    """Body of the partial-update validators for fields whose column is NOT NULL.

    Omitting such a field leaves it unchanged; sending an explicit ``null``
    is a validation error.
    """
    if value is None:
        raise ValueError("may be omitted but not null")
    return value
