"""Cart item model type definitions for database operations."""

from datetime import datetime
from typing import Any, TypedDict
from uuid import UUID


class CartItem(TypedDict):
    """Cart item table row representation.

    product_data holds the product snapshot taken when the item was added.
    """

    id: UUID
    user_id: str
    product_id: UUID
    quantity: int
    product_data: dict[str, Any]
    created_at: datetime
    updated_at: datetime
