"""Favorite model type definitions for database operations."""

from datetime import datetime
from typing import Any, TypedDict
from uuid import UUID


class Favorite(TypedDict):
    """Favorite table row representation."""

    id: UUID
    user_id: str
    product_id: UUID
    product_data: dict[str, Any]
    created_at: datetime
