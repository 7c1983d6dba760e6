"""Favorite Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.schemas.common import CamelModel
from src.schemas.product import ProductOrSnapshot, ProductSnapshot


class FavoriteAddRequest(CamelModel):
    """Schema for POST /favorites/{user_id}/add."""

    product: ProductSnapshot | None = Field(default=None, description="Product as displayed to the user")


class FavoriteResponse(CamelModel):
    """A favorite row, optionally joined with its product."""

    id: UUID
    user_id: str
    product_id: UUID
    product_data: ProductSnapshot
    product: ProductOrSnapshot | None = None
    created_at: datetime | None = None


class FavoriteListResponse(CamelModel):
    """Schema for GET /favorites/{user_id}."""

    items: list[FavoriteResponse]
    total_favorites: int


class FavoriteCheckResponse(CamelModel):
    """Schema for GET /favorites/{user_id}/check/{product_id}."""

    is_favorite: bool
