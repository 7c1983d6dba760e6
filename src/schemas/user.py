"""User Pydantic schemas for API response models."""

from datetime import datetime

from pydantic import Field

from src.models.user import UserRole
from src.schemas.common import CamelModel


class UserStats(CamelModel):
    """Activity counters shown on the user profile."""

    cart_count: int = Field(description="Units across all cart items")
    favorites_count: int = Field(description="Number of favorites")
    orders_count: int = Field(description="Number of order rows")


class UserResponse(CamelModel):
    """Schema for GET /users/{id}."""

    id: str
    name: str
    email: str
    image_url: str | None = None
    role: UserRole | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    stats: UserStats
