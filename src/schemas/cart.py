"""Cart Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.schemas.common import CamelModel
from src.schemas.product import ProductOrSnapshot, ProductSnapshot


class CartAddRequest(CamelModel):
    """Schema for POST /cart/{user_id}/add."""

    product: ProductSnapshot | None = Field(default=None, description="Product as displayed to the user")
    quantity: int = Field(default=1, ge=1, description="Units to add")


class CartUpdateRequest(CamelModel):
    """Schema for PUT /cart/{user_id}/update.

    A quantity of zero or less removes the item.
    """

    product_id: UUID | None = Field(default=None, description="Product to update")
    quantity: int | None = Field(default=None, description="New quantity")


class CartItemResponse(CamelModel):
    """A cart row, optionally joined with its product."""

    id: UUID = Field(description="Cart item ID")
    user_id: str = Field(description="Owning user ID")
    product_id: UUID = Field(description="Product ID")
    quantity: int = Field(description="Units in cart")
    product_data: ProductSnapshot = Field(description="Product snapshot taken when added")
    product: ProductOrSnapshot | None = Field(
        default=None,
        description="Live product, or the snapshot if the product no longer exists",
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartResponse(CamelModel):
    """Schema for GET /cart/{user_id}."""

    items: list[CartItemResponse] = Field(description="Cart items")
    total_items: int = Field(description="Sum of item quantities")
    total_price: float = Field(description="Cart total in major currency units")


class CartUpdateResponse(CamelModel):
    """Schema for PUT /cart/{user_id}/update."""

    success: bool = True
    item: CartItemResponse | None = None
    message: str | None = None


class CartCountResponse(CamelModel):
    """Schema for GET /cart/{user_id}/count."""

    count: int = Field(description="Sum of item quantities")
