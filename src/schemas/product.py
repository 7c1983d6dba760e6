"""Product Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.schemas.common import CamelModel


class ProductCreate(CamelModel):
    """Schema for creating a product via POST /products."""

    name: str = Field(min_length=1, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    image_url: str = Field(description="Product image URL")
    user_id: str = Field(description="Owner user ID")
    price_in_cents: int = Field(ge=0, description="Unit price in cents")
    available_for_purchase: bool = Field(default=False, description="Whether the product can be ordered")
    weight: str = Field(description="Display weight, e.g. '250g'")
    stock_quantity: int = Field(default=0, ge=0, description="Units in stock")
    category: str | None = Field(default=None, max_length=100, description="Product category")


class ProductUpdate(CamelModel):
    """Schema for updating a product via PUT /products/{id}.

    Only fields present in the request body are written.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    image_url: str | None = None
    price_in_cents: int | None = Field(default=None, ge=0)
    available_for_purchase: bool | None = None
    weight: str | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=100)


class ProductResponse(CamelModel):
    """Schema for product API responses."""

    id: UUID = Field(description="Product unique identifier")
    name: str = Field(description="Product name")
    description: str | None = Field(default=None, description="Product description")
    image_url: str = Field(description="Product image URL")
    user_id: str = Field(description="Owner user ID")
    price_in_cents: int = Field(description="Unit price in cents")
    available_for_purchase: bool = Field(description="Whether the product can be ordered")
    weight: str = Field(description="Display weight")
    stock_quantity: int = Field(description="Units in stock")
    category: str | None = Field(default=None, description="Product category")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")


class ProductSnapshot(CamelModel):
    """Immutable copy of a product as the client saw it when saving it.

    Stored on cart and favorite rows so the price at the time of adding
    stays distinct from the live catalog price.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
        extra="ignore",
    )

    id: str = Field(min_length=1, description="Product ID")
    name: str | None = Field(default=None, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    image_url: str | None = Field(default=None, description="Product image URL")
    price_in_cents: int | None = Field(default=None, ge=0, description="Unit price in cents when saved")
    weight: str | None = Field(default=None, description="Display weight")
    category: str | None = Field(default=None, description="Product category")

    def to_row_value(self) -> dict:
        """Serialize for the product_data JSONB column."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Live catalog row first; a bare snapshot only when the product is gone
ProductOrSnapshot = Annotated[ProductResponse | ProductSnapshot, Field(union_mode="left_to_right")]
