"""Shipping address Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.schemas.common import CamelModel


class ShippingAddressCreate(CamelModel):
    """Schema for POST /addresses/{user_id}/add."""

    full_name: str = Field(min_length=1, description="Recipient name")
    country: str = Field(min_length=1)
    province: str = Field(min_length=1)
    city: str = Field(min_length=1)
    address: str = Field(min_length=1, description="Street address")
    phone_number: str = Field(min_length=1)


class ShippingAddressResponse(CamelModel):
    """Schema for shipping address API responses."""

    id: UUID
    user_id: str
    full_name: str
    country: str
    province: str
    city: str
    address: str
    phone_number: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
