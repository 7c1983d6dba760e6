"""Shipping address model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class ShippingAddress(TypedDict):
    """Shipping address table row representation."""

    id: UUID
    user_id: str
    full_name: str
    country: str
    province: str
    city: str
    address: str
    phone_number: str
    created_at: datetime
    updated_at: datetime


class ShippingAddressCreate(TypedDict):
    """Data required to create a new shipping address."""

    user_id: str
    full_name: str
    country: str
    province: str
    city: str
    address: str
    phone_number: str
