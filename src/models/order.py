"""Order model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict
from uuid import UUID


class OrderStatus(str, Enum):
    """Order status values matching the order_status database enum.

    Orders move forward only: PROCESSING -> SHIPPING -> DELIVERED.
    """

    PROCESSING = "PROCESSING"
    SHIPPING = "SHIPPING"
    DELIVERED = "DELIVERED"


class Order(TypedDict):
    """Order table row representation.

    One row is stored per line item of a checkout.
    """

    id: UUID
    user_id: str
    product_id: UUID
    shipping_address_id: UUID
    price_paid_in_cents: int
    payment_intent_id: str
    status: OrderStatus
    quantity: int
    created_at: datetime
    updated_at: datetime


class OrderCreate(TypedDict):
    """Data required to create a new order row."""

    user_id: str
    product_id: str
    shipping_address_id: str
    price_paid_in_cents: int
    payment_intent_id: str
    status: str
    quantity: int
