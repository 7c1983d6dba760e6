"""Order Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from src.models.order import OrderStatus
from src.schemas.address import ShippingAddressResponse
from src.schemas.common import CamelModel
from src.schemas.product import ProductResponse


class OrderLineItem(CamelModel):
    """One product and quantity within a checkout."""

    product_id: UUID = Field(description="Product UUID")
    quantity: int = Field(ge=1, description="Units ordered")
    price: Decimal = Field(ge=0, description="Unit price in major currency units")


class ShippingAddressRef(CamelModel):
    """Reference to an existing shipping address."""

    id: UUID | None = Field(default=None, description="Shipping address UUID")


class PlaceOrderRequest(CamelModel):
    """Schema for POST /orders.

    Fields are optional at the schema level so that a missing field is
    reported by the checkout itself, before anything is written.
    """

    user_id: str | None = Field(default=None, description="Ordering user ID")
    items: list[OrderLineItem] | None = Field(default=None, description="Line items")
    shipping_address: ShippingAddressRef | None = Field(default=None, description="Shipping address reference")
    total_amount: Decimal | None = Field(default=None, description="Client-computed total")


class OrderResponse(CamelModel):
    """Schema for order API responses."""

    id: UUID = Field(description="Order unique identifier")
    user_id: str = Field(description="Ordering user ID")
    product_id: UUID = Field(description="Ordered product")
    shipping_address_id: UUID = Field(description="Shipping address")
    price_paid_in_cents: int = Field(description="Amount paid in cents")
    payment_intent_id: str = Field(description="Placeholder payment-intent token")
    status: OrderStatus = Field(description="Order status")
    quantity: int = Field(description="Units ordered")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")


class PlaceOrderResponse(CamelModel):
    """Schema for POST /orders responses."""

    success: bool = True
    orders: list[OrderResponse]


class OrderDetailResponse(OrderResponse):
    """Order joined with its product and shipping address."""

    product: ProductResponse | None = None
    shipping_address: ShippingAddressResponse | None = None
