"""Product model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Product(TypedDict):
    """Product table row representation.

    Represents a product stored in the products table. Prices are stored
    in cents and stock_quantity is kept non-negative by the stock functions.
    """

    id: UUID
    name: str
    description: str | None
    image_url: str
    user_id: str
    price_in_cents: int
    available_for_purchase: bool
    weight: str
    stock_quantity: int
    category: str | None
    created_at: datetime
    updated_at: datetime


class ProductCreate(TypedDict, total=False):
    """Data required to create a new product."""

    name: str
    description: str | None
    image_url: str
    user_id: str
    price_in_cents: int
    available_for_purchase: bool
    weight: str
    stock_quantity: int
    category: str | None


class ProductUpdate(TypedDict, total=False):
    """Data that can be updated on a product."""

    name: str
    description: str | None
    image_url: str
    price_in_cents: int
    available_for_purchase: bool
    weight: str
    stock_quantity: int
    category: str | None
