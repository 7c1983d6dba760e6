"""Database model type definitions."""

from src.models.cart import CartItem
from src.models.favorite import Favorite
from src.models.order import Order, OrderStatus
from src.models.product import Product
from src.models.shipping_address import ShippingAddress
from src.models.user import User, UserRole

__all__ = [
    "CartItem",
    "Favorite",
    "Order",
    "OrderStatus",
    "Product",
    "ShippingAddress",
    "User",
    "UserRole",
]
