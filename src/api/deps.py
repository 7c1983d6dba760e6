"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends

from src.core.gateway import PersistenceGateway, get_gateway
from src.services.address_service import AddressService
from src.services.cart_service import CartService
from src.services.chat_service import ChatService
from src.services.favorite_service import FavoriteService
from src.services.order_service import OrderService
from src.services.product_service import ProductService
from src.services.user_service import UserService

# Process-scoped persistence gateway, overridable in tests
Gateway = Annotated[PersistenceGateway, Depends(get_gateway)]


def get_product_service(gateway: Gateway) -> ProductService:
    """Get product service bound to the running gateway."""
    return ProductService(gateway)


def get_cart_service(gateway: Gateway) -> CartService:
    """Get cart service bound to the running gateway."""
    return CartService(gateway)


def get_favorite_service(gateway: Gateway) -> FavoriteService:
    """Get favorite service bound to the running gateway."""
    return FavoriteService(gateway)


def get_order_service(gateway: Gateway) -> OrderService:
    """Get order service bound to the running gateway."""
    return OrderService(gateway)


def get_address_service(gateway: Gateway) -> AddressService:
    """Get address service bound to the running gateway."""
    return AddressService(gateway)


def get_user_service(gateway: Gateway) -> UserService:
    """Get user service bound to the running gateway."""
    return UserService(gateway)


def get_chat_service() -> ChatService:
    """Get chat service."""
    return ChatService()
