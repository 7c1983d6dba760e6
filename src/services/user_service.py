"""User profile service."""

from typing import Any

from src.core.gateway import PersistenceGateway, get_gateway


class UserService:
    """Service for user profile reads."""

    def __init__(self, gateway: PersistenceGateway | None = None):
        self._gateway = gateway

    @property
    def gateway(self) -> PersistenceGateway:
        """Get persistence gateway."""
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    async def get_user_with_stats(self, user_id: str) -> dict[str, Any] | None:
        """Get a user with cart, favorite and order counters.

        Args:
            user_id: User ID.

        Returns:
            dict | None: User row plus a ``stats`` dict, or None if not found.
        """
        user = await self.gateway.select_one("users", {"id": user_id})
        if user is None:
            return None

        cart_items = await self.gateway.select_where("cart_items", {"user_id": user_id})
        favorites = await self.gateway.select_where("favorites", {"user_id": user_id})
        orders = await self.gateway.select_where("orders", {"user_id": user_id})

        return {
            **user,
            "stats": {
                "cart_count": sum(item["quantity"] for item in cart_items),
                "favorites_count": len(favorites),
                "orders_count": len(orders),
            },
        }
