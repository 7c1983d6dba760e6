"""Favorite service for per-user saved products."""

from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import ValidationError
from src.core.gateway import PersistenceGateway, get_gateway
from src.models.favorite import Favorite
from src.schemas.product import ProductSnapshot
from src.services.cart_service import attach_products
from src.services.product_service import ProductService


class FavoriteService:
    """Service for favorite operations."""

    def __init__(
        self,
        gateway: PersistenceGateway | None = None,
        product_service: ProductService | None = None,
    ):
        self._gateway = gateway
        self._product_service = product_service

    @property
    def gateway(self) -> PersistenceGateway:
        """Get persistence gateway."""
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    @property
    def product_service(self) -> ProductService:
        """Get product service."""
        if self._product_service is None:
            self._product_service = ProductService(self.gateway)
        return self._product_service

    async def get_items(self, user_id: str) -> list[Favorite]:
        """Get the raw favorite rows for a user."""
        return await self.gateway.select_where("favorites", {"user_id": user_id})

    async def list_favorites(self, user_id: str) -> dict[str, Any]:
        """Get a user's favorites joined with live product data."""
        rows = await self.get_items(user_id)
        products = await self.product_service.get_products_by_ids([row["product_id"] for row in rows])
        return {
            "items": attach_products(rows, products),
            "total_favorites": len(rows),
        }

    async def add_favorite(self, user_id: str, product: ProductSnapshot | None) -> Favorite:
        """Save a product as a favorite.

        Adding an existing favorite returns the stored row unchanged.

        Raises:
            ValidationError: If the product is missing.
        """
        if product is None or not product.id:
            raise ValidationError("Product information is incomplete")

        existing = await self.gateway.select_one(
            "favorites", {"user_id": user_id, "product_id": product.id}
        )
        if existing:
            return existing

        return await self.gateway.insert(
            "favorites",
            {
                "user_id": user_id,
                "product_id": product.id,
                "product_data": product.to_row_value(),
            },
        )

    async def remove_favorite(self, user_id: str, product_id: UUID | str) -> None:
        """Remove a favorite. Missing favorites are ignored."""
        await self.gateway.delete_where(
            "favorites", {"user_id": user_id, "product_id": str(product_id)}
        )

    async def is_favorite(self, user_id: str, product_id: UUID | str) -> bool:
        """Check whether a product is in a user's favorites."""
        row = await self.gateway.select_one(
            "favorites", {"user_id": user_id, "product_id": str(product_id)}
        )
        return row is not None
