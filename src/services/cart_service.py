"""Cart service for per-user shopping cart operations."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.core.gateway import PersistenceGateway, get_gateway
from src.models.cart import CartItem
from src.schemas.product import ProductSnapshot
from src.services.product_service import ProductService, index_by_id

logger = logging.getLogger(__name__)


def attach_products(rows: list[dict[str, Any]], products: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Join rows carrying a product snapshot with the live products.

    Rows whose product no longer exists keep their snapshot as ``product``.
    """
    by_id = index_by_id(products)
    joined = []
    for row in rows:
        product = by_id.get(str(row["product_id"]))
        if product is None:
            product = ProductSnapshot.model_validate(row["product_data"])
        joined.append({**row, "product": product})
    return joined


def unit_price_cents(product: dict[str, Any] | ProductSnapshot | None) -> int:
    """Unit price of a live product row or a snapshot, 0 when unknown."""
    if product is None:
        return 0
    if isinstance(product, ProductSnapshot):
        return product.price_in_cents or 0
    return product.get("price_in_cents") or 0


class CartService:
    """Service for cart operations."""

    def __init__(
        self,
        gateway: PersistenceGateway | None = None,
        product_service: ProductService | None = None,
    ):
        """Initialize cart service.

        Args:
            gateway: Optional persistence gateway, resolved lazily when omitted.
            product_service: Optional product service for testing.
        """
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

    async def get_items(self, user_id: str) -> list[CartItem]:
        """Get the raw cart rows for a user."""
        return await self.gateway.select_where("cart_items", {"user_id": user_id})

    async def get_cart(self, user_id: str) -> dict[str, Any]:
        """Get a user's cart with live product data and totals.

        Returns:
            dict: ``items`` joined with products, ``total_items`` (sum of
            quantities) and ``total_price`` in major currency units.
        """
        rows = await self.get_items(user_id)
        products = await self.product_service.get_products_by_ids([row["product_id"] for row in rows])
        items = attach_products(rows, products)

        total_items = sum(item["quantity"] for item in items)
        total_cents = sum(unit_price_cents(item["product"]) * item["quantity"] for item in items)

        return {
            "items": items,
            "total_items": total_items,
            "total_price": total_cents / 100,
        }

    async def add_item(
        self, user_id: str, product: ProductSnapshot | None, quantity: int = 1
    ) -> CartItem:
        """Add a product to the cart, merging with an existing row.

        The stored snapshot is refreshed on every add.

        Raises:
            ValidationError: If the product is missing.
        """
        if product is None or not product.id:
            raise ValidationError("Product information is incomplete")

        existing = await self.gateway.select_one(
            "cart_items", {"user_id": user_id, "product_id": product.id}
        )

        if existing:
            rows = await self.gateway.update_where(
                "cart_items",
                {
                    "quantity": existing["quantity"] + quantity,
                    "product_data": product.to_row_value(),
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
                {"id": existing["id"]},
            )
            if not rows:
                raise NotFoundError("Cart item not found")
            return rows[0]

        return await self.gateway.insert(
            "cart_items",
            {
                "user_id": user_id,
                "product_id": product.id,
                "quantity": quantity,
                "product_data": product.to_row_value(),
            },
        )

    async def update_quantity(
        self, user_id: str, product_id: UUID | str | None, quantity: int | None
    ) -> CartItem | None:
        """Set the quantity of a cart item.

        Returns:
            The updated row, or None when a non-positive quantity removed it.

        Raises:
            ValidationError: If product_id or quantity is missing.
            NotFoundError: If the product is not in the cart.
        """
        if not product_id or quantity is None:
            raise ValidationError("Incomplete information")

        filters = {"user_id": user_id, "product_id": str(product_id)}

        if quantity <= 0:
            await self.gateway.delete_where("cart_items", filters)
            return None

        rows = await self.gateway.update_where(
            "cart_items",
            {"quantity": quantity, "updated_at": datetime.now(timezone.utc).isoformat()},
            filters,
        )
        if not rows:
            raise NotFoundError("Cart item not found")
        return rows[0]

    async def remove_item(self, user_id: str, product_id: UUID | str) -> None:
        """Remove a product from the cart. Missing items are ignored."""
        await self.gateway.delete_where(
            "cart_items", {"user_id": user_id, "product_id": str(product_id)}
        )

    async def clear_cart(self, user_id: str) -> int:
        """Remove every item from a user's cart.

        Returns:
            int: Number of rows deleted.
        """
        rows = await self.gateway.delete_where("cart_items", {"user_id": user_id})
        logger.info("Cleared %d cart item(s) for user %s", len(rows), user_id)
        return len(rows)

    async def count_items(self, user_id: str) -> int:
        """Sum of quantities across a user's cart."""
        rows = await self.get_items(user_id)
        return sum(row["quantity"] for row in rows)
