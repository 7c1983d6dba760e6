"""Product service for catalog CRUD operations."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from src.core.gateway import PersistenceGateway, get_gateway
from src.models.product import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product operations."""

    def __init__(self, gateway: PersistenceGateway | None = None):
        """Initialize product service.

        Args:
            gateway: Optional persistence gateway, resolved lazily when omitted.
        """
        self._gateway = gateway

    @property
    def gateway(self) -> PersistenceGateway:
        """Get persistence gateway."""
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    async def list_products(self) -> list[Product]:
        """List all products, newest first."""
        return await self.gateway.select_where(
            "products", order_by="created_at", descending=True
        )

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a new product.

        Args:
            data: Product creation data.

        Returns:
            Product: Created product.
        """
        product = await self.gateway.insert("products", dict(data))
        logger.info("Created product %s", product["id"])
        return product

    async def get_product(self, product_id: UUID | str) -> Product | None:
        """Get a product by ID.

        Args:
            product_id: Product UUID.

        Returns:
            Product or None if not found.
        """
        return await self.gateway.select_one("products", {"id": str(product_id)})

    async def update_product(self, product_id: UUID | str, data: ProductUpdate) -> Product | None:
        """Update a product.

        Args:
            product_id: Product UUID.
            data: Fields to write. Empty data leaves the product untouched.

        Returns:
            Product or None if not found.
        """
        update_data: dict[str, Any] = dict(data)
        if not update_data:
            return await self.get_product(product_id)

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        rows = await self.gateway.update_where("products", update_data, {"id": str(product_id)})
        if not rows:
            return None

        logger.info("Updated product %s", product_id)
        return rows[0]

    async def delete_product(self, product_id: UUID | str) -> Product | None:
        """Delete a product.

        Returns:
            The deleted product, or None if it did not exist.
        """
        rows = await self.gateway.delete_where("products", {"id": str(product_id)})
        if not rows:
            return None

        logger.info("Deleted product %s", product_id)
        return rows[0]

    async def get_products_by_ids(self, product_ids: list[UUID | str]) -> list[Product]:
        """Get multiple products by their IDs.

        Args:
            product_ids: List of product UUIDs.

        Returns:
            list[Product]: Products found, in no particular order.
        """
        unique_ids = list(dict.fromkeys(str(pid) for pid in product_ids))
        return await self.gateway.select_in("products", "id", unique_ids)


def index_by_id(rows: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Map rows by their stringified ``id`` for in-memory joins."""
    return {str(row["id"]): row for row in rows}
