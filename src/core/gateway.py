"""Persistence gateway over the Supabase (PostgREST) database.

The gateway is a process-scoped resource: it is created once at application
startup by ``init_gateway()``, handed to services through dependency
injection, and drained by ``shutdown_gateway()`` when the application stops.
"""

import logging
from typing import Any, Protocol
from uuid import UUID

import httpx
from postgrest.exceptions import APIError as PostgrestAPIError
from supabase import Client

from src.api.middleware.error_handler import PersistenceError
from src.core.supabase import create_http_client, create_supabase_client

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """Row-level access to the storefront tables."""

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]: ...

    async def select_one(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None: ...

    async def select_where(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]: ...

    async def select_in(self, table: str, column: str, values: list[Any]) -> list[dict[str, Any]]: ...

    async def update_where(
        self, table: str, values: dict[str, Any], filters: dict[str, Any]
    ) -> list[dict[str, Any]]: ...

    async def delete_where(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]: ...

    async def decrement_stock(self, product_id: UUID | str, quantity: int) -> int | None: ...

    async def restock(self, product_id: UUID | str, quantity: int) -> int | None: ...

    async def check_connection(self) -> dict[str, Any]: ...


def _to_db_value(value: Any) -> Any:
    """Convert Python values into their PostgREST filter representation."""
    if isinstance(value, UUID):
        return str(value)
    return value


class SupabaseGateway:
    """Persistence gateway backed by a Supabase client.

    Stock mutations go through SQL functions (see ``supabase/migrations``)
    so that the check and the write happen in a single statement.
    """

    def __init__(self, client: Client, http_client: httpx.Client | None = None) -> None:
        """Initialize the gateway.

        Args:
            client: Supabase client used for all queries.
            http_client: HTTP client owned by this gateway, closed on shutdown.
        """
        self.client = client
        self._http_client = http_client

    def _execute(self, operation: str, target: str, query: Any) -> Any:
        """Execute a built query, translating driver failures into PersistenceError."""
        try:
            return query.execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error("Database %s on %s failed: %s", operation, target, e)
            raise PersistenceError(f"Database {operation} on {target} failed") from e

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it as stored."""
        response = self._execute("insert", table, self.client.table(table).insert(row))
        if not response.data:
            raise PersistenceError(f"Insert into {table} returned no row")
        return response.data[0]

    async def select_one(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first row matching every equality filter, or None."""
        query = self.client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, _to_db_value(value))
        response = self._execute("select", table, query.limit(1))
        return response.data[0] if response.data else None

    async def select_where(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return all rows matching every equality filter."""
        query = self.client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, _to_db_value(value))
        if order_by:
            query = query.order(order_by, desc=descending)
        response = self._execute("select", table, query)
        return response.data or []

    async def select_in(self, table: str, column: str, values: list[Any]) -> list[dict[str, Any]]:
        """Return rows whose column value is one of ``values``."""
        if not values:
            return []
        query = self.client.table(table).select("*").in_(column, [_to_db_value(v) for v in values])
        response = self._execute("select", table, query)
        return response.data or []

    async def update_where(
        self, table: str, values: dict[str, Any], filters: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update matching rows and return them."""
        query = self.client.table(table).update(values)
        for column, value in filters.items():
            query = query.eq(column, _to_db_value(value))
        response = self._execute("update", table, query)
        return response.data or []

    async def delete_where(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """Delete matching rows and return them."""
        if not filters:
            raise ValueError("Refusing to delete without filters")
        query = self.client.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, _to_db_value(value))
        response = self._execute("delete", table, query)
        return response.data or []

    async def decrement_stock(self, product_id: UUID | str, quantity: int) -> int | None:
        """Atomically take ``quantity`` units out of a product's stock.

        Returns:
            int | None: Remaining stock, or None if the product does not exist
            or has fewer than ``quantity`` units.
        """
        query = self.client.rpc(
            "decrement_product_stock",
            {"p_product_id": str(product_id), "p_quantity": quantity},
        )
        response = self._execute("rpc", "decrement_product_stock", query)
        return response.data

    async def restock(self, product_id: UUID | str, quantity: int) -> int | None:
        """Atomically put ``quantity`` units back into a product's stock."""
        query = self.client.rpc(
            "increment_product_stock",
            {"p_product_id": str(product_id), "p_quantity": quantity},
        )
        response = self._execute("rpc", "increment_product_stock", query)
        return response.data

    async def check_connection(self) -> dict[str, Any]:
        """Check if database connection is healthy.

        Returns:
            dict: Connection status with 'healthy' boolean and optional 'error' message.
        """
        try:
            self.client.table("products").select("id").limit(1).execute()
            return {"healthy": True}
        except Exception as e:
            return {"healthy": False, "error": str(e)}

    def close(self) -> None:
        """Close pooled HTTP connections."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None


# Global gateway instance, owned by the application lifespan
_gateway: SupabaseGateway | None = None


def get_gateway() -> PersistenceGateway:
    """Get the running persistence gateway.

    Raises:
        RuntimeError: If called before init_gateway().
    """
    if _gateway is None:
        raise RuntimeError("Persistence gateway is not initialized")
    return _gateway


async def init_gateway() -> PersistenceGateway:
    """Create the persistence gateway. Call at app startup."""
    global _gateway
    if _gateway is None:
        http_client = create_http_client()
        _gateway = SupabaseGateway(create_supabase_client(http_client), http_client)
    return _gateway


async def shutdown_gateway() -> None:
    """Drain the persistence gateway. Call at app shutdown."""
    global _gateway
    if _gateway is not None:
        _gateway.close()
        _gateway = None
