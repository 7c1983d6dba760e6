"""Unit tests for the Supabase persistence gateway."""

from unittest.mock import MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from postgrest.exceptions import APIError as PostgrestAPIError

import src.core.gateway as gateway_module
from src.api.middleware.error_handler import PersistenceError
from src.core.gateway import (
    SupabaseGateway,
    get_gateway,
    init_gateway,
    shutdown_gateway,
)


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock Supabase client whose queries chain onto themselves."""
    client = MagicMock()
    query = client.table.return_value
    for method in ("select", "insert", "update", "delete", "eq", "in_", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    return client


@pytest.fixture
def query(mock_client: MagicMock) -> MagicMock:
    """Return the chained query mock."""
    return mock_client.table.return_value


@pytest.fixture
def supabase_gateway(mock_client: MagicMock) -> SupabaseGateway:
    """Create a gateway over the mock client."""
    return SupabaseGateway(mock_client)


class TestQueries:
    """Tests for row-level operations."""

    @pytest.mark.asyncio
    async def test_insert_returns_stored_row(self, supabase_gateway, mock_client, query) -> None:
        """Test that insert returns the first returned row."""
        query.execute.return_value = MagicMock(data=[{"id": "abc", "name": "Saffron"}])

        row = await supabase_gateway.insert("products", {"name": "Saffron"})

        assert row == {"id": "abc", "name": "Saffron"}
        mock_client.table.assert_called_with("products")
        query.insert.assert_called_once_with({"name": "Saffron"})

    @pytest.mark.asyncio
    async def test_insert_without_returned_row_raises(self, supabase_gateway, query) -> None:
        """Test that an empty insert response is treated as a failure."""
        query.execute.return_value = MagicMock(data=[])

        with pytest.raises(PersistenceError):
            await supabase_gateway.insert("orders", {"quantity": 1})

    @pytest.mark.asyncio
    async def test_select_one_applies_filters(self, supabase_gateway, query) -> None:
        """Test that every filter becomes an eq clause and UUIDs are stringified."""
        product_id = uuid4()
        query.execute.return_value = MagicMock(data=[{"id": str(product_id)}])

        row = await supabase_gateway.select_one("cart_items", {"user_id": "user_123", "product_id": product_id})

        assert row == {"id": str(product_id)}
        query.eq.assert_any_call("user_id", "user_123")
        query.eq.assert_any_call("product_id", str(product_id))
        query.limit.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_select_one_returns_none_when_missing(self, supabase_gateway) -> None:
        """Test that no match gives None."""
        assert await supabase_gateway.select_one("users", {"id": "nobody"}) is None

    @pytest.mark.asyncio
    async def test_select_where_orders_results(self, supabase_gateway, query) -> None:
        """Test ordering arguments."""
        await supabase_gateway.select_where("orders", {"user_id": "u"}, order_by="created_at", descending=True)

        query.order.assert_called_once_with("created_at", desc=True)

    @pytest.mark.asyncio
    async def test_select_in_skips_empty_lists(self, supabase_gateway, mock_client) -> None:
        """Test that no query is sent for an empty id list."""
        assert await supabase_gateway.select_in("products", "id", []) == []
        mock_client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_requires_filters(self, supabase_gateway) -> None:
        """Test that an unfiltered delete is refused."""
        with pytest.raises(ValueError):
            await supabase_gateway.delete_where("cart_items", {})

    @pytest.mark.asyncio
    async def test_postgrest_error_becomes_persistence_error(self, supabase_gateway, query) -> None:
        """Test that driver errors are translated."""
        query.execute.side_effect = PostgrestAPIError({"message": "relation does not exist", "code": "42P01"})

        with pytest.raises(PersistenceError) as exc_info:
            await supabase_gateway.select_where("products")

        assert exc_info.value.status_code == 500
        assert "relation does not exist" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_network_error_becomes_persistence_error(self, supabase_gateway, query) -> None:
        """Test that transport failures are translated."""
        query.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(PersistenceError):
            await supabase_gateway.update_where("products", {"name": "x"}, {"id": "1"})


class TestStockFunctions:
    """Tests for the stock RPC wrappers."""

    @pytest.mark.asyncio
    async def test_decrement_stock_calls_rpc(self, supabase_gateway, mock_client) -> None:
        """Test RPC name, parameters and returned remaining stock."""
        product_id = uuid4()
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=7)

        remaining = await supabase_gateway.decrement_stock(product_id, 3)

        assert remaining == 7
        mock_client.rpc.assert_called_once_with(
            "decrement_product_stock",
            {"p_product_id": str(product_id), "p_quantity": 3},
        )

    @pytest.mark.asyncio
    async def test_decrement_stock_returns_none_when_refused(self, supabase_gateway, mock_client) -> None:
        """Test that a refused decrement gives None."""
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=None)

        assert await supabase_gateway.decrement_stock("p1", 50) is None

    @pytest.mark.asyncio
    async def test_restock_calls_rpc(self, supabase_gateway, mock_client) -> None:
        """Test the restock RPC."""
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=10)

        assert await supabase_gateway.restock("p1", 3) == 10
        mock_client.rpc.assert_called_once_with(
            "increment_product_stock",
            {"p_product_id": "p1", "p_quantity": 3},
        )


class TestConnectionCheck:
    """Tests for check_connection."""

    @pytest.mark.asyncio
    async def test_healthy(self, supabase_gateway) -> None:
        """Test a reachable database."""
        assert await supabase_gateway.check_connection() == {"healthy": True}

    @pytest.mark.asyncio
    async def test_unhealthy(self, supabase_gateway, query) -> None:
        """Test that failures are reported, not raised."""
        query.execute.side_effect = Exception("connection refused")

        result = await supabase_gateway.check_connection()

        assert result["healthy"] is False
        assert "connection refused" in result["error"]


class TestLifecycle:
    """Tests for gateway init and shutdown."""

    @pytest.fixture(autouse=True)
    def reset_gateway(self):
        """Ensure no gateway leaks between tests."""
        gateway_module._gateway = None
        yield
        gateway_module._gateway = None

    def test_get_gateway_before_init_raises(self) -> None:
        """Test that using the gateway before startup fails loudly."""
        with pytest.raises(RuntimeError):
            get_gateway()

    @pytest.mark.asyncio
    async def test_init_and_shutdown(self) -> None:
        """Test that init creates one gateway and shutdown closes its HTTP client."""
        http_client = MagicMock()
        with patch("src.core.gateway.create_http_client", return_value=http_client), \
             patch("src.core.gateway.create_supabase_client") as mock_create:
            first = await init_gateway()
            second = await init_gateway()

            assert first is second
            assert get_gateway() is first
            mock_create.assert_called_once_with(http_client)

            await shutdown_gateway()

        http_client.close.assert_called_once()
        with pytest.raises(RuntimeError):
            get_gateway()
