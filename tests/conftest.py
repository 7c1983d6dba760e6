"""Pytest configuration and fixtures."""

import asyncio
import os
from collections import defaultdict
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("OPENAI_API_KEY", "sk-test-openai-key")

from src.api.middleware.error_handler import PersistenceError  # noqa: E402


class InMemoryGateway:
    """Persistence gateway test double keeping tables in dictionaries.

    Every operation yields to the event loop once before touching data, so
    concurrent checkouts interleave the way they would against a real
    database. ``decrement_stock`` checks and writes without yielding, which
    mirrors the single-statement SQL function.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.calls: list[tuple[str, str]] = []
        self.healthy = True
        self._failures: dict[tuple[str, str], list[Exception | None]] = {}
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    # Test helpers

    def _now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        """Insert a row directly, filling id and timestamps."""
        now = self._now()
        stored = {"id": str(uuid4()), "created_at": now, "updated_at": now, **row}
        self.tables[table].append(stored)
        return stored

    def fail(self, operation: str, table: str, error: Exception | None = None, after: int = 0) -> None:
        """Make the call number ``after + 1`` of ``operation`` on ``table`` raise."""
        self._failures[(operation, table)] = [None] * after + [
            error or PersistenceError(f"Database {operation} on {table} failed")
        ]

    def rows(self, table: str, **filters: Any) -> list[dict[str, Any]]:
        """Return stored rows matching the filters."""
        return [row for row in self.tables[table] if self._matches(row, filters)]

    def stock_of(self, product_id: str | UUID) -> int:
        return self.rows("products", id=str(product_id))[0]["stock_quantity"]

    # Internals

    async def _enter(self, operation: str, table: str) -> None:
        await asyncio.sleep(0)
        self.calls.append((operation, table))
        queue = self._failures.get((operation, table))
        if queue:
            error = queue.pop(0)
            if error is not None:
                raise error

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in filters.items())

    # PersistenceGateway

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        await self._enter("insert", table)
        now = self._now()
        stored = {"id": str(uuid4()), "created_at": now, "updated_at": now, **row}
        self.tables[table].append(stored)
        return dict(stored)

    async def select_one(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        await self._enter("select", table)
        matches = self.rows(table, **filters)
        return dict(matches[0]) if matches else None

    async def select_where(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        await self._enter("select", table)
        matches = [dict(row) for row in self.rows(table, **(filters or {}))]
        if order_by:
            matches.sort(key=lambda row: row.get(order_by) or "", reverse=descending)
        return matches

    async def select_in(self, table: str, column: str, values: list[Any]) -> list[dict[str, Any]]:
        if not values:
            return []
        await self._enter("select", table)
        wanted = {str(v) for v in values}
        return [dict(row) for row in self.tables[table] if str(row.get(column)) in wanted]

    async def update_where(
        self, table: str, values: dict[str, Any], filters: dict[str, Any]
    ) -> list[dict[str, Any]]:
        await self._enter("update", table)
        updated = []
        for row in self.rows(table, **filters):
            row.update(values)
            updated.append(dict(row))
        return updated

    async def delete_where(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        await self._enter("delete", table)
        deleted = self.rows(table, **filters)
        self.tables[table] = [row for row in self.tables[table] if row not in deleted]
        return [dict(row) for row in deleted]

    async def decrement_stock(self, product_id: UUID | str, quantity: int) -> int | None:
        await self._enter("rpc", "decrement_product_stock")
        for row in self.tables["products"]:
            if str(row["id"]) == str(product_id):
                if quantity <= 0 or row["stock_quantity"] < quantity:
                    return None
                row["stock_quantity"] -= quantity
                return row["stock_quantity"]
        return None

    async def restock(self, product_id: UUID | str, quantity: int) -> int | None:
        await self._enter("rpc", "increment_product_stock")
        for row in self.tables["products"]:
            if str(row["id"]) == str(product_id):
                row["stock_quantity"] += quantity
                return row["stock_quantity"]
        return None

    async def check_connection(self) -> dict[str, Any]:
        if self.healthy:
            return {"healthy": True}
        return {"healthy": False, "error": "connection refused"}


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def gateway() -> InMemoryGateway:
    """Provide an empty in-memory persistence gateway."""
    return InMemoryGateway()


@pytest.fixture
def user(gateway: InMemoryGateway) -> dict[str, Any]:
    """Seed a user."""
    return gateway.seed("users", id="user_123", name="Abdullah", email="abdullah@example.com", image_url=None, role="USER")


@pytest.fixture
def make_product(gateway: InMemoryGateway, user: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """Seed products with sensible defaults."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row = {
            "name": "Saffron 5g",
            "description": "Herat saffron",
            "image_url": "https://cdn.example.com/saffron.jpg",
            "user_id": user["id"],
            "price_in_cents": 500,
            "available_for_purchase": True,
            "weight": "5g",
            "stock_quantity": 10,
            "category": "spices",
        }
        row.update(overrides)
        return gateway.seed("products", **row)

    return _make


@pytest.fixture
def shipping_address(gateway: InMemoryGateway, user: dict[str, Any]) -> dict[str, Any]:
    """Seed a shipping address."""
    return gateway.seed(
        "shipping_address",
        user_id=user["id"],
        full_name="Abdullah Helmandi",
        country="Afghanistan",
        province="Helmand",
        city="Lashkar Gah",
        address="Street 4, House 12",
        phone_number="+93700000000",
    )


@pytest.fixture
def client(gateway: InMemoryGateway) -> Generator[TestClient, None, None]:
    """Provide a test client whose routes talk to the in-memory gateway.

    Args:
        gateway: In-memory gateway injected into every route.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.core.gateway import get_gateway
    from src.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway

    with patch("src.core.gateway.create_http_client", return_value=MagicMock()), \
         patch("src.core.gateway.create_supabase_client", return_value=MagicMock()):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()
