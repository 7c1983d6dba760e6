"""Integration tests for order API routes."""

from typing import Any, Callable
from uuid import uuid4

from fastapi.testclient import TestClient


def checkout_payload(user: dict, address: dict, items: list[dict[str, Any]], total: float = 15) -> dict[str, Any]:
    """Build a camelCase checkout body."""
    return {
        "userId": user["id"],
        "items": items,
        "shippingAddress": {"id": address["id"]},
        "totalAmount": total,
    }


class TestPlaceOrder:
    """Tests for POST /api/orders."""

    def test_checkout_creates_orders_and_clears_cart(
        self,
        client: TestClient,
        gateway,
        user: dict,
        make_product: Callable,
        shipping_address: dict,
    ) -> None:
        """Test the happy path end to end."""
        product = make_product(stock_quantity=10, price_in_cents=500)
        gateway.seed("cart_items", user_id=user["id"], product_id=product["id"], quantity=3, product_data={"id": product["id"]})

        response = client.post(
            "/api/orders",
            json=checkout_payload(user, shipping_address, [{"productId": product["id"], "quantity": 3, "price": 5}]),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert len(data["orders"]) == 1
        order = data["orders"][0]
        assert order["pricePaidInCents"] == 1500
        assert order["status"] == "PROCESSING"
        assert order["productId"] == product["id"]
        assert order["shippingAddressId"] == shipping_address["id"]
        assert order["paymentIntentId"].startswith("pi_")
        assert gateway.stock_of(product["id"]) == 7
        assert gateway.rows("cart_items", user_id=user["id"]) == []

    def test_missing_fields_return_400(
        self, client: TestClient, gateway, user: dict, make_product: Callable
    ) -> None:
        """Test that an incomplete checkout is rejected without writes."""
        product = make_product(stock_quantity=10)

        response = client.post(
            "/api/orders",
            json={"userId": user["id"], "items": [{"productId": product["id"], "quantity": 1, "price": 5}]},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert data["message"] == "Incomplete information"
        assert [d["loc"][0] for d in data["details"]] == ["shippingAddress", "totalAmount"]
        assert gateway.stock_of(product["id"]) == 10
        assert gateway.rows("orders") == []

    def test_malformed_item_returns_400(self, client: TestClient, user: dict, shipping_address: dict) -> None:
        """Test that a zero quantity fails request validation."""
        response = client.post(
            "/api/orders",
            json=checkout_payload(user, shipping_address, [{"productId": str(uuid4()), "quantity": 0, "price": 5}]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    def test_insufficient_stock_returns_409(
        self,
        client: TestClient,
        gateway,
        user: dict,
        make_product: Callable,
        shipping_address: dict,
    ) -> None:
        """Test that overselling is refused and nothing is left behind."""
        plenty = make_product(stock_quantity=10)
        scarce = make_product(stock_quantity=1)

        response = client.post(
            "/api/orders",
            json=checkout_payload(
                user,
                shipping_address,
                [
                    {"productId": plenty["id"], "quantity": 2, "price": 5},
                    {"productId": scarce["id"], "quantity": 2, "price": 5},
                ],
                total=20,
            ),
        )

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "insufficient_stock"
        assert data["details"][0]["loc"] == ["items", scarce["id"]]
        assert gateway.stock_of(plenty["id"]) == 10
        assert gateway.rows("orders") == []

    def test_unknown_product_returns_404(
        self, client: TestClient, user: dict, shipping_address: dict
    ) -> None:
        """Test a checkout for a product that does not exist."""
        response = client.post(
            "/api/orders",
            json=checkout_payload(user, shipping_address, [{"productId": str(uuid4()), "quantity": 1, "price": 5}]),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_database_failure_returns_500_without_detail(
        self,
        client: TestClient,
        gateway,
        user: dict,
        make_product: Callable,
        shipping_address: dict,
    ) -> None:
        """Test that persistence failures are reported generically and rolled back."""
        product = make_product(stock_quantity=10)
        gateway.fail("insert", "orders")

        response = client.post(
            "/api/orders",
            json=checkout_payload(user, shipping_address, [{"productId": product["id"], "quantity": 2, "price": 5}]),
        )

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "database_error"
        assert data["message"] == "A database error occurred"
        assert "details" not in data
        assert gateway.stock_of(product["id"]) == 10


class TestListOrders:
    """Tests for GET /api/orders/{user_id}."""

    def test_lists_orders_with_details(
        self,
        client: TestClient,
        user: dict,
        make_product: Callable,
        shipping_address: dict,
    ) -> None:
        """Test that placed orders come back with product and address."""
        product = make_product(name="Saffron 5g")
        client.post(
            "/api/orders",
            json=checkout_payload(user, shipping_address, [{"productId": product["id"], "quantity": 1, "price": 5}], total=5),
        )

        response = client.get(f"/api/orders/{user['id']}")

        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 1
        assert orders[0]["product"]["name"] == "Saffron 5g"
        assert orders[0]["shippingAddress"]["city"] == "Lashkar Gah"

    def test_no_orders(self, client: TestClient) -> None:
        """Test an empty order history."""
        response = client.get("/api/orders/nobody")

        assert response.status_code == 200
        assert response.json() == []
