"""Integration tests for product API routes."""

from typing import Callable
from uuid import uuid4

from fastapi.testclient import TestClient


class TestProductRoutes:
    """Tests for /api/products."""

    def test_create_and_get(self, client: TestClient, user: dict) -> None:
        """Test creating a product from a camelCase body."""
        response = client.post(
            "/api/products",
            json={
                "name": "Green tea",
                "imageUrl": "https://cdn.example.com/tea.jpg",
                "userId": user["id"],
                "priceInCents": 350,
                "availableForPurchase": True,
                "weight": "250g",
                "stockQuantity": 40,
                "category": "tea",
            },
        )

        assert response.status_code == 201
        created = response.json()
        assert created["priceInCents"] == 350

        fetched = client.get(f"/api/products/{created['id']}")
        assert fetched.json()["name"] == "Green tea"

    def test_create_invalid_returns_400(self, client: TestClient) -> None:
        """Test that a negative price is rejected."""
        response = client.post("/api/products", json={"name": "Bad", "priceInCents": -1})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_list_products(self, client: TestClient, make_product: Callable) -> None:
        """Test listing the catalog."""
        make_product(name="Almonds")

        response = client.get("/api/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Almonds"]

    def test_update_only_sent_fields(self, client: TestClient, make_product: Callable) -> None:
        """Test a partial update."""
        product = make_product(stock_quantity=5)

        response = client.put(f"/api/products/{product['id']}", json={"stockQuantity": 12})

        assert response.status_code == 200
        assert response.json()["stockQuantity"] == 12
        assert response.json()["name"] == product["name"]

    def test_delete_product(self, client: TestClient, make_product: Callable) -> None:
        """Test deleting, then fetching, a product."""
        product = make_product()

        assert client.delete(f"/api/products/{product['id']}").status_code == 200
        response = client.get(f"/api/products/{product['id']}")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_unknown_product_returns_404(self, client: TestClient) -> None:
        """Test updating a product that does not exist."""
        response = client.put(f"/api/products/{uuid4()}", json={"name": "Ghost"})

        assert response.status_code == 404
