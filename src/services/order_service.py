"""Order placement and order history service."""

import logging
import secrets
import string
import time
from decimal import ROUND_HALF_UP, Decimal
from functools import partial
from typing import Any

from src.api.middleware.error_handler import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from src.core.gateway import PersistenceGateway, get_gateway
from src.core.unit_of_work import UnitOfWork
from src.models.order import Order, OrderCreate, OrderStatus
from src.schemas.order import OrderLineItem
from src.services.product_service import index_by_id

logger = logging.getLogger(__name__)

PAYMENT_INTENT_PREFIX = "pi_"
PAYMENT_INTENT_SUFFIX_LENGTH = 9
_BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_payment_intent_id() -> str:
    """Generate a placeholder payment-intent token.

    The token is ``pi_<epoch milliseconds>_<9 base36 characters>``. It only
    correlates orders with a future payment confirmation and is never
    verified against a payment processor.
    """
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(PAYMENT_INTENT_SUFFIX_LENGTH))
    return f"{PAYMENT_INTENT_PREFIX}{int(time.time() * 1000)}_{suffix}"


def price_paid_in_cents(price: Decimal, quantity: int) -> int:
    """Convert a unit price in major units and a quantity into a cents total."""
    cents = Decimal(price) * quantity * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class OrderService:
    """Service for checkout and order history."""

    def __init__(self, gateway: PersistenceGateway | None = None):
        """Initialize order service.

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

    @staticmethod
    def _validate_checkout(
        user_id: str | None,
        items: list[OrderLineItem] | None,
        shipping_address_id: Any,
        total_amount: Decimal | None,
    ) -> None:
        """Reject a checkout with any required field absent or empty."""
        fields = (
            ("userId", user_id),
            ("items", items),
            ("shippingAddress", shipping_address_id),
            ("totalAmount", total_amount),
        )
        missing = [name for name, value in fields if not value]
        if missing:
            raise ValidationError(
                "Incomplete information",
                details=[{"loc": [name], "msg": "Field required", "type": "missing"} for name in missing],
            )

    async def place_order(
        self,
        user_id: str | None,
        items: list[OrderLineItem] | None,
        shipping_address_id: Any,
        total_amount: Decimal | None,
    ) -> list[Order]:
        """Place a checkout: one order per line item, stock taken, cart cleared.

        The checkout is all-or-nothing. If any line item cannot be placed,
        orders created earlier in the same checkout are deleted, their stock
        is put back and the cart is left as it was. total_amount is only
        checked for presence.

        Args:
            user_id: Ordering user.
            items: Line items, processed in order.
            shipping_address_id: Existing shipping address for every order.
            total_amount: Client-computed total.

        Returns:
            list[Order]: Created orders, one per line item.

        Raises:
            ValidationError: If a required field is missing. Nothing is written.
            NotFoundError: If a product does not exist.
            InsufficientStockError: If a product has too few units left.
            PersistenceError: If a database call fails.
        """
        self._validate_checkout(user_id, items, shipping_address_id, total_amount)

        created: list[Order] = []
        async with UnitOfWork(name=f"Checkout for user {user_id}") as uow:
            for item in items:
                order = await self._place_line_item(uow, user_id, str(shipping_address_id), item)
                created.append(order)

            if created:
                await self.gateway.delete_where("cart_items", {"user_id": user_id})

        logger.info(
            "Placed %d order(s) for user %s (total %s)",
            len(created),
            user_id,
            total_amount,
        )
        return created

    async def _place_line_item(
        self,
        uow: UnitOfWork,
        user_id: str,
        shipping_address_id: str,
        item: OrderLineItem,
    ) -> Order:
        """Take stock for one line item and record its order row."""
        product_id = str(item.product_id)

        remaining = await self.gateway.decrement_stock(product_id, item.quantity)
        if remaining is None:
            product = await self.gateway.select_one("products", {"id": product_id})
            if product is None:
                raise NotFoundError(f"Product {product_id} not found")
            raise InsufficientStockError(product_id, item.quantity, product["stock_quantity"])

        uow.on_rollback(
            f"restock {item.quantity} of product {product_id}",
            partial(self.gateway.restock, product_id, item.quantity),
        )

        row: OrderCreate = {
            "user_id": user_id,
            "product_id": product_id,
            "shipping_address_id": shipping_address_id,
            "quantity": item.quantity,
            "price_paid_in_cents": price_paid_in_cents(item.price, item.quantity),
            "payment_intent_id": generate_payment_intent_id(),
            "status": OrderStatus.PROCESSING.value,
        }
        order = await self.gateway.insert("orders", dict(row))

        uow.on_rollback(
            f"delete order {order['id']}",
            partial(self.gateway.delete_where, "orders", {"id": order["id"]}),
        )

        logger.debug("Order %s: product %s x%d, %d left", order["id"], product_id, item.quantity, remaining)
        return order

    async def get_orders_for_user(self, user_id: str) -> list[dict[str, Any]]:
        """Get a user's orders, newest first, with product and address joined in.

        Either joined value is None when the referenced row is gone.
        """
        orders = await self.gateway.select_where(
            "orders", {"user_id": user_id}, order_by="created_at", descending=True
        )
        if not orders:
            return []

        product_ids = list(dict.fromkeys(str(o["product_id"]) for o in orders))
        address_ids = list(dict.fromkeys(str(o["shipping_address_id"]) for o in orders))

        products = index_by_id(await self.gateway.select_in("products", "id", product_ids))
        addresses = index_by_id(await self.gateway.select_in("shipping_address", "id", address_ids))

        return [
            {
                **order,
                "product": products.get(str(order["product_id"])),
                "shipping_address": addresses.get(str(order["shipping_address_id"])),
            }
            for order in orders
        ]
