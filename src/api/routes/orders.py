"""Order API routes."""

from fastapi import APIRouter, Depends, status

from src.api.deps import get_order_service
from src.schemas.order import (
    OrderDetailResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
)
from src.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=PlaceOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="Creates one order per line item, takes the ordered units out of stock and clears the cart. All-or-nothing.",
    responses={
        400: {"description": "A required field is missing or malformed"},
        404: {"description": "A product does not exist"},
        409: {"description": "A product has insufficient stock"},
    },
)
async def place_order(
    data: PlaceOrderRequest,
    order_service: OrderService = Depends(get_order_service),
) -> PlaceOrderResponse:
    """Place a checkout.

    Args:
        data: User, line items, shipping address reference and total.

    Returns:
        PlaceOrderResponse: The created orders.
    """
    orders = await order_service.place_order(
        user_id=data.user_id,
        items=data.items,
        shipping_address_id=data.shipping_address.id if data.shipping_address else None,
        total_amount=data.total_amount,
    )

    return PlaceOrderResponse(orders=[OrderResponse(**order) for order in orders])


@router.get(
    "/{user_id}",
    response_model=list[OrderDetailResponse],
    summary="List a user's orders",
)
async def list_orders(
    user_id: str,
    order_service: OrderService = Depends(get_order_service),
) -> list[OrderDetailResponse]:
    """List a user's orders, newest first, with product and address details."""
    orders = await order_service.get_orders_for_user(user_id)
    return [OrderDetailResponse(**order) for order in orders]
