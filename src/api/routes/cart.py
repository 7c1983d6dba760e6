"""Cart API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.deps import get_cart_service
from src.schemas.cart import (
    CartAddRequest,
    CartCountResponse,
    CartItemResponse,
    CartResponse,
    CartUpdateRequest,
    CartUpdateResponse,
)
from src.schemas.common import SuccessResponse
from src.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/{user_id}", response_model=CartResponse)
async def get_cart(
    user_id: str,
    cart_service: CartService = Depends(get_cart_service),
) -> CartResponse:
    """Get a user's cart with live product data and totals."""
    cart = await cart_service.get_cart(user_id)
    return CartResponse(**cart)


@router.post("/{user_id}/add", response_model=CartItemResponse)
async def add_to_cart(
    user_id: str,
    data: CartAddRequest,
    cart_service: CartService = Depends(get_cart_service),
) -> CartItemResponse:
    """Add a product to the cart, merging quantities with an existing item."""
    item = await cart_service.add_item(user_id, data.product, data.quantity)
    return CartItemResponse(**item)


@router.put("/{user_id}/update", response_model=CartUpdateResponse)
async def update_cart_item(
    user_id: str,
    data: CartUpdateRequest,
    cart_service: CartService = Depends(get_cart_service),
) -> CartUpdateResponse:
    """Set an item's quantity. A quantity of zero or less removes it."""
    item = await cart_service.update_quantity(user_id, data.product_id, data.quantity)
    if item is None:
        return CartUpdateResponse(message="Item removed from cart")

    return CartUpdateResponse(item=CartItemResponse(**item))


@router.delete("/{user_id}/remove/{product_id}", response_model=SuccessResponse)
async def remove_from_cart(
    user_id: str,
    product_id: UUID,
    cart_service: CartService = Depends(get_cart_service),
) -> SuccessResponse:
    """Remove a product from the cart."""
    await cart_service.remove_item(user_id, product_id)
    return SuccessResponse()


@router.delete("/{user_id}/clear", response_model=SuccessResponse)
async def clear_cart(
    user_id: str,
    cart_service: CartService = Depends(get_cart_service),
) -> SuccessResponse:
    """Remove every item from the cart."""
    await cart_service.clear_cart(user_id)
    return SuccessResponse()


@router.get("/{user_id}/count", response_model=CartCountResponse)
async def get_cart_count(
    user_id: str,
    cart_service: CartService = Depends(get_cart_service),
) -> CartCountResponse:
    """Get the number of units in the cart."""
    count = await cart_service.count_items(user_id)
    return CartCountResponse(count=count)
