"""Favorites API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.deps import get_favorite_service
from src.schemas.common import SuccessResponse
from src.schemas.favorite import (
    FavoriteAddRequest,
    FavoriteCheckResponse,
    FavoriteListResponse,
    FavoriteResponse,
)
from src.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/{user_id}", response_model=FavoriteListResponse)
async def list_favorites(
    user_id: str,
    favorite_service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteListResponse:
    """List a user's favorites with live product data."""
    result = await favorite_service.list_favorites(user_id)
    return FavoriteListResponse(**result)


@router.post("/{user_id}/add", response_model=FavoriteResponse)
async def add_favorite(
    user_id: str,
    data: FavoriteAddRequest,
    favorite_service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteResponse:
    """Save a product as a favorite. Re-adding returns the existing favorite."""
    favorite = await favorite_service.add_favorite(user_id, data.product)
    return FavoriteResponse(**favorite)


@router.delete("/{user_id}/remove/{product_id}", response_model=SuccessResponse)
async def remove_favorite(
    user_id: str,
    product_id: UUID,
    favorite_service: FavoriteService = Depends(get_favorite_service),
) -> SuccessResponse:
    """Remove a favorite."""
    await favorite_service.remove_favorite(user_id, product_id)
    return SuccessResponse()


@router.get("/{user_id}/check/{product_id}", response_model=FavoriteCheckResponse)
async def check_favorite(
    user_id: str,
    product_id: UUID,
    favorite_service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteCheckResponse:
    """Check whether a product is a favorite."""
    is_favorite = await favorite_service.is_favorite(user_id, product_id)
    return FavoriteCheckResponse(is_favorite=is_favorite)
