"""User API routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import get_user_service
from src.schemas.user import UserResponse
from src.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user with cart, favorite and order counters."""
    user = await user_service.get_user_with_stats(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse(**user)
