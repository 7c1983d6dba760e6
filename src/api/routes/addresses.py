"""Shipping address API routes."""

from fastapi import APIRouter, Depends, status

from src.api.deps import get_address_service
from src.schemas.address import ShippingAddressCreate, ShippingAddressResponse
from src.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("/{user_id}", response_model=list[ShippingAddressResponse])
async def list_addresses(
    user_id: str,
    address_service: AddressService = Depends(get_address_service),
) -> list[ShippingAddressResponse]:
    """List a user's shipping addresses."""
    addresses = await address_service.list_addresses(user_id)
    return [ShippingAddressResponse(**a) for a in addresses]


@router.post(
    "/{user_id}/add",
    response_model=ShippingAddressResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_address(
    user_id: str,
    data: ShippingAddressCreate,
    address_service: AddressService = Depends(get_address_service),
) -> ShippingAddressResponse:
    """Add a shipping address for a user."""
    address = await address_service.create_address({"user_id": user_id, **data.model_dump()})
    return ShippingAddressResponse(**address)
