"""Shipping address service."""

import logging

from src.core.gateway import PersistenceGateway, get_gateway
from src.models.shipping_address import ShippingAddress, ShippingAddressCreate

logger = logging.getLogger(__name__)


class AddressService:
    """Service for shipping address operations."""

    def __init__(self, gateway: PersistenceGateway | None = None):
        self._gateway = gateway

    @property
    def gateway(self) -> PersistenceGateway:
        """Get persistence gateway."""
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    async def list_addresses(self, user_id: str) -> list[ShippingAddress]:
        """List a user's shipping addresses."""
        return await self.gateway.select_where("shipping_address", {"user_id": user_id})

    async def create_address(self, data: ShippingAddressCreate) -> ShippingAddress:
        """Create a shipping address.

        Args:
            data: Address fields including the owning user_id.

        Returns:
            ShippingAddress: Created address.
        """
        address = await self.gateway.insert("shipping_address", dict(data))
        logger.info("Created shipping address %s for user %s", address["id"], data["user_id"])
        return address
