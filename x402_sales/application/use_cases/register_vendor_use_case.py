"""Use case for registering a vendor."""
import logging

from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository


logger = logging.getLogger(__name__)


class RegisterVendorUseCase:
    """Creates a vendor with a fresh id and API key and stores it."""

    def __init__(self, vendor_repository: IVendorRepository):
        self.vendor_repository = vendor_repository

    def execute(self, name: str, evm_address: str) -> Vendor:
        """
        Register a vendor.

        Args:
            name: Display name
            evm_address: Payout address

        Returns:
            The stored vendor (including its API key)

        Raises:
            DomainValidationError: If name or address is invalid
        """
        vendor = Vendor.create(name=name, evm_address=evm_address)
        saved = self.vendor_repository.save(vendor)
        logger.info(f"Vendor registered: id={saved.id}, address={saved.evm_address}")
        return saved
