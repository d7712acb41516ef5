"""Use cases for registering and listing a vendor's products."""
import logging
from typing import List, Optional

from x402_sales.domain.entities.payment import SCHEME_EXACT, ResourceConfig
from x402_sales.domain.entities.product import DEFAULT_NETWORK, Product
from x402_sales.domain.exceptions import (
    DomainValidationError,
    PaymentGatewayError,
    ProductAlreadyExistsError,
    VendorNotFoundError,
)
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository


logger = logging.getLogger(__name__)


class RegisterProductUseCase:
    """
    Registers a product under an existing vendor.

    The (vendor_id, path) pair must be unused. The repository enforces the
    same constraint atomically, so a concurrent duplicate still fails.
    The product must also be sellable: its price and network are run
    through the payment gateway once, so a product that could never be
    paid for is rejected here instead of failing on every request.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        vendor_repository: IVendorRepository,
        payment_gateway: IPaymentGateway,
        default_network: str = DEFAULT_NETWORK
    ):
        self.product_repository = product_repository
        self.vendor_repository = vendor_repository
        self.payment_gateway = payment_gateway
        self.default_network = default_network

    def execute(
        self,
        vendor_id: str,
        path: str,
        price: str,
        description: str,
        data: str,
        network: Optional[str] = None,
        mime_type: Optional[str] = None
    ) -> Product:
        """
        Register a product.

        Returns:
            The stored product

        Raises:
            VendorNotFoundError: If the vendor does not exist
            ProductAlreadyExistsError: If the path is already taken
            DomainValidationError: If any product field is invalid or the
                product cannot be priced on its network
        """
        vendor = self.vendor_repository.find_by_id(vendor_id)
        if vendor is None:
            raise VendorNotFoundError(vendor_id)

        product = Product.create(
            vendor_id=vendor_id,
            path=path,
            price=price,
            description=description,
            data=data,
            network=network or self.default_network,
            mime_type=mime_type
        )

        try:
            self.payment_gateway.build_payment_requirements(ResourceConfig(
                scheme=SCHEME_EXACT,
                network=product.network,
                price=product.price,
                pay_to=vendor.payout_address
            ))
        except PaymentGatewayError as e:
            logger.info(f"Rejected unsellable product for vendor {vendor_id}: {e}")
            raise DomainValidationError(str(e)) from e

        if self.product_repository.find_by_vendor_id_and_path(vendor_id, product.path):
            raise ProductAlreadyExistsError(vendor_id, product.path)

        saved = self.product_repository.save(product)
        logger.info(
            f"Product registered: id={saved.id}, vendor={vendor_id}, "
            f"path={saved.path}, price={saved.price}, network={saved.network}"
        )
        return saved


class ListVendorProductsUseCase:
    """Lists the products registered by a vendor."""

    def __init__(
        self,
        product_repository: IProductRepository,
        vendor_repository: IVendorRepository
    ):
        self.product_repository = product_repository
        self.vendor_repository = vendor_repository

    def execute(self, vendor_id: str) -> List[Product]:
        """
        Raises:
            VendorNotFoundError: If the vendor does not exist
        """
        if self.vendor_repository.find_by_id(vendor_id) is None:
            raise VendorNotFoundError(vendor_id)
        return self.product_repository.find_by_vendor_id(vendor_id)
