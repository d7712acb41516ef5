"""Service container for dependency injection (IoC Container Pattern)."""
import logging
from typing import Optional, Type

from x402_sales.application.use_cases.process_payment_request_use_case import (
    ProcessPaymentRequestUseCase,
)
from x402_sales.application.use_cases.register_product_use_case import (
    ListVendorProductsUseCase,
    RegisterProductUseCase,
)
from x402_sales.application.use_cases.register_vendor_use_case import RegisterVendorUseCase
from x402_sales.config.settings import Config
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository
from x402_sales.infrastructure.factories.provider_factory import ProviderFactory


class ServiceContainer:
    """
    Service container implementing Dependency Injection pattern.

    Builds providers lazily from configuration through ProviderFactory.
    Any provider can be passed in to override the configured one, which is
    how tests swap in fakes. One container is created per application.
    """

    def __init__(
        self,
        config: Type[Config] = Config,
        vendor_repository: Optional[IVendorRepository] = None,
        product_repository: Optional[IProductRepository] = None,
        payment_gateway: Optional[IPaymentGateway] = None
    ):
        """Initialize service container."""
        self.config = config
        self._vendor_repository = vendor_repository
        self._product_repository = product_repository
        self._payment_gateway = payment_gateway
        self._process_payment_request_use_case: Optional[ProcessPaymentRequestUseCase] = None
        self._register_vendor_use_case: Optional[RegisterVendorUseCase] = None
        self._register_product_use_case: Optional[RegisterProductUseCase] = None
        self._list_vendor_products_use_case: Optional[ListVendorProductsUseCase] = None
        self._logger = logging.getLogger(__name__)

    def get_vendor_repository(self) -> IVendorRepository:
        """Get or create vendor repository instance."""
        if self._vendor_repository is None:
            storage_type = self.config.CATALOG_STORAGE_TYPE
            try:
                self._vendor_repository = ProviderFactory.create_vendor_repository(storage_type)
                self._logger.info(f"VendorRepository created with {storage_type}")
            except Exception as e:
                self._logger.error(f"Failed to create VendorRepository: {e}")
                raise
        return self._vendor_repository

    def get_product_repository(self) -> IProductRepository:
        """Get or create product repository instance."""
        if self._product_repository is None:
            storage_type = self.config.CATALOG_STORAGE_TYPE
            try:
                self._product_repository = ProviderFactory.create_product_repository(storage_type)
                self._logger.info(f"ProductRepository created with {storage_type}")
            except Exception as e:
                self._logger.error(f"Failed to create ProductRepository: {e}")
                raise
        return self._product_repository

    def get_payment_gateway(self) -> IPaymentGateway:
        """Get or create payment gateway instance."""
        if self._payment_gateway is None:
            try:
                guard = ProviderFactory.create_settlement_guard(
                    self.config.CATALOG_STORAGE_TYPE,
                    ttl=self.config.SETTLEMENT_GUARD_TTL
                )
                self._payment_gateway = ProviderFactory.create_payment_gateway(
                    facilitator_url=self.config.FACILITATOR_URL,
                    timeout=self.config.FACILITATOR_TIMEOUT,
                    settlement_guard=guard,
                    networks=self.config.PAYMENT_NETWORKS or None
                )
                self._logger.info(f"PaymentGateway created for {self.config.FACILITATOR_URL}")
            except Exception as e:
                self._logger.error(f"Failed to create PaymentGateway: {e}")
                raise
        return self._payment_gateway

    def get_process_payment_request_use_case(self) -> ProcessPaymentRequestUseCase:
        """Get or create process payment request use case instance."""
        if self._process_payment_request_use_case is None:
            self._process_payment_request_use_case = ProcessPaymentRequestUseCase(
                product_repository=self.get_product_repository(),
                vendor_repository=self.get_vendor_repository(),
                payment_gateway=self.get_payment_gateway(),
                max_timeout_seconds=self.config.PAYMENT_MAX_TIMEOUT_SECONDS
            )
            self._logger.info("ProcessPaymentRequestUseCase created")
        return self._process_payment_request_use_case

    def get_register_vendor_use_case(self) -> RegisterVendorUseCase:
        """Get or create register vendor use case instance."""
        if self._register_vendor_use_case is None:
            self._register_vendor_use_case = RegisterVendorUseCase(
                vendor_repository=self.get_vendor_repository()
            )
        return self._register_vendor_use_case

    def get_register_product_use_case(self) -> RegisterProductUseCase:
        """Get or create register product use case instance."""
        if self._register_product_use_case is None:
            self._register_product_use_case = RegisterProductUseCase(
                product_repository=self.get_product_repository(),
                vendor_repository=self.get_vendor_repository(),
                payment_gateway=self.get_payment_gateway(),
                default_network=self.config.DEFAULT_NETWORK
            )
        return self._register_product_use_case

    def get_list_vendor_products_use_case(self) -> ListVendorProductsUseCase:
        """Get or create list vendor products use case instance."""
        if self._list_vendor_products_use_case is None:
            self._list_vendor_products_use_case = ListVendorProductsUseCase(
                product_repository=self.get_product_repository(),
                vendor_repository=self.get_vendor_repository()
            )
        return self._list_vendor_products_use_case
