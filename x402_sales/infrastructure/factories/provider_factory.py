"""Factory for creating catalog and payment providers (Factory Pattern)."""
import logging
from typing import Iterable, Optional

import redis
from x402.http import FacilitatorConfig, HTTPFacilitatorClientSync

from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository
from x402_sales.infrastructure.gateways.settlement_guard import (
    InMemorySettlementGuard,
    RedisSettlementGuard,
    SettlementGuard,
)
from x402_sales.infrastructure.gateways.x402_payment_gateway import X402PaymentGateway
from x402_sales.infrastructure.redis_client import RedisClientFactory
from x402_sales.infrastructure.repositories.in_memory import (
    InMemoryProductRepository,
    InMemoryVendorRepository,
)
from x402_sales.infrastructure.repositories.product_repository import RedisProductRepository
from x402_sales.infrastructure.repositories.vendor_repository import RedisVendorRepository


logger = logging.getLogger(__name__)


class ProviderFactory:
    """
    Factory for creating provider instances following Factory Pattern.

    Centralizes creation logic so storage and payment backends can be
    switched through configuration.
    """

    @staticmethod
    def create_vendor_repository(storage_type: str = "redis") -> IVendorRepository:
        """
        Create a vendor repository instance.

        Args:
            storage_type: Type of storage ("redis" or "memory")

        Returns:
            IVendorRepository instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = storage_type.lower()

        if storage_type == "redis":
            return RedisVendorRepository(redis_client=RedisClientFactory.get_client())
        elif storage_type == "memory":
            return InMemoryVendorRepository()
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")

    @staticmethod
    def create_product_repository(storage_type: str = "redis") -> IProductRepository:
        """
        Create a product repository instance.

        Args:
            storage_type: Type of storage ("redis" or "memory")

        Returns:
            IProductRepository instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = storage_type.lower()

        if storage_type == "redis":
            return RedisProductRepository(redis_client=RedisClientFactory.get_client())
        elif storage_type == "memory":
            return InMemoryProductRepository()
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")

    @staticmethod
    def create_settlement_guard(
        storage_type: str = "redis",
        ttl: int = 3600,
        redis_client: Optional[redis.Redis] = None
    ) -> SettlementGuard:
        """
        Create the settlement claim store.

        Args:
            storage_type: Type of storage ("redis" or "memory")
            ttl: Claim lifetime in seconds
            redis_client: Optional Redis client (uses the shared client if omitted)

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = storage_type.lower()

        if storage_type == "redis":
            return RedisSettlementGuard(redis_client or RedisClientFactory.get_client(), ttl=ttl)
        elif storage_type == "memory":
            logger.warning("Using in-memory settlement guard; duplicates are only caught per process")
            return InMemorySettlementGuard(ttl=ttl)
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")

    @staticmethod
    def create_payment_gateway(
        facilitator_url: str,
        timeout: int,
        settlement_guard: SettlementGuard,
        networks: Optional[Iterable[str]] = None
    ) -> IPaymentGateway:
        """
        Create the x402 payment gateway.

        Args:
            facilitator_url: Base URL of the facilitator
            timeout: Per-call deadline in seconds
            settlement_guard: Claim store preventing double settlement
            networks: CAIP-2 networks to sell on (all offered ones if omitted)

        Returns:
            IPaymentGateway instance
        """
        client = HTTPFacilitatorClientSync(FacilitatorConfig(url=facilitator_url, timeout=float(timeout)))
        return X402PaymentGateway(
            facilitator_client=client,
            settlement_guard=settlement_guard,
            networks=networks
        )
