"""Domain entities - core business objects."""
from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.entities.product import Product, ProductStatus
from x402_sales.domain.entities.payment import (
    PaymentChallenge,
    PaymentProof,
    PaymentRequirements,
    ResourceConfig,
    ResourceInfo,
    SettlementOutcome,
    VerificationOutcome,
)

__all__ = [
    "Vendor",
    "Product",
    "ProductStatus",
    "PaymentChallenge",
    "PaymentProof",
    "PaymentRequirements",
    "ResourceConfig",
    "ResourceInfo",
    "SettlementOutcome",
    "VerificationOutcome",
]
