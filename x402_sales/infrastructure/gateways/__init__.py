"""Payment gateway adapters."""
from x402_sales.infrastructure.gateways.x402_payment_gateway import X402PaymentGateway
from x402_sales.infrastructure.gateways.settlement_guard import (
    InMemorySettlementGuard,
    RedisSettlementGuard,
    SettlementGuard,
)

__all__ = [
    "X402PaymentGateway",
    "SettlementGuard",
    "InMemorySettlementGuard",
    "RedisSettlementGuard",
]
