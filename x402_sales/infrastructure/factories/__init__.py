"""Factories for creating provider instances (Factory Pattern)."""

from x402_sales.infrastructure.factories.provider_factory import ProviderFactory

__all__ = [
    "ProviderFactory",
]
