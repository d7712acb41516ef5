"""Repository implementations (Infrastructure Layer).

These implement the catalog interfaces defined in x402_sales.domain.interfaces.
"""
from x402_sales.infrastructure.repositories.vendor_repository import RedisVendorRepository
from x402_sales.infrastructure.repositories.product_repository import RedisProductRepository
from x402_sales.infrastructure.repositories.in_memory import (
    InMemoryProductRepository,
    InMemoryVendorRepository,
)

__all__ = [
    "RedisVendorRepository",
    "RedisProductRepository",
    "InMemoryVendorRepository",
    "InMemoryProductRepository",
]
