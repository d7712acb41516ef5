"""Domain interfaces following Dependency Inversion Principle."""

from x402_sales.domain.interfaces.vendor_repository import IVendorRepository
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway

__all__ = [
    "IVendorRepository",
    "IProductRepository",
    "IPaymentGateway",
]
