"""Application use cases."""
from x402_sales.application.use_cases.process_payment_request_use_case import (
    PaymentRequestInput,
    ProcessPaymentRequestUseCase,
)
from x402_sales.application.use_cases.register_vendor_use_case import RegisterVendorUseCase
from x402_sales.application.use_cases.register_product_use_case import (
    ListVendorProductsUseCase,
    RegisterProductUseCase,
)

__all__ = [
    "PaymentRequestInput",
    "ProcessPaymentRequestUseCase",
    "RegisterVendorUseCase",
    "RegisterProductUseCase",
    "ListVendorProductsUseCase",
]
