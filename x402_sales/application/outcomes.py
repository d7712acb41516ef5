"""Typed results of processing a paywalled request.

``RequestOutcome`` is a closed set of five variants. Callers dispatch on
the concrete type; ``kind`` is a stable label for logs and metrics.
"""
from dataclasses import dataclass
from typing import ClassVar

from x402_sales.domain.entities.payment import PaymentChallenge, SettlementOutcome
from x402_sales.domain.entities.product import Product

VENDOR_NOT_FOUND = "Vendor not found"
PRODUCT_NOT_FOUND = "Product not found"
UNKNOWN_VERIFICATION_ERROR = "Unknown verification error"
UNKNOWN_SETTLEMENT_ERROR = "Unknown settlement error"


class RequestOutcome:
    """Base class of the five request outcomes."""

    kind: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError("RequestOutcome is closed to new variants")


@dataclass(frozen=True)
class PaymentRequired(RequestOutcome):
    """No acceptable proof was supplied; the client must pay."""

    challenge: PaymentChallenge
    kind: ClassVar[str] = "payment_required"


@dataclass(frozen=True)
class Success(RequestOutcome):
    """Payment verified and settled; the product may be released."""

    settlement: SettlementOutcome
    product: Product
    kind: ClassVar[str] = "success"


@dataclass(frozen=True)
class VerificationFailed(RequestOutcome):
    reason: str
    kind: ClassVar[str] = "verification_failed"


@dataclass(frozen=True)
class SettlementFailed(RequestOutcome):
    reason: str
    kind: ClassVar[str] = "settlement_failed"


@dataclass(frozen=True)
class NotFound(RequestOutcome):
    reason: str
    kind: ClassVar[str] = "not_found"


OUTCOME_TYPES = (PaymentRequired, Success, VerificationFailed, SettlementFailed, NotFound)
