"""Use case for serving a paywalled resource (Use Case Pattern)."""
import logging
from dataclasses import dataclass
from typing import List, Optional

from x402_sales.application.outcomes import (
    PRODUCT_NOT_FOUND,
    UNKNOWN_SETTLEMENT_ERROR,
    UNKNOWN_VERIFICATION_ERROR,
    VENDOR_NOT_FOUND,
    NotFound,
    PaymentRequired,
    RequestOutcome,
    SettlementFailed,
    Success,
    VerificationFailed,
)
from x402_sales.domain.entities.payment import (
    SCHEME_EXACT,
    PaymentRequirements,
    ResourceConfig,
    ResourceInfo,
)
from x402_sales.domain.exceptions import PaymentHeaderDecodeError
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository


logger = logging.getLogger(__name__)

MAX_TIMEOUT_SECONDS = 60


@dataclass(frozen=True)
class PaymentRequestInput:
    """A request for a vendor's resource, optionally carrying a payment header."""
    vendor_id: str
    path: str
    resource_url: str
    payment_header: Optional[str] = None


class ProcessPaymentRequestUseCase:
    """
    Drives the x402 challenge / verify / settle sequence for one request.

    Every expected condition ends in exactly one RequestOutcome variant.
    Settlement is attempted at most once per call, and only after the
    proof has been verified. Backend faults other than a malformed
    payment header propagate to the caller.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        vendor_repository: IVendorRepository,
        payment_gateway: IPaymentGateway,
        max_timeout_seconds: int = MAX_TIMEOUT_SECONDS
    ):
        """
        Initialize use case with dependencies (Dependency Injection).

        Args:
            product_repository: Catalog of products
            vendor_repository: Catalog of vendors
            payment_gateway: Payment backend port
            max_timeout_seconds: Payment validity window offered to clients
        """
        self.product_repository = product_repository
        self.vendor_repository = vendor_repository
        self.payment_gateway = payment_gateway
        self.max_timeout_seconds = max_timeout_seconds

    def execute(self, request: PaymentRequestInput) -> RequestOutcome:
        """
        Execute the use case.

        Args:
            request: Vendor id, product path, resource URL and optional payment header

        Returns:
            One of PaymentRequired, Success, VerificationFailed,
            SettlementFailed or NotFound
        """
        outcome = self._process(request)
        logger.info(
            f"Payment request processed: vendor={request.vendor_id}, "
            f"path={request.path}, outcome={outcome.kind}"
        )
        return outcome

    def _process(self, request: PaymentRequestInput) -> RequestOutcome:
        vendor = self.vendor_repository.find_by_id(request.vendor_id)
        if vendor is None:
            return NotFound(reason=VENDOR_NOT_FOUND)

        product = self.product_repository.find_by_vendor_id_and_path(
            request.vendor_id,
            request.path
        )
        if product is None:
            return NotFound(reason=PRODUCT_NOT_FOUND)

        resource = ResourceInfo(
            url=request.resource_url,
            description=product.description,
            mime_type=product.mime_type
        )
        resource_config = ResourceConfig(
            scheme=SCHEME_EXACT,
            network=product.network,
            price=product.price,
            pay_to=vendor.payout_address,
            max_timeout_seconds=self.max_timeout_seconds
        )
        requirements = self.payment_gateway.build_payment_requirements(resource_config)

        if not request.payment_header:
            return self._payment_required(requirements, resource)

        try:
            proof = self.payment_gateway.parse_payment_header(request.payment_header)
        except PaymentHeaderDecodeError as e:
            logger.warning(f"Rejected malformed payment header for {request.vendor_id}/{request.path}: {e}")
            return VerificationFailed(reason=f"Invalid payment header: {e}")

        # Only the requirements offered now are honored, never the client's copy
        matching = self.payment_gateway.find_matching_requirements(requirements, proof)
        if matching is None:
            logger.info(
                f"Payment for {request.vendor_id}/{request.path} matches no current "
                f"requirement (scheme={proof.accepted.scheme}, network={proof.accepted.network})"
            )
            return self._payment_required(requirements, resource)

        verification = self.payment_gateway.verify_payment(proof, matching)
        if not verification.is_valid:
            reason = verification.invalid_reason or UNKNOWN_VERIFICATION_ERROR
            logger.warning(f"Payment verification failed for {request.vendor_id}/{request.path}: {reason}")
            return VerificationFailed(reason=reason)

        settlement = self.payment_gateway.settle_payment(proof, matching)
        if not settlement.success:
            reason = settlement.error_reason or UNKNOWN_SETTLEMENT_ERROR
            logger.warning(f"Payment settlement failed for {request.vendor_id}/{request.path}: {reason}")
            return SettlementFailed(reason=reason)

        logger.info(
            f"Payment settled for {request.vendor_id}/{request.path}: "
            f"tx={settlement.transaction}, network={settlement.network}, payer={settlement.payer}"
        )
        return Success(settlement=settlement, product=product)

    def _payment_required(
        self,
        requirements: List[PaymentRequirements],
        resource: ResourceInfo
    ) -> PaymentRequired:
        challenge = self.payment_gateway.create_payment_required_response(requirements, resource)
        return PaymentRequired(challenge=challenge)
