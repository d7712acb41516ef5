"""Interface for payment backends (Adapter Pattern).

The request orchestrator talks to the payment facilitation system only
through this interface, so the real x402 adapter and test doubles are
interchangeable.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from x402_sales.domain.entities.payment import (
    PaymentChallenge,
    PaymentProof,
    PaymentRequirements,
    ResourceConfig,
    ResourceInfo,
    SettlementOutcome,
    VerificationOutcome,
)


class IPaymentGateway(ABC):
    """
    Capability interface over a payment facilitation system.

    Implementations must keep verify free of external side effects and
    call the settlement backend at most once per call to settle_payment.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        One-time setup (e.g. discovering facilitator capabilities).

        Raises:
            PaymentGatewayError: If the backend is unusable; startup should abort
        """
        pass

    @abstractmethod
    def build_payment_requirements(self, config: ResourceConfig) -> List[PaymentRequirements]:
        """
        Build the accepted payment requirements for a resource.

        Deterministic for identical inputs.

        Args:
            config: Scheme, network, price, payee and timeout

        Returns:
            Non-empty list of requirements

        Raises:
            UnsupportedNetworkError: If the network cannot be sold on
            PaymentGatewayError: If the price cannot be expressed in the asset
        """
        pass

    @abstractmethod
    def create_payment_required_response(
        self,
        requirements: List[PaymentRequirements],
        resource: ResourceInfo,
        error: Optional[str] = None
    ) -> PaymentChallenge:
        """Assemble a payment challenge. Pure, no I/O."""
        pass

    @abstractmethod
    def parse_payment_header(self, header: str) -> PaymentProof:
        """
        Decode a client-supplied payment header.

        Args:
            header: Encoded payment payload

        Returns:
            Decoded proof

        Raises:
            PaymentHeaderDecodeError: If the header is malformed
        """
        pass

    @abstractmethod
    def find_matching_requirements(
        self,
        requirements: List[PaymentRequirements],
        proof: PaymentProof
    ) -> Optional[PaymentRequirements]:
        """
        Select the first requirement whose scheme and network equal the proof's.

        Returns:
            Matching requirement or None
        """
        pass

    @abstractmethod
    def verify_payment(
        self,
        proof: PaymentProof,
        requirements: PaymentRequirements
    ) -> VerificationOutcome:
        """
        Verify a proof against a requirement without moving funds.

        Raises:
            PaymentGatewayError: On backend faults
        """
        pass

    @abstractmethod
    def settle_payment(
        self,
        proof: PaymentProof,
        requirements: PaymentRequirements
    ) -> SettlementOutcome:
        """
        Execute the payment on chain.

        Raises:
            PaymentGatewayError: On backend faults
        """
        pass

    @abstractmethod
    def payment_required_body(self, challenge: PaymentChallenge) -> Dict[str, Any]:
        """The challenge as the JSON object sent in a 402 response body."""
        pass

    @abstractmethod
    def encode_payment_required(self, challenge: PaymentChallenge) -> str:
        """Serialize a challenge for the PAYMENT-REQUIRED header."""
        pass

    @abstractmethod
    def encode_settle_response(self, settlement: SettlementOutcome) -> str:
        """Serialize a settlement outcome for the PAYMENT-RESPONSE header."""
        pass
