"""Payment gateway backed by an x402 facilitator (Adapter Pattern)."""
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import httpx
from x402 import schemas as x402_types
from x402.http import (
    decode_payment_signature_header,
    encode_payment_required_header,
    encode_payment_response_header,
)
from x402.mechanisms.evm.exact import ExactEvmServerScheme
from x402.mechanisms.evm.utils import get_network_config, is_valid_network, parse_amount

from x402_sales.domain.entities.payment import (
    X402_VERSION,
    PaymentChallenge,
    PaymentProof,
    PaymentRequirements,
    ResourceConfig,
    ResourceInfo,
    SettlementOutcome,
    VerificationOutcome,
)
from x402_sales.domain.exceptions import (
    FacilitatorError,
    FacilitatorTimeoutError,
    PaymentGatewayError,
    PaymentHeaderDecodeError,
    UnsupportedNetworkError,
)
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.infrastructure.gateways.settlement_guard import (
    InMemorySettlementGuard,
    SettlementGuard,
    proof_fingerprint,
)
from x402_sales.infrastructure.gateways.x402_mapping import (
    from_settle_response,
    from_verify_response,
    from_x402_payload,
    from_x402_requirements,
    payment_required_body,
    to_settle_response,
    to_x402_payload,
    to_x402_payment_required,
    to_x402_requirements,
)
from x402_sales.middleware.monitoring import track_facilitator_call
from x402_sales.utils.price import parse_price


DUPLICATE_SETTLEMENT = "duplicate_settlement"


def to_atomic_amount(price: str, decimals: int) -> str:
    """
    Convert a ``$`` price to the asset's smallest unit without rounding.

    Raises:
        ValueError: If the price is malformed, not positive, or has more
            precision than the asset supports
    """
    value = parse_price(price)
    atomic = parse_amount(str(value), decimals)
    if Decimal(atomic) != value.scaleb(decimals):
        raise ValueError(f"amount {value} cannot be represented with {decimals} decimals")
    if atomic <= 0:
        raise ValueError("amount must be greater than zero")
    return str(atomic)


class X402PaymentGateway(IPaymentGateway):
    """
    IPaymentGateway implementation over the x402 library and a facilitator.

    Requirements are priced in the network's default asset as configured by
    the x402 EVM mechanism. Settlement is keyed by a fingerprint of the
    proof so that a replayed payment header is never settled twice while
    its claim is held.
    """

    def __init__(
        self,
        facilitator_client,
        settlement_guard: Optional[SettlementGuard] = None,
        networks: Optional[Iterable[str]] = None,
        scheme: Optional[ExactEvmServerScheme] = None
    ):
        """
        Initialize the gateway.

        Args:
            facilitator_client: x402 sync facilitator client
                (``x402.http.HTTPFacilitatorClientSync``)
            settlement_guard: Claim store preventing double settlement
            networks: CAIP-2 networks to sell on (defaults to every EVM
                network the facilitator offers)
            scheme: Server side of the exact EVM scheme
        """
        self.facilitator_client = facilitator_client
        self.settlement_guard = settlement_guard or InMemorySettlementGuard()
        self.networks = list(networks) if networks is not None else None
        self.scheme = scheme or ExactEvmServerScheme()
        self._supported_kinds: Dict[Tuple[str, str], x402_types.SupportedKind] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def supported_networks(self) -> List[str]:
        """Networks requirements can be built for, known after initialize()."""
        return [network for _, network in self._supported_kinds]

    def initialize(self) -> None:
        """
        Discover which networks the facilitator can settle with the exact scheme.

        Raises:
            PaymentGatewayError: If the facilitator is unreachable or supports
                none of the configured networks
        """
        supported = self._call_facilitator("supported", self.facilitator_client.get_supported)
        track_facilitator_call("supported", True)

        offered = {
            str(kind.network): kind
            for kind in supported.kinds
            if kind.x402_version == X402_VERSION and kind.scheme == self.scheme.scheme
        }
        wanted = self.networks if self.networks is not None else sorted(offered)

        self._supported_kinds = {
            (self.scheme.scheme, network): offered[network]
            for network in wanted
            if network in offered and is_valid_network(network)
        }

        if not self._supported_kinds:
            raise PaymentGatewayError(
                f"Facilitator supports none of the configured networks: {', '.join(wanted) or '(none)'}"
            )

        missing = [n for n in wanted if n not in self.supported_networks]
        if missing:
            self._logger.warning(f"Facilitator does not support networks: {', '.join(missing)}")
        self._logger.info(f"Payment gateway initialized for networks: {', '.join(self.supported_networks)}")

    def build_payment_requirements(self, config: ResourceConfig) -> List[PaymentRequirements]:
        """
        Price the resource in the network's default asset.

        Raises:
            UnsupportedNetworkError: If the facilitator does not offer the
                scheme on the network or the network has no asset
            PaymentGatewayError: If the price cannot be expressed exactly
        """
        network = config.network
        try:
            supported_kind = self._supported_kind(config.scheme, network)
            asset = get_network_config(network)["default_asset"]
        except ValueError as e:
            raise UnsupportedNetworkError(network, f"Cannot price {config.price} on {network}: {e}") from e

        try:
            requirements = x402_types.PaymentRequirements(
                scheme=config.scheme,
                network=network,
                asset=asset["address"],
                amount=to_atomic_amount(config.price, asset["decimals"]),
                pay_to=config.pay_to,
                max_timeout_seconds=config.max_timeout_seconds,
            )
            requirements = self.scheme.enhance_payment_requirements(requirements, supported_kind, [])
        except ValueError as e:
            raise PaymentGatewayError(f"Cannot price {config.price} on {network}: {e}") from e

        return [from_x402_requirements(requirements)]

    def create_payment_required_response(
        self,
        requirements: List[PaymentRequirements],
        resource: ResourceInfo,
        error: Optional[str] = None
    ) -> PaymentChallenge:
        return PaymentChallenge(accepts=list(requirements), resource=resource, error=error)

    def parse_payment_header(self, header: str) -> PaymentProof:
        try:
            payload = decode_payment_signature_header(header)
        except (ValueError, TypeError, AttributeError) as e:
            raise PaymentHeaderDecodeError(f"payment header is not a valid x402 payload: {e}") from e

        if not isinstance(payload, x402_types.PaymentPayload) or payload.x402_version != X402_VERSION:
            raise PaymentHeaderDecodeError(
                f"unsupported x402Version {getattr(payload, 'x402_version', None)}, expected {X402_VERSION}"
            )
        return from_x402_payload(payload)

    def find_matching_requirements(
        self,
        requirements: List[PaymentRequirements],
        proof: PaymentProof
    ) -> Optional[PaymentRequirements]:
        for candidate in requirements:
            if (candidate.scheme == proof.accepted.scheme
                    and candidate.network == proof.accepted.network):
                return candidate
        return None

    def verify_payment(
        self,
        proof: PaymentProof,
        requirements: PaymentRequirements
    ) -> VerificationOutcome:
        response = self._call_facilitator(
            "verify",
            self.facilitator_client.verify,
            to_x402_payload(proof),
            to_x402_requirements(requirements)
        )
        outcome = from_verify_response(response)
        track_facilitator_call("verify", outcome.is_valid)
        return outcome

    def settle_payment(
        self,
        proof: PaymentProof,
        requirements: PaymentRequirements
    ) -> SettlementOutcome:
        fingerprint = proof_fingerprint(proof, requirements)
        if not self.settlement_guard.claim(fingerprint):
            self._logger.warning(f"Refusing duplicate settlement of proof {fingerprint[:12]}")
            return SettlementOutcome(
                success=False,
                network=requirements.network,
                error_reason=DUPLICATE_SETTLEMENT
            )

        try:
            response = self._call_facilitator(
                "settle",
                self.facilitator_client.settle,
                to_x402_payload(proof),
                to_x402_requirements(requirements)
            )
        except Exception:
            # Outcome unknown; release so the client may retry
            self.settlement_guard.release(fingerprint)
            raise

        outcome = from_settle_response(response)
        if not outcome.success:
            self.settlement_guard.release(fingerprint)

        track_facilitator_call("settle", outcome.success)
        return outcome

    def payment_required_body(self, challenge: PaymentChallenge) -> Dict[str, Any]:
        return payment_required_body(challenge)

    def encode_payment_required(self, challenge: PaymentChallenge) -> str:
        return encode_payment_required_header(to_x402_payment_required(challenge))

    def encode_settle_response(self, settlement: SettlementOutcome) -> str:
        return encode_payment_response_header(to_settle_response(settlement))

    def _supported_kind(self, scheme: str, network: str) -> x402_types.SupportedKind:
        try:
            return self._supported_kinds[(scheme, network)]
        except KeyError:
            raise ValueError(f"scheme '{scheme}' is not offered by the facilitator on this network") from None

    def _call_facilitator(self, operation: str, call: Callable, *args):
        """
        Run one facilitator call, translating transport failures.

        Raises:
            FacilitatorTimeoutError: If the call exceeded its deadline
            FacilitatorError: On transport errors, non-200 replies or
                replies that are not valid x402 responses
        """
        try:
            return call(*args)
        except httpx.TimeoutException as e:
            track_facilitator_call(operation, False)
            self._logger.error(f"Facilitator {operation} timed out: {e}")
            raise FacilitatorTimeoutError(f"Facilitator {operation} timed out") from e
        except (httpx.HTTPError, ValueError) as e:
            track_facilitator_call(operation, False)
            self._logger.error(f"Facilitator {operation} failed: {e}")
            raise FacilitatorError(f"Facilitator {operation} failed: {e}") from e
