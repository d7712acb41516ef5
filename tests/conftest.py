"""Pytest configuration and shared fixtures."""
from typing import Any, Dict, List, Optional

import pytest
from eth_utils import to_checksum_address
from x402.http import encode_payment_required_header, encode_payment_response_header

from x402_sales import create_app
from x402_sales.config.settings import TestingConfig
from x402_sales.domain.entities.payment import (
    PaymentChallenge,
    PaymentProof,
    PaymentRequirements,
    ResourceConfig,
    ResourceInfo,
    SettlementOutcome,
    VerificationOutcome,
)
from x402_sales.domain.entities.product import Product
from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.exceptions import PaymentHeaderDecodeError
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.infrastructure.gateways.x402_mapping import (
    payment_required_body,
    to_settle_response,
    to_x402_payment_required,
)
from x402_sales.infrastructure.repositories.in_memory import (
    InMemoryProductRepository,
    InMemoryVendorRepository,
)
from x402_sales.infrastructure.service_container import ServiceContainer


VENDOR_ADDRESS = "0x209693bc6afc0c5328ba36faf03c514ef312287c"
ASSET_ADDRESS = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"
GOOD_HEADER = "good-proof"
OTHER_NETWORK_HEADER = "other-network-proof"


def make_proof(network: str = "eip155:84532", scheme: str = "exact", pay_to: str = "") -> PaymentProof:
    """A proof whose accepted requirement targets the given scheme and network."""
    return PaymentProof(
        accepted=PaymentRequirements(
            scheme=scheme,
            network=network,
            asset=ASSET_ADDRESS,
            amount="1000",
            pay_to=pay_to or to_checksum_address(VENDOR_ADDRESS),
            max_timeout_seconds=60,
        ),
        payload={"signature": "0xsig", "authorization": {"nonce": "0x01"}},
    )


class FakePaymentGateway(IPaymentGateway):
    """
    In-process payment gateway that records every call.

    Verification and settlement results are configurable per test; headers
    are looked up in ``proofs`` and anything else fails to decode.
    """

    def __init__(self):
        self.verification = VerificationOutcome(is_valid=True, payer="0xpayer")
        self.settlement = SettlementOutcome(
            success=True,
            transaction="0xtx",
            network="eip155:84532",
            payer="0xpayer",
        )
        self.proofs: Dict[str, PaymentProof] = {
            GOOD_HEADER: make_proof(),
            OTHER_NETWORK_HEADER: make_proof(network="eip155:8453"),
        }
        self.built_configs: List[ResourceConfig] = []
        self.initialize_calls = 0
        self.verify_calls = 0
        self.settle_calls = 0
        self.verify_error: Optional[Exception] = None
        self.build_error: Optional[Exception] = None

    def initialize(self) -> None:
        self.initialize_calls += 1

    def build_payment_requirements(self, config: ResourceConfig) -> List[PaymentRequirements]:
        self.built_configs.append(config)
        if self.build_error is not None:
            raise self.build_error
        return [
            PaymentRequirements(
                scheme=config.scheme,
                network=config.network,
                asset=ASSET_ADDRESS,
                amount="1000",
                pay_to=config.pay_to,
                max_timeout_seconds=config.max_timeout_seconds,
                extra={"name": "USDC", "version": "2"},
            )
        ]

    def create_payment_required_response(
        self,
        requirements: List[PaymentRequirements],
        resource: ResourceInfo,
        error: Optional[str] = None
    ) -> PaymentChallenge:
        return PaymentChallenge(accepts=list(requirements), resource=resource, error=error)

    def parse_payment_header(self, header: str) -> PaymentProof:
        try:
            return self.proofs[header]
        except KeyError:
            raise PaymentHeaderDecodeError("payment header is not base64-encoded JSON") from None

    def find_matching_requirements(
        self,
        requirements: List[PaymentRequirements],
        proof: PaymentProof
    ) -> Optional[PaymentRequirements]:
        for candidate in requirements:
            if candidate.scheme == proof.accepted.scheme and candidate.network == proof.accepted.network:
                return candidate
        return None

    def verify_payment(self, proof: PaymentProof, requirements: PaymentRequirements) -> VerificationOutcome:
        self.verify_calls += 1
        if self.verify_error is not None:
            raise self.verify_error
        return self.verification

    def settle_payment(self, proof: PaymentProof, requirements: PaymentRequirements) -> SettlementOutcome:
        self.settle_calls += 1
        return self.settlement

    def payment_required_body(self, challenge: PaymentChallenge) -> Dict[str, Any]:
        return payment_required_body(challenge)

    def encode_payment_required(self, challenge: PaymentChallenge) -> str:
        return encode_payment_required_header(to_x402_payment_required(challenge))

    def encode_settle_response(self, settlement: SettlementOutcome) -> str:
        return encode_payment_response_header(to_settle_response(settlement))


@pytest.fixture
def vendor_repository():
    """Empty in-memory vendor repository."""
    return InMemoryVendorRepository()


@pytest.fixture
def product_repository():
    """Empty in-memory product repository."""
    return InMemoryProductRepository()


@pytest.fixture
def payment_gateway():
    """Call-counting fake payment gateway."""
    return FakePaymentGateway()


@pytest.fixture
def vendor(vendor_repository):
    """A stored vendor."""
    return vendor_repository.save(Vendor.create(name="Acme Data", evm_address=VENDOR_ADDRESS))


@pytest.fixture
def product(product_repository, vendor):
    """A stored product owned by ``vendor``."""
    return product_repository.save(Product.create(
        vendor_id=vendor.id,
        path="weather/today",
        price="$0.001",
        description="Today's forecast",
        data='{"forecast": "sunny"}',
    ))


@pytest.fixture
def container(vendor_repository, product_repository, payment_gateway):
    """Service container wired to in-memory repositories and the fake gateway."""
    return ServiceContainer(
        config=TestingConfig,
        vendor_repository=vendor_repository,
        product_repository=product_repository,
        payment_gateway=payment_gateway,
    )


@pytest.fixture
def app(container):
    """Flask application under the testing configuration."""
    return create_app(TestingConfig, container=container)


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
