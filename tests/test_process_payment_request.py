"""Tests for the paywalled request orchestration."""
import pytest
from eth_utils import to_checksum_address

from conftest import GOOD_HEADER, OTHER_NETWORK_HEADER, VENDOR_ADDRESS
from x402_sales.application.outcomes import (
    OUTCOME_TYPES,
    NotFound,
    PaymentRequired,
    RequestOutcome,
    SettlementFailed,
    Success,
    VerificationFailed,
)
from x402_sales.application.use_cases.process_payment_request_use_case import (
    PaymentRequestInput,
    ProcessPaymentRequestUseCase,
)
from x402_sales.domain.entities.payment import SettlementOutcome, VerificationOutcome
from x402_sales.domain.entities.product import Product
from x402_sales.domain.exceptions import FacilitatorError


RESOURCE_URL = "http://localhost/vendor/weather/today"


@pytest.fixture
def use_case(product_repository, vendor_repository, payment_gateway):
    return ProcessPaymentRequestUseCase(
        product_repository=product_repository,
        vendor_repository=vendor_repository,
        payment_gateway=payment_gateway,
    )


def _request(vendor_id, path="weather/today", header=None):
    return PaymentRequestInput(
        vendor_id=vendor_id,
        path=path,
        resource_url=RESOURCE_URL,
        payment_header=header,
    )


class TestNotFound:
    """Unknown vendors and products."""

    def test_unknown_vendor(self, use_case, product):
        outcome = use_case.execute(_request("missing-vendor"))

        assert outcome == NotFound(reason="Vendor not found")

    def test_unknown_product(self, use_case, vendor, product):
        outcome = use_case.execute(_request(vendor.id, path="weather/tomorrow"))

        assert outcome == NotFound(reason="Product not found")

    def test_vendor_checked_before_product(self, use_case, product_repository):
        # Product exists under an id that has no vendor record
        product_repository.save(Product.create(
            vendor_id="ghost",
            path="weather/today",
            price="$0.01",
            description="orphan",
            data="{}",
        ))

        outcome = use_case.execute(_request("ghost"))

        assert outcome == NotFound(reason="Vendor not found")

    def test_not_found_never_touches_gateway(self, use_case, payment_gateway):
        use_case.execute(_request("missing-vendor", header=GOOD_HEADER))

        assert payment_gateway.built_configs == []
        assert payment_gateway.verify_calls == 0
        assert payment_gateway.settle_calls == 0


class TestPaymentRequired:
    """Requests without an acceptable proof."""

    def test_no_header_returns_challenge(self, use_case, vendor, product):
        outcome = use_case.execute(_request(vendor.id))

        assert isinstance(outcome, PaymentRequired)
        challenge = outcome.challenge
        assert challenge.x402_version == 2
        assert challenge.resource.url == RESOURCE_URL
        assert challenge.resource.description == "Today's forecast"
        assert challenge.resource.mime_type == "application/json"
        assert len(challenge.accepts) == 1

    def test_payee_is_vendor_payout_address(self, use_case, vendor, product):
        outcome = use_case.execute(_request(vendor.id))

        assert all(r.pay_to == vendor.payout_address for r in outcome.challenge.accepts)
        assert vendor.payout_address == to_checksum_address(VENDOR_ADDRESS)

    def test_requirement_built_from_product(self, use_case, payment_gateway, vendor, product):
        use_case.execute(_request(vendor.id))

        config = payment_gateway.built_configs[0]
        assert config.scheme == "exact"
        assert config.network == product.network
        assert config.price == "$0.001"
        assert config.max_timeout_seconds == 60

    def test_empty_header_treated_as_absent(self, use_case, payment_gateway, vendor, product):
        outcome = use_case.execute(_request(vendor.id, header=""))

        assert isinstance(outcome, PaymentRequired)
        assert payment_gateway.verify_calls == 0

    def test_no_header_is_repeatable(self, use_case, payment_gateway, vendor, product):
        first = use_case.execute(_request(vendor.id))
        second = use_case.execute(_request(vendor.id))

        assert first == second
        assert payment_gateway.verify_calls == 0
        assert payment_gateway.settle_calls == 0

    def test_non_matching_proof_gets_fresh_challenge(self, use_case, payment_gateway, vendor, product):
        outcome = use_case.execute(_request(vendor.id, header=OTHER_NETWORK_HEADER))

        assert isinstance(outcome, PaymentRequired)
        assert [r.network for r in outcome.challenge.accepts] == ["eip155:84532"]
        assert payment_gateway.verify_calls == 0
        assert payment_gateway.settle_calls == 0

    def test_non_matching_proof_uses_current_price(
        self, use_case, payment_gateway, product_repository, vendor
    ):
        product_repository.save(Product.create(
            vendor_id=vendor.id,
            path="premium",
            price="$2.50",
            description="Premium feed",
            data="[]",
        ))

        outcome = use_case.execute(_request(vendor.id, path="premium", header=OTHER_NETWORK_HEADER))

        assert isinstance(outcome, PaymentRequired)
        assert payment_gateway.built_configs[-1].price == "$2.50"

    def test_non_matching_proof_is_repeatable(self, use_case, vendor, product):
        first = use_case.execute(_request(vendor.id, header=OTHER_NETWORK_HEADER))
        second = use_case.execute(_request(vendor.id, header=OTHER_NETWORK_HEADER))

        assert first == second


class TestVerification:
    """Proof verification failures."""

    def test_invalid_proof(self, use_case, payment_gateway, vendor, product):
        payment_gateway.verification = VerificationOutcome(
            is_valid=False,
            invalid_reason="insufficient_funds",
        )

        outcome = use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert outcome == VerificationFailed(reason="insufficient_funds")

    def test_invalid_proof_without_reason(self, use_case, payment_gateway, vendor, product):
        payment_gateway.verification = VerificationOutcome(is_valid=False)

        outcome = use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert outcome == VerificationFailed(reason="Unknown verification error")

    def test_verification_failure_never_settles(self, use_case, payment_gateway, vendor, product):
        payment_gateway.verification = VerificationOutcome(is_valid=False, invalid_reason="expired")

        use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert payment_gateway.verify_calls == 1
        assert payment_gateway.settle_calls == 0

    def test_malformed_header(self, use_case, payment_gateway, vendor, product):
        outcome = use_case.execute(_request(vendor.id, header="not-a-proof"))

        assert isinstance(outcome, VerificationFailed)
        assert outcome.reason.startswith("Invalid payment header: ")
        assert payment_gateway.verify_calls == 0
        assert payment_gateway.settle_calls == 0

    def test_backend_fault_propagates(self, use_case, payment_gateway, vendor, product):
        payment_gateway.verify_error = FacilitatorError("connection refused")

        with pytest.raises(FacilitatorError):
            use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert payment_gateway.settle_calls == 0


class TestSettlement:
    """Settlement after successful verification."""

    def test_settlement_failure(self, use_case, payment_gateway, vendor, product):
        payment_gateway.settlement = SettlementOutcome(success=False, error_reason="tx_reverted")

        outcome = use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert outcome == SettlementFailed(reason="tx_reverted")
        assert not hasattr(outcome, "product")

    def test_settlement_failure_without_reason(self, use_case, payment_gateway, vendor, product):
        payment_gateway.settlement = SettlementOutcome(success=False)

        outcome = use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert outcome == SettlementFailed(reason="Unknown settlement error")

    def test_success_carries_product(self, use_case, payment_gateway, vendor, product):
        outcome = use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert isinstance(outcome, Success)
        assert outcome.product == product
        assert outcome.product.data == '{"forecast": "sunny"}'
        assert outcome.settlement.transaction == "0xtx"

    def test_settles_exactly_once(self, use_case, payment_gateway, vendor, product):
        use_case.execute(_request(vendor.id, header=GOOD_HEADER))

        assert payment_gateway.verify_calls == 1
        assert payment_gateway.settle_calls == 1


class TestOutcomes:

    def test_variant_kinds(self):
        assert [cls.kind for cls in OUTCOME_TYPES] == [
            "payment_required",
            "success",
            "verification_failed",
            "settlement_failed",
            "not_found",
        ]

    def test_closed_to_new_variants(self):
        with pytest.raises(TypeError):
            type("Refunded", (RequestOutcome,), {"__module__": "elsewhere"})
