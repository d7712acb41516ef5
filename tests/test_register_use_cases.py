"""Tests for vendor and product registration."""
from unittest.mock import Mock

import pytest
from x402.http import HTTPFacilitatorClientSync
from x402.schemas import SupportedKind, SupportedResponse

from conftest import VENDOR_ADDRESS
from x402_sales.application.use_cases.register_product_use_case import (
    ListVendorProductsUseCase,
    RegisterProductUseCase,
)
from x402_sales.application.use_cases.register_vendor_use_case import RegisterVendorUseCase
from x402_sales.domain.exceptions import (
    DomainValidationError,
    ProductAlreadyExistsError,
    UnsupportedNetworkError,
    VendorNotFoundError,
)
from x402_sales.infrastructure.gateways.x402_payment_gateway import X402PaymentGateway


@pytest.fixture
def register_product(product_repository, vendor_repository, payment_gateway):
    return RegisterProductUseCase(product_repository, vendor_repository, payment_gateway)


@pytest.fixture
def x402_gateway():
    facilitator = Mock(spec=HTTPFacilitatorClientSync)
    facilitator.get_supported.return_value = SupportedResponse(kinds=[
        SupportedKind(x402_version=2, scheme="exact", network="eip155:84532"),
    ])
    gateway = X402PaymentGateway(facilitator)
    gateway.initialize()
    return gateway


class TestRegisterVendor:

    def test_stores_vendor(self, vendor_repository):
        vendor = RegisterVendorUseCase(vendor_repository).execute("Acme", VENDOR_ADDRESS)

        assert vendor_repository.find_by_id(vendor.id) == vendor
        assert vendor_repository.find_by_api_key(vendor.api_key) == vendor

    def test_invalid_vendor_not_stored(self, vendor_repository):
        with pytest.raises(DomainValidationError):
            RegisterVendorUseCase(vendor_repository).execute("Acme", "0x1234")


class TestRegisterProduct:

    def test_stores_product(self, register_product, product_repository, vendor):
        product = register_product.execute(
            vendor_id=vendor.id,
            path="/reports/q1/",
            price="$5",
            description="Q1 report",
            data="a,b,c",
            mime_type="text/csv",
        )

        assert product.path == "reports/q1"
        assert product_repository.find_by_vendor_id_and_path(vendor.id, "reports/q1") == product

    def test_unknown_vendor(self, register_product):
        with pytest.raises(VendorNotFoundError):
            register_product.execute("missing", "a", "$1", "d", "x")

    def test_duplicate_path(self, register_product, vendor):
        register_product.execute(vendor.id, "a", "$1", "d", "x")

        with pytest.raises(ProductAlreadyExistsError):
            register_product.execute(vendor.id, "/a", "$2", "d", "y")

    def test_invalid_price(self, register_product, vendor):
        with pytest.raises(DomainValidationError, match="price must start with"):
            register_product.execute(vendor.id, "a", "1", "d", "x")

    def test_defaults_network(self, product_repository, vendor_repository, payment_gateway, vendor):
        register = RegisterProductUseCase(
            product_repository, vendor_repository, payment_gateway, default_network="eip155:8453"
        )

        product = register.execute(vendor.id, "a", "$1", "d", "x")

        assert product.network == "eip155:8453"
        assert payment_gateway.built_configs[-1].network == "eip155:8453"
        assert payment_gateway.built_configs[-1].pay_to == vendor.payout_address

    def test_unsellable_product_not_stored(self, register_product, payment_gateway, product_repository, vendor):
        payment_gateway.build_error = UnsupportedNetworkError("eip155:1")

        with pytest.raises(DomainValidationError, match="eip155:1"):
            register_product.execute(vendor.id, "a", "$1", "d", "x", network="eip155:1")

        assert product_repository.find_by_vendor_id(vendor.id) == []

    def test_rejects_network_the_facilitator_does_not_offer(
        self, product_repository, vendor_repository, x402_gateway, vendor
    ):
        register = RegisterProductUseCase(product_repository, vendor_repository, x402_gateway)

        with pytest.raises(DomainValidationError, match="Cannot price"):
            register.execute(vendor.id, "a", "$1", "d", "x", network="eip155:1")

        assert product_repository.find_by_vendor_id_and_path(vendor.id, "a") is None

    def test_rejects_price_finer_than_asset_decimals(
        self, product_repository, vendor_repository, x402_gateway, vendor
    ):
        register = RegisterProductUseCase(product_repository, vendor_repository, x402_gateway)

        with pytest.raises(DomainValidationError, match="cannot be represented"):
            register.execute(vendor.id, "a", "$0.0000001", "d", "x")

        assert product_repository.find_by_vendor_id_and_path(vendor.id, "a") is None

    def test_sellable_product_with_real_gateway(
        self, product_repository, vendor_repository, x402_gateway, vendor
    ):
        register = RegisterProductUseCase(product_repository, vendor_repository, x402_gateway)

        product = register.execute(vendor.id, "a", "$0.000001", "d", "x")

        assert product_repository.find_by_vendor_id_and_path(vendor.id, "a") == product


class TestListVendorProducts:

    def test_lists_products(self, product_repository, vendor_repository, vendor, product):
        products = ListVendorProductsUseCase(product_repository, vendor_repository).execute(vendor.id)

        assert products == [product]

    def test_unknown_vendor(self, product_repository, vendor_repository):
        with pytest.raises(VendorNotFoundError):
            ListVendorProductsUseCase(product_repository, vendor_repository).execute("missing")
