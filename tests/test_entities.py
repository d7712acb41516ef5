"""Tests for catalog entities."""
from datetime import datetime, timezone

import pytest
from eth_utils import to_checksum_address

from conftest import VENDOR_ADDRESS
from x402_sales.domain.entities.product import Product, ProductStatus
from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.exceptions import DomainValidationError


class TestVendor:
    """Tests for the Vendor entity."""

    def test_create_generates_identity(self):
        vendor = Vendor.create(name="Acme Data", evm_address=VENDOR_ADDRESS)

        assert vendor.id
        assert vendor.api_key.startswith("sk_")
        assert len(vendor.api_key) == 3 + 48
        assert vendor.created_at.tzinfo is not None

    def test_create_checksums_address(self):
        vendor = Vendor.create(name="Acme Data", evm_address=VENDOR_ADDRESS)

        assert vendor.evm_address == to_checksum_address(VENDOR_ADDRESS)
        assert vendor.payout_address == vendor.evm_address

    def test_create_gives_distinct_keys(self):
        first = Vendor.create(name="A", evm_address=VENDOR_ADDRESS)
        second = Vendor.create(name="B", evm_address=VENDOR_ADDRESS)

        assert first.id != second.id
        assert first.api_key != second.api_key

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_rejects_empty_name(self, name):
        with pytest.raises(DomainValidationError, match="name cannot be empty"):
            Vendor.create(name=name, evm_address=VENDOR_ADDRESS)

    @pytest.mark.parametrize("address", ["", "0x1234", "not-an-address", "0x" + "zz" * 20])
    def test_rejects_invalid_address(self, address):
        with pytest.raises(DomainValidationError, match="evmAddress must be a valid EVM address"):
            Vendor.create(name="Acme", evm_address=address)

    def test_reconstruct_keeps_identity(self):
        created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        vendor = Vendor.reconstruct(
            id="v-1",
            name="Acme",
            evm_address=to_checksum_address(VENDOR_ADDRESS),
            api_key="sk_abc",
            created_at=created_at,
        )

        assert vendor.id == "v-1"
        assert vendor.api_key == "sk_abc"
        assert vendor.created_at == created_at


class TestProduct:
    """Tests for the Product entity."""

    def _create(self, **overrides):
        fields = {
            "vendor_id": "v-1",
            "path": "weather/today",
            "price": "$0.001",
            "description": "Today's forecast",
            "data": "{}",
        }
        fields.update(overrides)
        return Product.create(**fields)

    def test_defaults(self):
        product = self._create()

        assert product.network == "eip155:84532"
        assert product.mime_type == "application/json"
        assert product.status == ProductStatus.ACTIVE
        assert product.is_active

    def test_explicit_network_and_mime_type(self):
        product = self._create(network="eip155:8453", mime_type="text/plain")

        assert product.network == "eip155:8453"
        assert product.mime_type == "text/plain"

    @pytest.mark.parametrize("path, expected", [
        ("/weather/today/", "weather/today"),
        ("  report  ", "report"),
        ("a/b/c", "a/b/c"),
    ])
    def test_path_normalized(self, path, expected):
        assert self._create(path=path).path == expected

    @pytest.mark.parametrize("path", ["", "/", "  "])
    def test_rejects_empty_path(self, path):
        with pytest.raises(DomainValidationError, match="path cannot be empty"):
            self._create(path=path)

    @pytest.mark.parametrize("price, message", [
        ("0.001", "price must start with \\$"),
        ("€1", "price must start with \\$"),
        ("$abc", "price must contain a valid number"),
        ("$", "price must contain a valid number"),
        ("$0", "price must be greater than zero"),
        ("$-1", "price must be greater than zero"),
    ])
    def test_rejects_bad_price(self, price, message):
        with pytest.raises(DomainValidationError, match=message):
            self._create(price=price)

    def test_status_coerced_from_string(self):
        product = Product.reconstruct(
            id="p-1",
            vendor_id="v-1",
            path="report",
            price="$1",
            network="eip155:84532",
            description="",
            mime_type="text/csv",
            data="a,b",
            status="inactive",
        )

        assert product.status == ProductStatus.INACTIVE
        assert not product.is_active

    def test_rejects_unknown_status(self):
        with pytest.raises(DomainValidationError, match="Invalid status"):
            Product.reconstruct(
                id="p-1",
                vendor_id="v-1",
                path="report",
                price="$1",
                network="eip155:84532",
                description="",
                mime_type="text/csv",
                data="a,b",
                status="archived",
            )
