"""Vendor domain entity."""
import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from eth_utils import is_hex_address, to_checksum_address

from x402_sales.domain.exceptions import DomainValidationError


def _generate_api_key() -> str:
    return f"sk_{secrets.token_hex(24)}"


@dataclass(frozen=True)
class Vendor:
    """
    Domain entity representing a vendor selling paywalled resources.

    The payout address receives every payment for the vendor's products
    and is stored in EIP-55 checksum form.
    """

    id: str
    name: str
    evm_address: str
    api_key: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate vendor entity."""
        if not self.id:
            raise DomainValidationError("id is required")
        if not self.name or not self.name.strip():
            raise DomainValidationError("name cannot be empty")
        if not self.api_key:
            raise DomainValidationError("api_key is required")
        if not isinstance(self.evm_address, str) or not is_hex_address(self.evm_address):
            raise DomainValidationError("evmAddress must be a valid EVM address")

    @property
    def payout_address(self) -> str:
        """Address that receives payments for this vendor."""
        return self.evm_address

    @classmethod
    def create(cls, name: str, evm_address: str) -> "Vendor":
        """
        Create a new vendor with a fresh id and API key.

        Args:
            name: Display name
            evm_address: Payout address (0x-prefixed, 20 bytes)

        Returns:
            New Vendor instance

        Raises:
            DomainValidationError: If name or address is invalid
        """
        address = (evm_address or "").strip()
        if not is_hex_address(address):
            raise DomainValidationError("evmAddress must be a valid EVM address")

        return cls(
            id=str(uuid.uuid4()),
            name=(name or "").strip(),
            evm_address=to_checksum_address(address),
            api_key=_generate_api_key(),
        )

    @classmethod
    def reconstruct(
        cls,
        id: str,
        name: str,
        evm_address: str,
        api_key: str,
        created_at: Optional[datetime] = None,
    ) -> "Vendor":
        """Rebuild a vendor from stored fields."""
        return cls(
            id=id,
            name=name,
            evm_address=evm_address,
            api_key=api_key,
            created_at=created_at or datetime.now(timezone.utc),
        )
