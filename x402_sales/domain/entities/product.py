"""Product domain entity."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from x402_sales.domain.exceptions import DomainValidationError
from x402_sales.utils.price import parse_price

DEFAULT_NETWORK = "eip155:84532"  # Base Sepolia
DEFAULT_MIME_TYPE = "application/json"


class ProductStatus(str, Enum):
    """Lifecycle status of a product."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Product:
    """
    Domain entity representing a priced resource owned by a vendor.

    A product is addressed by ``(vendor_id, path)``; ``data`` is the
    content released to the client only after a settled payment.
    """

    id: str
    vendor_id: str
    path: str
    price: str
    description: str
    data: str
    network: str = DEFAULT_NETWORK
    mime_type: str = DEFAULT_MIME_TYPE
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate product entity."""
        if not self.id:
            raise DomainValidationError("id is required")
        if not self.vendor_id:
            raise DomainValidationError("vendorId is required")
        if not self.path:
            raise DomainValidationError("path cannot be empty")
        try:
            amount = parse_price(self.price)
        except ValueError as exc:
            raise DomainValidationError(str(exc)) from exc
        if amount <= 0:
            raise DomainValidationError("price must be greater than zero")
        if not self.network:
            raise DomainValidationError("network cannot be empty")
        if not self.mime_type:
            raise DomainValidationError("mimeType cannot be empty")
        if not isinstance(self.status, ProductStatus):
            # Accept raw strings from storage
            try:
                object.__setattr__(self, "status", ProductStatus(self.status))
            except ValueError as exc:
                raise DomainValidationError(f"Invalid status: {self.status}") from exc

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @staticmethod
    def normalize_path(path: Optional[str]) -> str:
        """Strip surrounding whitespace and slashes; inner slashes are kept."""
        return (path or "").strip().strip("/")

    @classmethod
    def create(
        cls,
        vendor_id: str,
        path: str,
        price: str,
        description: str,
        data: str,
        network: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> "Product":
        """
        Create a new active product.

        Args:
            vendor_id: Owning vendor id
            path: Path segment, unique within the vendor (may contain '/')
            price: Currency-prefixed price, e.g. "$0.001"
            description: Human-readable description
            data: Content released after payment
            network: Target network (defaults to Base Sepolia)
            mime_type: Content MIME type (defaults to application/json)

        Returns:
            New Product instance

        Raises:
            DomainValidationError: If any field is invalid
        """
        return cls(
            id=str(uuid.uuid4()),
            vendor_id=vendor_id,
            path=cls.normalize_path(path),
            price=price,
            description=description or "",
            data=data if data is not None else "",
            network=network or DEFAULT_NETWORK,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
        )

    @classmethod
    def reconstruct(
        cls,
        id: str,
        vendor_id: str,
        path: str,
        price: str,
        network: str,
        description: str,
        mime_type: str,
        data: str,
        status: ProductStatus,
        created_at: Optional[datetime] = None,
    ) -> "Product":
        """Rebuild a product from stored fields."""
        return cls(
            id=id,
            vendor_id=vendor_id,
            path=path,
            price=price,
            description=description,
            data=data,
            network=network,
            mime_type=mime_type,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )
