"""Payment protocol value objects.

These are the application's own representations of the x402 protocol
shapes. Gateways translate them to and from the wire format; nothing in
the domain or application layers depends on a protocol library.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

X402_VERSION = 2
SCHEME_EXACT = "exact"


@dataclass(frozen=True)
class ResourceInfo:
    """Describes the resource being paid for."""

    url: str
    description: str = ""
    mime_type: str = ""


@dataclass(frozen=True)
class ResourceConfig:
    """Inputs for building payment requirements for one resource."""

    scheme: str
    network: str
    price: str
    pay_to: str
    max_timeout_seconds: int = 60


@dataclass(frozen=True)
class PaymentRequirements:
    """One accepted way of paying for a resource."""

    scheme: str
    network: str
    asset: str
    amount: str
    pay_to: str
    max_timeout_seconds: int
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentChallenge:
    """The "payment required" descriptor returned to clients without a valid proof."""

    accepts: List[PaymentRequirements]
    resource: ResourceInfo
    x402_version: int = X402_VERSION
    error: Optional[str] = None


@dataclass(frozen=True)
class PaymentProof:
    """
    Client-submitted payment payload.

    ``accepted`` is the requirement the client claims to satisfy and
    ``payload`` the scheme-specific authorization (e.g. a signature).
    Parsed from untrusted input.
    """

    accepted: PaymentRequirements
    payload: Dict[str, Any]
    x402_version: int = X402_VERSION
    resource: Optional[ResourceInfo] = None


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of verifying a proof against a requirement."""

    is_valid: bool
    invalid_reason: Optional[str] = None
    payer: Optional[str] = None


@dataclass(frozen=True)
class SettlementOutcome:
    """Result of settling a verified proof."""

    success: bool
    transaction: str = ""
    network: str = ""
    payer: Optional[str] = None
    error_reason: Optional[str] = None
