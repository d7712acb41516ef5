"""Translation between payment value objects and x402 library models.

The gateway is the only place where x402 types appear; everything it hands
back to the application is one of the dataclasses in
``x402_sales.domain.entities.payment``.
"""
from typing import Any, Dict, Optional

from x402 import schemas as x402_types

from x402_sales.domain.entities.payment import (
    PaymentChallenge,
    PaymentProof,
    PaymentRequirements,
    ResourceInfo,
    SettlementOutcome,
    VerificationOutcome,
)


def to_x402_requirements(requirements: PaymentRequirements) -> x402_types.PaymentRequirements:
    return x402_types.PaymentRequirements(
        scheme=requirements.scheme,
        network=requirements.network,
        asset=requirements.asset,
        amount=requirements.amount,
        pay_to=requirements.pay_to,
        max_timeout_seconds=requirements.max_timeout_seconds,
        extra=dict(requirements.extra),
    )


def from_x402_requirements(model: x402_types.PaymentRequirements) -> PaymentRequirements:
    return PaymentRequirements(
        scheme=model.scheme,
        network=str(model.network),
        asset=model.asset,
        amount=model.amount,
        pay_to=model.pay_to,
        max_timeout_seconds=model.max_timeout_seconds,
        extra=dict(model.extra or {}),
    )


def to_x402_resource(resource: ResourceInfo) -> x402_types.ResourceInfo:
    # Empty strings are omitted from the wire rather than sent as ""
    return x402_types.ResourceInfo(
        url=resource.url,
        description=resource.description or None,
        mime_type=resource.mime_type or None,
    )


def from_x402_resource(model: Optional[x402_types.ResourceInfo]) -> Optional[ResourceInfo]:
    if model is None:
        return None
    return ResourceInfo(
        url=model.url,
        description=model.description or "",
        mime_type=model.mime_type or "",
    )


def to_x402_payment_required(challenge: PaymentChallenge) -> x402_types.PaymentRequired:
    return x402_types.PaymentRequired(
        x402_version=challenge.x402_version,
        error=challenge.error,
        resource=to_x402_resource(challenge.resource),
        accepts=[to_x402_requirements(r) for r in challenge.accepts],
    )


def payment_required_body(challenge: PaymentChallenge) -> Dict[str, Any]:
    """The challenge as camelCase JSON, identical to the PAYMENT-REQUIRED header content."""
    return to_x402_payment_required(challenge).model_dump(mode="json", by_alias=True, exclude_none=True)


def to_x402_payload(proof: PaymentProof) -> x402_types.PaymentPayload:
    return x402_types.PaymentPayload(
        x402_version=proof.x402_version,
        payload=dict(proof.payload),
        accepted=to_x402_requirements(proof.accepted),
        resource=to_x402_resource(proof.resource) if proof.resource else None,
    )


def from_x402_payload(model: x402_types.PaymentPayload) -> PaymentProof:
    return PaymentProof(
        accepted=from_x402_requirements(model.accepted),
        payload=dict(model.payload),
        x402_version=model.x402_version,
        resource=from_x402_resource(model.resource),
    )


def from_verify_response(response: x402_types.VerifyResponse) -> VerificationOutcome:
    return VerificationOutcome(
        is_valid=response.is_valid,
        invalid_reason=response.invalid_reason or response.invalid_message,
        payer=response.payer,
    )


def from_settle_response(response: x402_types.SettleResponse) -> SettlementOutcome:
    return SettlementOutcome(
        success=response.success,
        transaction=response.transaction or "",
        network=str(response.network or ""),
        payer=response.payer,
        error_reason=response.error_reason or response.error_message,
    )


def to_settle_response(outcome: SettlementOutcome) -> x402_types.SettleResponse:
    return x402_types.SettleResponse(
        success=outcome.success,
        error_reason=outcome.error_reason,
        payer=outcome.payer,
        transaction=outcome.transaction,
        network=outcome.network,
    )
