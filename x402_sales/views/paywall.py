"""The paywalled resource endpoint."""
import logging
import time

from flask import Blueprint, Response, current_app, jsonify, request

from x402_sales.application.outcomes import (
    NotFound,
    PaymentRequired,
    RequestOutcome,
    SettlementFailed,
    Success,
    VerificationFailed,
)
from x402_sales.application.use_cases.process_payment_request_use_case import PaymentRequestInput
from x402_sales.domain.interfaces.payment_gateway import IPaymentGateway
from x402_sales.middleware.monitoring import track_payment_outcome, track_request


paywall_blueprint = Blueprint("paywall", __name__)
_logger = logging.getLogger(__name__)

PAYMENT_SIGNATURE_HEADER = "PAYMENT-SIGNATURE"
LEGACY_PAYMENT_HEADER = "X-PAYMENT"
PAYMENT_REQUIRED_HEADER = "PAYMENT-REQUIRED"
PAYMENT_RESPONSE_HEADER = "PAYMENT-RESPONSE"


def _payment_header():
    return request.headers.get(PAYMENT_SIGNATURE_HEADER) or request.headers.get(LEGACY_PAYMENT_HEADER)


def to_response(outcome: RequestOutcome, gateway: IPaymentGateway) -> Response:
    """
    Map a request outcome to an HTTP response.

    Raises:
        TypeError: If the outcome is not one of the five known variants
    """
    if isinstance(outcome, PaymentRequired):
        response = jsonify(gateway.payment_required_body(outcome.challenge))
        response.status_code = 402
        response.headers[PAYMENT_REQUIRED_HEADER] = gateway.encode_payment_required(outcome.challenge)
        return response

    if isinstance(outcome, Success):
        response = Response(outcome.product.data, status=200, mimetype=outcome.product.mime_type)
        response.headers[PAYMENT_RESPONSE_HEADER] = gateway.encode_settle_response(outcome.settlement)
        return response

    if isinstance(outcome, (VerificationFailed, SettlementFailed)):
        response = jsonify({"error": outcome.kind, "reason": outcome.reason})
        response.status_code = 402
        return response

    if isinstance(outcome, NotFound):
        response = jsonify({"error": outcome.kind, "reason": outcome.reason})
        response.status_code = 404
        return response

    raise TypeError(f"Unhandled request outcome: {type(outcome).__name__}")


@paywall_blueprint.route("/<vendor_id>/<path:product_path>", methods=["GET"])
@track_request("paywall")
def serve_resource(vendor_id: str, product_path: str):
    """
    Serve a vendor's product behind an x402 paywall.

    Without a payment header the client receives a 402 challenge. With a
    valid, settled payment the product content is returned together with
    the settlement receipt.
    """
    container = current_app.config["service_container"]
    use_case = container.get_process_payment_request_use_case()

    started_at = time.monotonic()
    outcome = use_case.execute(PaymentRequestInput(
        vendor_id=vendor_id,
        path=product_path,
        resource_url=request.url,
        payment_header=_payment_header()
    ))
    track_payment_outcome(outcome.kind, started_at)

    return to_response(outcome, container.get_payment_gateway())
