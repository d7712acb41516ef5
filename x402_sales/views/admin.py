"""Admin endpoints for registering vendors and their products."""
import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from x402_sales.decorators.security import admin_key_required, vendor_key_required
from x402_sales.domain.entities.product import Product
from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.exceptions import (
    DomainValidationError,
    ProductAlreadyExistsError,
    VendorNotFoundError,
)
from x402_sales.middleware.monitoring import track_request


admin_blueprint = Blueprint("admin", __name__, url_prefix="/admin")
_logger = logging.getLogger(__name__)


def _vendor_to_json(vendor: Vendor) -> Dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "evmAddress": vendor.evm_address,
        "apiKey": vendor.api_key,
        "createdAt": vendor.created_at.isoformat(),
    }


def _product_to_json(product: Product, include_data: bool = True) -> Dict[str, Any]:
    data = {
        "id": product.id,
        "vendorId": product.vendor_id,
        "path": product.path,
        "price": product.price,
        "network": product.network,
        "description": product.description,
        "mimeType": product.mime_type,
        "status": product.status.value,
        "createdAt": product.created_at.isoformat(),
    }
    if include_data:
        data["data"] = product.data
    return data


def _error(message: str, status_code: int):
    return jsonify({"status": "error", "message": message}), status_code


def _container():
    return current_app.config["service_container"]


@admin_blueprint.route("/vendors", methods=["POST"])
@admin_key_required
@track_request("register_vendor")
def register_vendor():
    """
    Register a vendor.

    Expected payload:
    {
        "name": "Acme Data",
        "evmAddress": "0x..."
    }

    Returns:
        201 with the vendor, including the API key it must use from now on
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object", 400)

    try:
        vendor = _container().get_register_vendor_use_case().execute(
            name=body.get("name") or "",
            evm_address=body.get("evmAddress") or ""
        )
    except DomainValidationError as e:
        return _error(str(e), 400)

    return jsonify(_vendor_to_json(vendor)), 201


@admin_blueprint.route("/vendors/<vendor_id>/products", methods=["POST"])
@vendor_key_required
@track_request("register_product")
def register_product(vendor_id: str):
    """
    Register a product under the vendor.

    Expected payload:
    {
        "path": "weather/today",
        "price": "$0.001",
        "description": "Today's forecast",
        "data": "{...}",
        "network": "eip155:84532",      # optional
        "mimeType": "application/json"  # optional
    }
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object", 400)

    data = body.get("data")
    if data is not None and not isinstance(data, str):
        return _error("data must be a string", 400)

    try:
        product = _container().get_register_product_use_case().execute(
            vendor_id=vendor_id,
            path=body.get("path") or "",
            price=body.get("price") or "",
            description=body.get("description") or "",
            data=data or "",
            network=body.get("network"),
            mime_type=body.get("mimeType")
        )
    except DomainValidationError as e:
        return _error(str(e), 400)
    except VendorNotFoundError as e:
        return _error(str(e), 404)
    except ProductAlreadyExistsError as e:
        return _error(str(e), 409)

    return jsonify(_product_to_json(product)), 201


@admin_blueprint.route("/vendors/<vendor_id>/products", methods=["GET"])
@vendor_key_required
@track_request("list_products")
def list_products(vendor_id: str):
    """List the vendor's products without their content."""
    try:
        products = _container().get_list_vendor_products_use_case().execute(vendor_id)
    except VendorNotFoundError as e:
        return _error(str(e), 404)

    return jsonify({
        "products": [_product_to_json(p, include_data=False) for p in products]
    }), 200
