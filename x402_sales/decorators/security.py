"""API key checks for the admin endpoints."""
import hmac
import logging
from functools import wraps

from flask import current_app, jsonify, request


_logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-Admin-Key"
VENDOR_KEY_HEADER = "X-API-Key"


def _keys_match(expected: str, provided: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


def _unauthorized(message: str):
    return jsonify({"status": "error", "message": message}), 401


def admin_key_required(f):
    """
    Require the X-Admin-Key header when ADMIN_API_KEY is configured.

    With no ADMIN_API_KEY the endpoint is open (development setups).
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        admin_key = current_app.config.get("ADMIN_API_KEY")
        if admin_key:
            provided = request.headers.get(ADMIN_KEY_HEADER, "")
            if not provided or not _keys_match(admin_key, provided):
                _logger.info("Admin key verification failed")
                return _unauthorized("Invalid admin key")
        return f(*args, **kwargs)

    return decorated_function


def vendor_key_required(f):
    """
    Require the vendor's own API key in X-API-Key.

    The wrapped view must take a ``vendor_id`` argument. Responds 404 when
    the vendor does not exist and 401 when the key is missing or belongs
    to someone else.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        vendor_id = kwargs.get("vendor_id")
        provided = request.headers.get(VENDOR_KEY_HEADER, "")
        if not provided:
            return _unauthorized(f"Missing {VENDOR_KEY_HEADER} header")

        container = current_app.config["service_container"]
        vendor = container.get_vendor_repository().find_by_id(vendor_id)
        if vendor is None:
            return jsonify({"status": "error", "message": f"Vendor not found: {vendor_id}"}), 404

        if not _keys_match(vendor.api_key, provided):
            _logger.info(f"API key verification failed for vendor {vendor_id}")
            return _unauthorized("Invalid API key")
        return f(*args, **kwargs)

    return decorated_function
