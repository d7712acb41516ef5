"""Domain and payment backend exceptions."""


class DomainValidationError(ValueError):
    """Raised when an entity invariant is violated at creation time."""


class VendorNotFoundError(LookupError):
    """Raised by registration use cases when the vendor does not exist."""

    def __init__(self, vendor_id: str):
        super().__init__(f"Vendor not found: {vendor_id}")
        self.vendor_id = vendor_id


class ProductAlreadyExistsError(Exception):
    """Raised when a vendor already has a product at the given path."""

    def __init__(self, vendor_id: str, path: str):
        super().__init__(f"Product already exists at path '{path}' for vendor {vendor_id}")
        self.vendor_id = vendor_id
        self.path = path


class PaymentGatewayError(Exception):
    """Base class for payment backend faults (not request outcomes)."""


class PaymentHeaderDecodeError(PaymentGatewayError):
    """Raised when a client-supplied payment header cannot be decoded."""


class UnsupportedNetworkError(PaymentGatewayError):
    """Raised when a resource targets a network the gateway cannot sell on."""

    def __init__(self, network: str, message: str = None):
        super().__init__(message or f"No payment configuration for network: {network}")
        self.network = network


class FacilitatorError(PaymentGatewayError):
    """Raised when the facilitator cannot be reached or answers garbage."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class FacilitatorTimeoutError(FacilitatorError):
    """Raised when a facilitator call exceeds its deadline."""
