"""In-memory catalog repositories for development and testing."""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from x402_sales.domain.entities.product import Product
from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.exceptions import ProductAlreadyExistsError
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository


class InMemoryVendorRepository(IVendorRepository):
    """Process-local vendor storage. Contents are lost on restart."""

    def __init__(self):
        self._vendors: Dict[str, Vendor] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def save(self, vendor: Vendor) -> Vendor:
        with self._lock:
            self._vendors[vendor.id] = vendor
        return vendor

    def find_by_id(self, vendor_id: str) -> Optional[Vendor]:
        return self._vendors.get(vendor_id)

    def find_by_api_key(self, api_key: str) -> Optional[Vendor]:
        with self._lock:
            for vendor in self._vendors.values():
                if vendor.api_key == api_key:
                    return vendor
        return None


class InMemoryProductRepository(IProductRepository):
    """Process-local product storage. Contents are lost on restart."""

    def __init__(self):
        self._products: Dict[str, Product] = {}
        self._paths: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def save(self, product: Product) -> Product:
        address = (product.vendor_id, product.path)
        with self._lock:
            owner = self._paths.get(address)
            if owner is not None and owner != product.id:
                raise ProductAlreadyExistsError(product.vendor_id, product.path)
            self._paths[address] = product.id
            self._products[product.id] = product
        return product

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def find_by_vendor_id_and_path(self, vendor_id: str, path: str) -> Optional[Product]:
        with self._lock:
            product_id = self._paths.get((vendor_id, path))
            return self._products.get(product_id) if product_id else None

    def find_by_vendor_id(self, vendor_id: str) -> List[Product]:
        with self._lock:
            products = [p for p in self._products.values() if p.vendor_id == vendor_id]
        return sorted(products, key=lambda p: p.created_at)
