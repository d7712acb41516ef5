"""Redis-backed product repository (Repository Pattern)."""
import json
import logging
from typing import List, Optional
import redis

from x402_sales.domain.entities.product import Product
from x402_sales.domain.exceptions import ProductAlreadyExistsError
from x402_sales.domain.interfaces.product_repository import IProductRepository
from x402_sales.infrastructure.redis_client import RedisClientFactory
from x402_sales.infrastructure.repositories.records import product_from_record, product_to_record


class RedisProductRepository(IProductRepository):
    """
    Stores products as JSON documents in Redis.

    Keys:
        product:<id>                      -> product JSON
        product_path:<vendor_id>:<path>   -> product id (claimed with SET NX)
        vendor_products:<vendor_id>       -> set of product ids
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None):
        """
        Initialize the product repository.

        Args:
            redis_client: Redis client instance (Dependency Injection)
        """
        self.redis = redis_client or RedisClientFactory.get_client()
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def _product_key(product_id: str) -> str:
        return f"product:{product_id}"

    @staticmethod
    def _path_key(vendor_id: str, path: str) -> str:
        return f"product_path:{vendor_id}:{path}"

    @staticmethod
    def _vendor_products_key(vendor_id: str) -> str:
        return f"vendor_products:{vendor_id}"

    def save(self, product: Product) -> Product:
        """
        Store a product, claiming its (vendor_id, path) slot atomically.

        Raises:
            ProductAlreadyExistsError: If a different product owns the path
            redis.RedisError: On storage failure
        """
        path_key = self._path_key(product.vendor_id, product.path)
        try:
            claimed = self.redis.set(path_key, product.id, nx=True)
            if not claimed and self.redis.get(path_key) != product.id:
                raise ProductAlreadyExistsError(product.vendor_id, product.path)

            pipe = self.redis.pipeline()
            pipe.set(self._product_key(product.id), json.dumps(product_to_record(product)))
            pipe.sadd(self._vendor_products_key(product.vendor_id), product.id)
            pipe.execute()
            self._logger.debug(f"Product {product.id} stored at {product.vendor_id}/{product.path}")
            return product
        except redis.RedisError as e:
            self._logger.error(f"Failed to store product {product.id}: {e}")
            raise

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Retrieve a product by id."""
        try:
            data = self.redis.get(self._product_key(product_id))
        except redis.RedisError as e:
            self._logger.error(f"Failed to get product {product_id}: {e}")
            raise

        if data is None:
            return None
        return product_from_record(json.loads(data))

    def find_by_vendor_id_and_path(self, vendor_id: str, path: str) -> Optional[Product]:
        """Retrieve a product by its (vendor_id, path) address."""
        try:
            product_id = self.redis.get(self._path_key(vendor_id, path))
        except redis.RedisError as e:
            self._logger.error(f"Failed to resolve product {vendor_id}/{path}: {e}")
            raise

        if product_id is None:
            return None
        return self.find_by_id(product_id)

    def find_by_vendor_id(self, vendor_id: str) -> List[Product]:
        """List a vendor's products, oldest first."""
        try:
            product_ids = sorted(self.redis.smembers(self._vendor_products_key(vendor_id)))
            if not product_ids:
                return []
            documents = self.redis.mget([self._product_key(pid) for pid in product_ids])
        except redis.RedisError as e:
            self._logger.error(f"Failed to list products for vendor {vendor_id}: {e}")
            raise

        products = [product_from_record(json.loads(doc)) for doc in documents if doc]
        return sorted(products, key=lambda p: p.created_at)
