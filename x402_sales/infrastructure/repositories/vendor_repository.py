"""Redis-backed vendor repository (Repository Pattern)."""
import json
import logging
from typing import Optional
import redis

from x402_sales.domain.entities.vendor import Vendor
from x402_sales.domain.interfaces.vendor_repository import IVendorRepository
from x402_sales.infrastructure.redis_client import RedisClientFactory
from x402_sales.infrastructure.repositories.records import vendor_from_record, vendor_to_record


class RedisVendorRepository(IVendorRepository):
    """
    Stores vendors as JSON documents in Redis.

    Keys:
        vendor:<id>               -> vendor JSON
        vendor_api_key:<api_key>  -> vendor id
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None):
        """
        Initialize the vendor repository.

        Args:
            redis_client: Redis client instance (Dependency Injection)
        """
        self.redis = redis_client or RedisClientFactory.get_client()
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def _vendor_key(vendor_id: str) -> str:
        return f"vendor:{vendor_id}"

    @staticmethod
    def _api_key_key(api_key: str) -> str:
        return f"vendor_api_key:{api_key}"

    def save(self, vendor: Vendor) -> Vendor:
        """Store vendor document and its API key index."""
        try:
            pipe = self.redis.pipeline()
            pipe.set(self._vendor_key(vendor.id), json.dumps(vendor_to_record(vendor)))
            pipe.set(self._api_key_key(vendor.api_key), vendor.id)
            pipe.execute()
            self._logger.debug(f"Vendor {vendor.id} stored")
            return vendor
        except redis.RedisError as e:
            self._logger.error(f"Failed to store vendor {vendor.id}: {e}")
            raise

    def find_by_id(self, vendor_id: str) -> Optional[Vendor]:
        """Retrieve a vendor by id."""
        try:
            data = self.redis.get(self._vendor_key(vendor_id))
        except redis.RedisError as e:
            self._logger.error(f"Failed to get vendor {vendor_id}: {e}")
            raise

        if data is None:
            return None
        return vendor_from_record(json.loads(data))

    def find_by_api_key(self, api_key: str) -> Optional[Vendor]:
        """Retrieve a vendor by API key."""
        try:
            vendor_id = self.redis.get(self._api_key_key(api_key))
        except redis.RedisError as e:
            self._logger.error(f"Failed to resolve vendor API key: {e}")
            raise

        if vendor_id is None:
            return None
        return self.find_by_id(vendor_id)
