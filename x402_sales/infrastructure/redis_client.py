"""Redis client factory shared by the catalog and the settlement guard."""
import logging
import time
from typing import Optional
import redis
from redis.connection import ConnectionPool

from x402_sales.config.settings import Config


logger = logging.getLogger(__name__)


class RedisClientFactory:
    """Factory for creating Redis clients with connection pooling."""

    _pool: Optional[ConnectionPool] = None
    _client: Optional[redis.Redis] = None

    @classmethod
    def create_pool(cls, url: str, max_connections: int = 50) -> ConnectionPool:
        """
        Create Redis connection pool.

        Args:
            url: Redis connection URL
            max_connections: Maximum number of connections in pool

        Returns:
            ConnectionPool instance
        """
        if cls._pool is None:
            logger.debug(f"Creating Redis connection pool: {cls.mask_url(url)}")
            cls._pool = ConnectionPool.from_url(
                url,
                max_connections=max_connections,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
        return cls._pool

    @staticmethod
    def mask_url(url: str) -> str:
        """Mask the password in a Redis URL for logging."""
        if '@' in url:
            auth_part, host_part = url.rsplit('@', 1)
            if ':' in auth_part.split('://', 1)[-1]:
                scheme_user = auth_part.rsplit(':', 1)[0]
                return f"{scheme_user}:***@{host_part}"
        return url

    @classmethod
    def get_client(cls, url: Optional[str] = None) -> redis.Redis:
        """
        Get the shared Redis client, connecting on first use.

        Args:
            url: Optional Redis URL (uses Config if not provided)

        Returns:
            Redis client instance

        Raises:
            ValueError: If the URL is missing or has an unsupported scheme
            redis.RedisError: If Redis cannot be reached
        """
        if cls._client is None:
            redis_url = url or Config.REDIS_URL

            if not redis_url:
                raise ValueError("REDIS_URL not configured")
            if not redis_url.startswith(('redis://', 'rediss://', 'unix://')):
                raise ValueError("REDIS_URL must start with redis://, rediss:// or unix://")

            logger.info(f"Connecting to Redis at {cls.mask_url(redis_url)}")
            client = redis.Redis(connection_pool=cls.create_pool(redis_url))

            max_retries = 3
            for attempt in range(max_retries):
                try:
                    client.ping()
                    logger.info("Redis connection established successfully")
                    break
                except redis.ConnectionError:
                    if attempt < max_retries - 1:
                        logger.debug(f"Redis ping failed (attempt {attempt + 1}/{max_retries}), retrying...")
                        time.sleep(1)
                    else:
                        cls.close()
                        raise

            cls._client = client

        return cls._client

    @classmethod
    def close(cls) -> None:
        """Close Redis connections."""
        if cls._client:
            cls._client.close()
            cls._client = None
        if cls._pool:
            cls._pool.disconnect()
            cls._pool = None
