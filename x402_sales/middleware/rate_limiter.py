"""Rate limiting middleware using Flask-Limiter."""
import logging

from flask import request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from x402_sales.infrastructure.redis_client import RedisClientFactory

logger = logging.getLogger(__name__)

DEFAULT_LIMITS = ["1000 per hour", "100 per minute"]


def get_limiter_key() -> str:
    """
    Get rate limit key based on the vendor API key or IP address.

    Returns:
        String key for rate limiting
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"rate_limit:key:{api_key}"

    # Fallback to IP address
    return get_remote_address()


def create_rate_limiter(app) -> Limiter:
    """
    Create and configure Flask-Limiter instance.

    Args:
        app: Flask application instance

    Returns:
        Configured Limiter instance
    """
    if not app.config.get("RATELIMIT_ENABLED"):
        return Limiter(
            get_limiter_key,
            app=app,
            default_limits=[],
            storage_uri="memory://",
            enabled=False
        )

    storage_url = app.config.get("RATELIMIT_STORAGE_URL") or "memory://"
    logger.info(f"Rate limiting enabled with storage {RedisClientFactory.mask_url(storage_url)}")

    return Limiter(
        get_limiter_key,
        app=app,
        default_limits=DEFAULT_LIMITS,
        storage_uri=storage_url,
        strategy="fixed-window",
        headers_enabled=True
    )
