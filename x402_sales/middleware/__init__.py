"""Middleware module for rate limiting, monitoring, and error handling."""
from x402_sales.middleware.rate_limiter import create_rate_limiter
from x402_sales.middleware.monitoring import register_metrics_middleware
from x402_sales.middleware.error_handler import init_error_handlers

__all__ = [
    "create_rate_limiter",
    "register_metrics_middleware",
    "init_error_handlers",
]
