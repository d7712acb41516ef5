"""Monitoring and metrics middleware using Prometheus."""
import logging
import time
from functools import wraps
from typing import Callable

from flask import request
from prometheus_client import Counter, Histogram, make_wsgi_app
from werkzeug.middleware.dispatcher import DispatcherMiddleware

from x402_sales.config.settings import Config

logger = logging.getLogger(__name__)

# Prometheus metrics
payment_requests_total = Counter(
    'x402_payment_requests_total',
    'Total number of paywalled requests by outcome',
    ['outcome']
)

payment_request_duration = Histogram(
    'x402_payment_request_duration_seconds',
    'Time spent processing paywalled requests (including facilitator calls)',
    buckets=[0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0]
)

facilitator_calls_total = Counter(
    'x402_facilitator_calls_total',
    'Total number of x402 facilitator calls',
    ['operation', 'status']
)

http_requests_total = Counter(
    'x402_http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status']
)


def register_metrics_middleware(app) -> None:
    """
    Expose Prometheus metrics at /metrics.

    Args:
        app: Flask application instance
    """
    if not app.config.get("ENABLE_METRICS"):
        return

    app.wsgi_app = DispatcherMiddleware(app.wsgi_app, {
        '/metrics': make_wsgi_app()
    })

    logger.info("Prometheus metrics enabled at /metrics")


def _status_of(response) -> int:
    if isinstance(response, tuple):
        return response[1]
    return getattr(response, "status_code", 200)


def track_request(endpoint: str):
    """
    Decorator to track HTTP request metrics.

    Args:
        endpoint: Endpoint name for metrics
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                response = f(*args, **kwargs)
            except Exception:
                _count_request(endpoint, 500)
                raise
            _count_request(endpoint, _status_of(response))
            return response
        return wrapper
    return decorator


def _count_request(endpoint: str, status: int) -> None:
    try:
        if Config.ENABLE_METRICS:
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status=status
            ).inc()
    except Exception as e:
        # Don't fail if metrics tracking fails
        logger.debug(f"Failed to track request metrics: {e}")


def track_payment_outcome(kind: str, started_at: float) -> None:
    """
    Track the outcome of a paywalled request.

    Args:
        kind: Outcome kind (e.g. 'payment_required', 'success')
        started_at: time.monotonic() value taken when processing began
    """
    try:
        if Config.ENABLE_METRICS:
            payment_requests_total.labels(outcome=kind).inc()
            payment_request_duration.observe(time.monotonic() - started_at)
    except Exception as e:
        # Don't fail if metrics tracking fails
        logger.debug(f"Failed to track payment outcome metrics: {e}")


def track_facilitator_call(operation: str, success: bool) -> None:
    """
    Track facilitator call metrics.

    Args:
        operation: Operation name ('supported', 'verify', 'settle')
        success: Whether the call succeeded with a positive verdict
    """
    try:
        if Config.ENABLE_METRICS:
            status = "success" if success else "error"
            facilitator_calls_total.labels(operation=operation, status=status).inc()
    except Exception as e:
        # Don't fail if metrics tracking fails
        logger.debug(f"Failed to track facilitator call metrics: {e}")
