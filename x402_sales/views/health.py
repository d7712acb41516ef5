"""Health check endpoints."""
import logging

import redis
from flask import Blueprint, current_app, jsonify

from x402_sales.infrastructure.redis_client import RedisClientFactory

health_blueprint = Blueprint("health", __name__)
_logger = logging.getLogger(__name__)


@health_blueprint.route("/health", methods=["GET"])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        JSON response with health status
    """
    return jsonify({
        "status": "healthy",
        "service": "x402-sales-server"
    }), 200


@health_blueprint.route("/health/ready", methods=["GET"])
def readiness_check():
    """
    Readiness check endpoint (checks dependencies).

    Redis is only checked when the catalog is stored there.

    Returns:
        JSON response with readiness status
    """
    checks = {}

    if current_app.config.get("CATALOG_STORAGE_TYPE", "").lower() == "redis":
        try:
            RedisClientFactory.get_client().ping()
            checks["redis"] = True
        except (redis.RedisError, ValueError) as e:
            _logger.error(f"Redis health check failed: {e}")
            checks["redis"] = False

    checks["overall"] = all(checks.values())
    status_code = 200 if checks["overall"] else 503

    return jsonify({
        "status": "ready" if checks["overall"] else "not_ready",
        "checks": checks
    }), status_code


@health_blueprint.route("/health/live", methods=["GET"])
def liveness_check():
    """
    Liveness check endpoint (for Kubernetes).

    Returns:
        JSON response with liveness status
    """
    return jsonify({
        "status": "alive",
        "service": "x402-sales-server"
    }), 200
