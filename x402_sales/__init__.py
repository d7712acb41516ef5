"""Flask application factory with dependency injection."""
import logging
import sys
from typing import Optional, Type

import redis
from flask import Flask, jsonify

from x402_sales.config.settings import Config, get_config
from x402_sales.infrastructure.redis_client import RedisClientFactory
from x402_sales.infrastructure.service_container import ServiceContainer
from x402_sales.middleware.error_handler import init_error_handlers
from x402_sales.middleware.monitoring import register_metrics_middleware
from x402_sales.middleware.rate_limiter import create_rate_limiter
from x402_sales.views import admin_blueprint, health_blueprint, paywall_blueprint


def create_app(
    config_class: Optional[Type[Config]] = None,
    container: Optional[ServiceContainer] = None
) -> Flask:
    """
    Create and configure Flask application with dependency injection.

    Implements Factory Pattern and Dependency Injection.

    Args:
        config_class: Optional configuration class (for testing)
        container: Optional pre-built service container (for testing)

    Returns:
        Configured Flask application

    Raises:
        PaymentGatewayError: If the payment facilitator cannot be initialized
    """
    config = config_class or get_config()

    # Configure logging FIRST (needed for all subsequent operations)
    _configure_logging(config)
    _logger = logging.getLogger(__name__)

    app = Flask(__name__)
    app.config.from_object(config)

    try:
        config.validate()
    except ValueError as e:
        _logger.warning(f"Configuration validation warning: {e}")

    app.register_blueprint(health_blueprint)
    app.register_blueprint(admin_blueprint)
    app.register_blueprint(paywall_blueprint)

    @app.route("/", methods=["GET"])
    def root():
        """Root endpoint."""
        return jsonify({
            "status": "ok",
            "service": "x402-sales-server",
            "message": "Service is running"
        }), 200

    _initialize_infrastructure(config)
    _initialize_middleware(app)

    with app.app_context():
        _initialize_services(app, config, container)

    _logger.info(f"App routes registered: {[str(rule) for rule in app.url_map.iter_rules()]}")
    _logger.info("=== Flask app factory completed successfully ===")
    return app


def _configure_logging(config: Type[Config]) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True
    )


def _initialize_infrastructure(config: Type[Config]) -> None:
    """
    Connect to Redis when the catalog is stored there.

    A failed connection is logged; the readiness probe reports it.
    """
    if config.CATALOG_STORAGE_TYPE.lower() != "redis":
        logging.info(f"Catalog storage is {config.CATALOG_STORAGE_TYPE}; skipping Redis")
        return

    try:
        RedisClientFactory.get_client(config.REDIS_URL)
        logging.info("Infrastructure initialized successfully with Redis")
    except (redis.RedisError, ValueError) as e:
        logging.warning(f"Failed to initialize Redis: {e}")


def _initialize_middleware(app: Flask) -> None:
    """
    Initialize middleware (rate limiting, monitoring, error handling).

    Args:
        app: Flask application instance
    """
    app.config['limiter'] = create_rate_limiter(app)
    register_metrics_middleware(app)
    init_error_handlers(app)


def _initialize_services(
    app: Flask,
    config: Type[Config],
    container: Optional[ServiceContainer]
) -> None:
    """
    Build the service container and initialize the payment gateway.

    Gateway initialization is fatal: without a facilitator no payment can
    be verified or settled.
    """
    container = container or ServiceContainer(config=config)
    app.config['service_container'] = container

    try:
        container.get_payment_gateway().initialize()
    except Exception as e:
        logging.critical(f"Payment gateway initialization failed: {e}", exc_info=True)
        raise

    logging.info("Services initialized successfully")
