"""Error handling middleware with Sentry integration."""
import logging

import sentry_sdk
from flask import jsonify
from sentry_sdk.integrations.flask import FlaskIntegration

from x402_sales.domain.exceptions import FacilitatorTimeoutError, PaymentGatewayError

logger = logging.getLogger(__name__)


def init_error_handlers(app) -> None:
    """
    Initialize error handlers for the application.

    Args:
        app: Flask application instance
    """
    sentry_dsn = app.config.get("SENTRY_DSN")
    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get("FLASK_ENV", "production"),
        )
        logger.info("Sentry error tracking initialized")

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"status": "error", "message": "Resource not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({"status": "error", "message": "Internal server error"}), 500

    @app.errorhandler(429)
    def rate_limit_error(error):
        """Handle rate limit errors."""
        return jsonify({
            "status": "error",
            "message": "Rate limit exceeded. Please try again later."
        }), 429

    @app.errorhandler(FacilitatorTimeoutError)
    def facilitator_timeout(error):
        """Handle facilitator deadline overruns."""
        logger.error(f"Facilitator timeout: {error}")
        return jsonify({"status": "error", "message": "Payment facilitator timed out"}), 504

    @app.errorhandler(PaymentGatewayError)
    def payment_backend_error(error):
        """Handle payment backend faults."""
        logger.error(f"Payment backend error: {error}", exc_info=True)
        return jsonify({"status": "error", "message": "Payment backend error"}), 500
