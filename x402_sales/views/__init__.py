"""Views module - exports all blueprints."""
from x402_sales.views.admin import admin_blueprint
from x402_sales.views.health import health_blueprint
from x402_sales.views.paywall import paywall_blueprint

__all__ = ["admin_blueprint", "health_blueprint", "paywall_blueprint"]
