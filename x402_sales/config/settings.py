"""Application configuration with environment-based settings."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Base configuration class following Single Responsibility Principle."""

    # Load environment variables
    load_dotenv()

    # x402 Facilitator Configuration
    FACILITATOR_URL: str = os.getenv("FACILITATOR_URL", "https://x402.org/facilitator")
    FACILITATOR_TIMEOUT: int = int(os.getenv("FACILITATOR_TIMEOUT", "30"))
    PAYMENT_MAX_TIMEOUT_SECONDS: int = int(os.getenv("PAYMENT_MAX_TIMEOUT_SECONDS", "60"))
    DEFAULT_NETWORK: str = os.getenv("DEFAULT_NETWORK", "eip155:84532")
    # Comma-separated CAIP-2 networks to sell on; empty means every network the facilitator offers
    PAYMENT_NETWORKS: list = [n.strip() for n in os.getenv("PAYMENT_NETWORKS", "").split(",") if n.strip()]
    SETTLEMENT_GUARD_TTL: int = int(os.getenv("SETTLEMENT_GUARD_TTL", "3600"))  # 1 hour default

    # Catalog storage ("redis" or "memory")
    CATALOG_STORAGE_TYPE: str = os.getenv("CATALOG_STORAGE_TYPE", "redis")

    # Redis Configuration
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Admin API
    ADMIN_API_KEY: Optional[str] = os.getenv("ADMIN_API_KEY")

    # Rate Limiting
    RATELIMIT_STORAGE_URL: str = os.getenv("RATELIMIT_STORAGE_URL", "redis://localhost:6379/2")
    RATELIMIT_ENABLED: bool = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"

    # Monitoring
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    TESTING: bool = False
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    PORT: int = int(os.getenv("PORT", "3000"))

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        problems = []
        if not cls.FACILITATOR_URL:
            problems.append("FACILITATOR_URL is required")
        elif not cls.FACILITATOR_URL.startswith(("http://", "https://")):
            problems.append("FACILITATOR_URL must be an http(s) URL")
        if cls.CATALOG_STORAGE_TYPE.lower() not in ("redis", "memory"):
            problems.append(f"Unsupported CATALOG_STORAGE_TYPE: {cls.CATALOG_STORAGE_TYPE}")
        if cls.PAYMENT_MAX_TIMEOUT_SECONDS <= 0:
            problems.append("PAYMENT_MAX_TIMEOUT_SECONDS must be positive")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    CATALOG_STORAGE_TYPE = "memory"
    REDIS_URL = "redis://localhost:6379/15"  # Use different DB for tests
    FACILITATOR_URL = "http://facilitator.test"
    ADMIN_API_KEY = None
    RATELIMIT_ENABLED = False
    ENABLE_METRICS = False
    SENTRY_DSN = None


def get_config() -> type[Config]:
    """Factory method to get configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
