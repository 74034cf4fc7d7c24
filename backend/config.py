"""
Configuration management for the Storefront Checkout server.

Loads settings from .env via pydantic-settings.

Notes:
    - The merchant secret key is only ever sent upstream, never logged
    - validate_production_settings() enforces live credentials and strict CORS
    - Webhook signature verification is opt-in (VERIFY_WEBHOOK_SIGNATURES)
"""
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Merchant API (payment processor) ────────────────────────────
    merchant_api_url: str = "https://sandbox-merchant.revolut.com/api/orders"
    merchant_api_secret_key: str = ""
    merchant_api_public_key: str = ""
    merchant_api_version: str = "2025-12-04"
    merchant_api_timeout_seconds: float = 15.0

    # ── Checkout widget ─────────────────────────────────────────────
    checkout_mode: str = "sandbox"   # sandbox or prod
    checkout_locale: str = "en"

    # ── Webhooks ────────────────────────────────────────────────────
    verify_webhook_signatures: bool = False
    webhook_signing_secret: str = ""
    webhook_timestamp_tolerance_seconds: int = 300  # 0 disables the check

    # ── Rate limiting ───────────────────────────────────────────────
    create_order_rate_limit: int = 30
    create_order_rate_window_seconds: int = 60

    # ── Application ─────────────────────────────────────────────────
    environment: str = "development"
    port: int = 3000

    # ── CORS ────────────────────────────────────────────────────────
    cors_origins: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def merchant_configured(self) -> bool:
        """True when the processor URL and both keys are present."""
        return bool(
            self.merchant_api_url
            and self.merchant_api_secret_key
            and self.merchant_api_public_key
        )

    def validate_production_settings(self):
        """
        Validate settings for production safety.

        Called during app startup. Raises in production, warns elsewhere.
        """
        if self.environment == "production":
            if not self.merchant_configured:
                raise ValueError(
                    "MERCHANT_API_URL, MERCHANT_API_SECRET_KEY and "
                    "MERCHANT_API_PUBLIC_KEY must be set in production."
                )
            if "*" in self.cors_origins:
                raise ValueError(
                    "CORS_ORIGINS must not contain '*' in production. "
                    "Set explicit allowed origins."
                )
            if self.checkout_mode != "prod":
                raise ValueError(
                    "CHECKOUT_MODE must be 'prod' in production. "
                    "Sandbox tokens cannot be used with live keys."
                )
            if self.verify_webhook_signatures and not self.webhook_signing_secret:
                raise ValueError(
                    "WEBHOOK_SIGNING_SECRET must be set when "
                    "VERIFY_WEBHOOK_SIGNATURES is enabled."
                )
            logger.info("✅ Production settings validated")
        else:
            warnings = []
            if not self.merchant_configured:
                warnings.append("Merchant API credentials missing (create-order will fail)")
            if not self.verify_webhook_signatures:
                warnings.append("VERIFY_WEBHOOK_SIGNATURES=false (webhooks accepted unsigned)")
            if "*" in self.cors_origins:
                warnings.append("CORS_ORIGINS contains '*' (open access)")
            for w in warnings:
                logger.warning(f"⚠️  {w}")


# Global settings instance
settings = Settings()
