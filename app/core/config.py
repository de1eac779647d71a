"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Shopify Install Callback"
    version: str = "0.1.0"

    # Shopify
    shopify_shop_domain_suffix: str = ".myshopify.com"
    shopify_token_exchange_timeout: float = 10.0

    # Error reporting
    sentry_dsn: str = ""


class AppCredentials(BaseSettings):
    """Shopify partner app credentials.

    Read from ``SHOPIFY_CLIENT_ID`` / ``SHOPIFY_CLIENT_SECRET`` each time an
    instance is created, so rotated secrets are picked up without a restart.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHOPIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str = ""
    client_secret: SecretStr = SecretStr("")

    @property
    def is_configured(self) -> bool:
        """Both values are present and non-empty."""
        return bool(self.client_id) and bool(self.client_secret.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
