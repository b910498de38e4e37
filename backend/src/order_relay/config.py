"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.

The settings object is built once at startup and handed to ``create_app``;
nothing else in the relay reads the process environment.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""
    pass


class Settings(BaseSettings):
    """Relay settings loaded from environment variables.

    Environment Variables:
        INBOUND_API_KEY: Shared secret callers must present (X-Api-Key or Bearer)
        SHOPIFY_SHOP_DOMAIN: Shop domain, e.g. example.myshopify.com
        SHOPIFY_CLIENT_ID: App client id used for the token exchange
        SHOPIFY_CLIENT_SECRET: App client secret used for the token exchange
        SHOPIFY_API_VERSION: Admin API version (default 2025-10)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default true)
        CORS_ORIGINS: Comma-separated allowed origins (default *)
        MAX_BODY_BYTES: Largest accepted request body (default 2 MB)
    """

    # Inbound authentication
    INBOUND_API_KEY: Optional[str] = None

    # Shopify app credentials
    SHOPIFY_SHOP_DOMAIN: Optional[str] = None
    SHOPIFY_CLIENT_ID: Optional[str] = None
    SHOPIFY_CLIENT_SECRET: Optional[str] = None
    SHOPIFY_API_VERSION: str = "2025-10"

    # Field mapping
    DEFAULT_COUNTRY: str = "US"

    # Application
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "*"
    MAX_BODY_BYTES: int = 2 * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def missing_required(self) -> List[str]:
        """Names of required variables that are unset or blank."""
        required = {
            "INBOUND_API_KEY": self.INBOUND_API_KEY,
            "SHOPIFY_SHOP_DOMAIN": self.SHOPIFY_SHOP_DOMAIN,
            "SHOPIFY_CLIENT_ID": self.SHOPIFY_CLIENT_ID,
            "SHOPIFY_CLIENT_SECRET": self.SHOPIFY_CLIENT_SECRET,
        }
        return [name for name, value in required.items() if not value or not value.strip()]

    def require_complete(self) -> "Settings":
        """Refuse to run with an incomplete configuration.

        Raises:
            ConfigurationError: Listing every missing variable
        """
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        return self


def get_settings() -> Settings:
    """Load settings from the environment and validate them."""
    return Settings().require_complete()
