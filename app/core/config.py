"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing here is required: an empty REDIS_URL disables
caching and an empty STRAPI_WEBHOOK_SECRET rejects every protected call.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "sagena-content-cache"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Locales served by the site; the first segment of every content key
    supported_locales: str = "cs,en"
    default_locale: str = "cs"

    # Strapi CMS
    strapi_url: str = "http://localhost:1337"
    strapi_api_token: SecretStr | None = None
    strapi_timeout_seconds: float = 10.0
    # Shared secret for the webhook, cache clear and debug endpoints.
    strapi_webhook_secret: SecretStr | None = None

    # Redis cache: empty URL means caching is disabled for the process lifetime.
    redis_url: str = ""
    redis_socket_timeout: float = 2.0
    redis_connect_timeout: float = 2.0
    redis_max_retries: int = 3
    redis_scan_count: int = 500

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_locales(self) -> "Settings":
        """Normalize supported_locales and require default_locale among them."""
        locales = [loc.strip().lower() for loc in self.supported_locales.split(",") if loc.strip()]
        if not locales:
            raise ValueError("SUPPORTED_LOCALES must list at least one locale (e.g. 'cs,en').")
        self.supported_locales = ",".join(locales)
        self.default_locale = self.default_locale.strip().lower()
        if self.default_locale not in locales:
            raise ValueError(
                f"DEFAULT_LOCALE {self.default_locale!r} is not in SUPPORTED_LOCALES {locales!r}"
            )
        return self

    @property
    def locales(self) -> list[str]:
        """Supported locales as a list, in configured order."""
        return self.supported_locales.split(",")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
