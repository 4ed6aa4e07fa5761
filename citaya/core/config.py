"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. CDN credentials and SECRET_KEY are validated at load
time so a misconfigured process refuses to start.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from citaya.domain.exceptions import ConfigurationException


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Required: CDN_PUBLIC_KEY, CDN_PRIVATE_KEY, CDN_URL_ENDPOINT and SECRET_KEY.
    Everything else has a default.
    """

    # App
    app_name: str = "citaya-media"
    app_version: str = "1.0.0"
    debug: bool = False
    # "production" enables the keep-alive job and the HTTP self-ping
    deployment_mode: str = "development"

    # CDN (ImageKit)
    cdn_public_key: str = ""
    cdn_private_key: SecretStr = SecretStr("")
    cdn_url_endpoint: str = ""
    cdn_upload_api_url: str = "https://upload.imagekit.io/api/v1"
    cdn_api_url: str = "https://api.imagekit.io/v1"
    cdn_timeout_seconds: float = 30.0

    # Security (bearer tokens issued by the main backend)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # Database
    database_url: str = ""
    database_echo: bool = False

    # Keep-alive
    keep_alive_enabled: bool = True
    keep_alive_interval_seconds: int = 600
    keep_alive_table: str = "super_admin"
    external_url: str | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    max_upload_size: int = 20 * 1024 * 1024  # base64 payloads inflate ~33%
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.deployment_mode.strip().lower() == "production"

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Fail fast when CDN credentials or SECRET_KEY are missing."""
        missing = [
            name
            for name, value in (
                ("CDN_PUBLIC_KEY", self.cdn_public_key),
                ("CDN_PRIVATE_KEY", self.cdn_private_key.get_secret_value()),
                ("CDN_URL_ENDPOINT", self.cdn_url_endpoint),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationException(
                f"CDN credentials not configured: {', '.join(missing)}. "
                "Set in environment or .env file.",
                missing=missing,
            )
        if not self.secret_key.get_secret_value():
            raise ConfigurationException(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32.",
                missing=["SECRET_KEY"],
            )
        if self.keep_alive_interval_seconds < 1:
            raise ConfigurationException(
                "KEEP_ALIVE_INTERVAL_SECONDS must be at least 1"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
