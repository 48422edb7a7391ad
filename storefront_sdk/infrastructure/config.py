"""SDK configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SDKSettings(BaseSettings):
    """Storefront SDK settings loaded from ``STOREFRONT_*`` environment variables."""

    store_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the store's frontend API",
    )
    public_key: str = Field(
        default="",
        description="Public API key used to authenticate storefront requests",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    session_header: str = Field(
        default="X-Session",
        description="Header carrying the shopping session token",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
