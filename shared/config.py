"""
Shared configuration management for the card records service.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="CARDS_ENV")
    log_level: str = Field(default="info", validation_alias="CARDS_LOG_LEVEL")

    # Cache
    cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        validation_alias="CARDS_CACHE_TTL_SECONDS",
    )

    # Upstream table store
    upstream_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias="CARDS_UPSTREAM_TIMEOUT_SECONDS",
    )
    airtable_api_url: str = Field(
        default="https://api.airtable.com/v0",
        validation_alias="AIRTABLE_API_URL",
    )
    airtable_base_name: str = Field(default="", validation_alias="AIRTABLE_BASE_NAME")
    airtable_table_name: str = Field(
        default="Cards",
        validation_alias="AIRTABLE_TABLE_NAME",
    )
    airtable_table_name_weekly: str = Field(
        default="Weekly",
        validation_alias="AIRTABLE_TABLE_NAME_WEEKLY",
    )
    airtable_token: Optional[str] = Field(default=None, validation_alias="AIRTABLE_TOKEN")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
