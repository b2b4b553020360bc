"""
Shared configuration management for the Locations service layer.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


OPENWEATHERMAP_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOCATIONS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Key-value store
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 5.0

    # Weather provider
    weather_api_url: str = OPENWEATHERMAP_CURRENT_URL
    weather_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("LOCATIONS_WEATHER_API_KEY", "WEATHER_API_KEY"),
    )
    weather_cache_ttl: int = 3600
    weather_timeout: float = 10.0


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
