"""
Shared configuration management for the Character Cache Proxy.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="CHARACTERS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    log_format: str = Field(default="json")

    # Redis
    redis_url: str = Field(default="redis://127.0.0.1:6379/0")
    redis_socket_timeout: float = Field(default=5.0, gt=0)

    # Upstream character API
    upstream_base_url: str = Field(default="https://rickandmortyapi.com/api")
    upstream_timeout: float = Field(default=10.0, gt=0)

    # Cache TTLs (seconds)
    ttl_all: int = Field(default=10, gt=0)
    ttl_by_id: int = Field(default=15, gt=0)
    ttl_search: int = Field(default=30, gt=0)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str, **overrides) -> ServiceConfig:
    """Get configuration for a specific service.

    Explicit keyword overrides take precedence over ``CHARACTERS_*``
    environment variables and the ``.env`` file.
    """
    return ServiceConfig(service_name=service_name, **overrides)
