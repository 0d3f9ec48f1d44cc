"""
Shared configuration management for the MusicKit token service.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="MUSICKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # HTTP binding
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8020)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str, port: Optional[int] = None) -> ServiceConfig:
    """Get configuration for a specific service.

    An explicit ``port`` wins over ``MUSICKIT_PORT``.
    """
    if port is None:
        return ServiceConfig(service_name=service_name)
    return ServiceConfig(service_name=service_name, port=port)
