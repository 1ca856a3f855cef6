"""
Application settings using Pydantic.

Provides environment-based configuration loading with PROMBOARD_ prefix.
"""

from enum import Enum
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxyMode(str, Enum):
    """How pass-through queries reach the backend."""

    PROMETHEUS = "prometheus"  # proxy_url is a Prometheus-compatible API
    GRAFANA = "grafana"  # proxy_url is Grafana, queries go via the datasource proxy


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMBOARD_",
    )

    # Prometheus
    prometheus_url: str = "http://localhost:9090"

    # Query proxy (defaults to prometheus_url)
    proxy_url: str | None = None
    proxy_mode: ProxyMode = ProxyMode.PROMETHEUS

    # Grafana datasource proxy
    grafana_api_key: str | None = None
    grafana_datasource_id: int = 1

    # HTTP client settings
    http_timeout: float = 30.0

    # Probe /api/v1/status/config when building a client
    validate_on_connect: bool = True

    # Logging
    log_level: str = "INFO"

    @field_validator("prometheus_url", "proxy_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        return value.rstrip("/") if value else value

    @property
    def effective_proxy_url(self) -> str:
        return self.proxy_url or self.prometheus_url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
