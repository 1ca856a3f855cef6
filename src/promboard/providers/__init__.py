"""Backend-facing clients."""

from promboard.providers.base import Provider, ProviderHealth
from promboard.providers.prometheus import (
    DISCOVERY_LOOKBACK,
    HEARTBEAT_SELECTOR,
    PrometheusClient,
)
from promboard.providers.proxy import ProxyQueryClient

__all__ = [
    "Provider",
    "ProviderHealth",
    "PrometheusClient",
    "ProxyQueryClient",
    "HEARTBEAT_SELECTOR",
    "DISCOVERY_LOOKBACK",
]
