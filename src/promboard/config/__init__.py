"""Configuration for promboard."""

from promboard.config.settings import ProxyMode, Settings, get_settings

__all__ = ["ProxyMode", "Settings", "get_settings"]
