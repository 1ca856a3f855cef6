"""Core modules for promboard - centralized error definitions."""

from promboard.core.errors import (
    ConfigurationError,
    ConnectivityError,
    DiscoveryError,
    ExitCode,
    ParseError,
    PromboardError,
    ProviderError,
    QueryError,
    RenderError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "PromboardError",
    "ConfigurationError",
    "ProviderError",
    "ConnectivityError",
    "DiscoveryError",
    "QueryError",
    "ValidationError",
    "RenderError",
    "ParseError",
    "main_with_error_handling",
    "format_error_message",
]
