"""
Unified error handling for promboard.

Every failure surfaced by the query broker and the dashboard synthesizer
is one of the exceptions below. Each carries a ``details`` mapping with the
operation context (query text, time window, board identity) so callers and
logs can tell which request failed.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Provider error (backend unreachable, discovery or query failure)
- 12: Validation error (template render or board parse failure)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class PromboardError(Exception):
    """Base exception for promboard errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return format_error_message(self)


class ConfigurationError(PromboardError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class ProviderError(PromboardError):
    """Raised when the metrics backend or the query proxy fails."""

    exit_code = ExitCode.PROVIDER_ERROR


class ConnectivityError(ProviderError):
    """Backend unreachable, or the configuration probe failed."""


class DiscoveryError(ProviderError):
    """The series/label query used for instance discovery failed."""


class QueryError(ProviderError):
    """An instant or range query failed, direct or proxied."""


class ValidationError(PromboardError):
    """Raised for validation failures."""

    exit_code = ExitCode.VALIDATION_ERROR


class RenderError(ValidationError):
    """The dashboard template failed to compile or execute."""


class ParseError(ValidationError):
    """A dashboard document is malformed or fails schema validation."""


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI entry points that converts exceptions to exit codes.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - PromboardError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except PromboardError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: PromboardError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
