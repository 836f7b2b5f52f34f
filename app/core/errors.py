"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep the envelope flexible while encouraging
    consistent shapes across the codebase.
    """

    hint: str
    missing_fields: list[str]
    field: str
    max_chars: int
    actual_chars: int
    http_status: int
    retry_after: int
    limit: int
    provider: str
    model: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request payload validation fails."""


class ConfigurationAppError(AppError):
    """Raised when server-side configuration is missing or invalid."""


class LLMAppError(AppError):
    """Raised when LLM provider/client operations fail."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when a caller exceeds its request quota.

    Attributes:
        headers: Optional throttling headers (Retry-After, X-RateLimit-*).
    """

    headers: dict[str, str] | None = None
