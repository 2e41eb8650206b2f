"""
Unified exception hierarchy for the SendSafely action.

Provides typed exceptions with retry classification so that the retry
controller and the operation dispatcher can make consistent decisions
about SDK failures.
"""

from collections.abc import Mapping
from typing import Any

# Import ErrorCategory from canonical source to avoid duplicate enum issues
# (comparing enums from different classes always returns False)
from core.types import ErrorCategory


class NodeError(Exception):
    """
    Base exception for all action errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for retry decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return self.category == ErrorCategory.TRANSIENT

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthError(NodeError):
    """Credentials were rejected by the SendSafely API."""

    category = ErrorCategory.AUTH


# =============================================================================
# Transient Errors
# =============================================================================


class TransientError(NodeError):
    """Base class for transient/retriable errors."""

    category = ErrorCategory.TRANSIENT


# =============================================================================
# Permanent Errors (Don't Retry)
# =============================================================================


class PermanentError(NodeError):
    """Base class for permanent/non-retriable errors."""

    category = ErrorCategory.PERMANENT


class ConfigurationError(PermanentError):
    """Action is misconfigured (credentials, resource or operation)."""

    pass


class CredentialsError(ConfigurationError):
    """Credentials are missing, incomplete or unusable."""

    pass


class UnsupportedOperationError(ConfigurationError):
    """Resource or operation name is not known to the action."""

    def __init__(self, resource: str, operation: str | None = None):
        if operation is None:
            message = f'The resource "{resource}" is not supported'
        else:
            message = (
                f'The operation "{operation}" is not supported for resource "{resource}"'
            )
        super().__init__(message, context={"resource": resource, "operation": operation})
        self.resource = resource
        self.operation = operation


class ValidationError(PermanentError):
    """A parameter value failed validation before reaching the SDK."""

    pass


# =============================================================================
# SDK Errors
# =============================================================================


class SdkError(NodeError):
    """
    Error reported by the SendSafely SDK or API.

    The category is derived from the HTTP status when one is known, falling
    back to message inspection.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, cause, context)
        self.status_code = status_code

    @property
    def category(self) -> ErrorCategory:  # type: ignore[override]
        if self.status_code is not None:
            return classify_http_status(self.status_code)
        if is_rate_limit_message(self.message):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.UNKNOWN


class SdkProtocolError(SdkError):
    """SDK callback fired with neither an error nor a result."""

    pass


class RetryExhaustedError(NodeError):
    """Retries ran out without capturing an error to re-raise."""

    pass


class NodeOperationError(NodeError):
    """
    Error raised by the dispatcher, attributed to one input item.

    The message is already sanitized; the original exception is chained via
    ``raise ... from`` rather than rendered into the message.
    """

    def __init__(
        self,
        message: str,
        item_index: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
    ):
        super().__init__(message, context={"item_index": item_index})
        self.item_index = item_index
        self.category = category

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Error Classification Utilities
# =============================================================================

RATE_LIMIT_MARKERS = ("rate limit", "too many requests")

# Attribute names SDKs and HTTP libraries use for the response status
STATUS_ATTRIBUTES = ("status_code", "statusCode", "status")


def get_status_code(error: Any) -> int | None:
    """Return the HTTP status carried by an error object or mapping, if any."""
    for name in STATUS_ATTRIBUTES:
        if isinstance(error, Mapping):
            value = error.get(name)
        else:
            value = getattr(error, name, None)
        if value is None or isinstance(value, bool):
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def is_rate_limit_message(message: str | None) -> bool:
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def is_rate_limit_error(exc: BaseException) -> bool:
    """429 status, or a message mentioning rate limiting."""
    if get_status_code(exc) == 429:
        return True
    message = exc.message if isinstance(exc, NodeError) else str(exc)
    return is_rate_limit_message(message)


def is_server_error(exc: BaseException) -> bool:
    status = get_status_code(exc)
    return status is not None and 500 <= status < 600


def is_retryable_error(exc: BaseException) -> bool:
    """
    Check if an SDK failure should be retried.

    Only rate limiting (429 or rate-limit wording) and server errors (5xx)
    are retried. Everything else, including permanent action errors,
    propagates on the first failure.
    """
    if isinstance(exc, PermanentError):
        return False
    return is_rate_limit_error(exc) or is_server_error(exc)


def classify_http_status(status_code: int) -> ErrorCategory:
    """Classify HTTP status code into error category."""
    if 200 <= status_code < 300:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code == 401:
        return ErrorCategory.AUTH

    if status_code == 429:
        return ErrorCategory.TRANSIENT  # Rate limited

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT  # Client errors, won't fix with retry

    if 500 <= status_code < 600:
        return ErrorCategory.TRANSIENT  # Server errors, may recover

    return ErrorCategory.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCategory:
    """Classify an exception into error category."""
    if isinstance(exc, NodeError):
        return exc.category

    status = get_status_code(exc)
    if status is not None:
        return classify_http_status(status)

    if is_rate_limit_error(exc):
        return ErrorCategory.TRANSIENT

    return ErrorCategory.UNKNOWN


class SdkErrorClassifier:
    """ErrorClassifier implementation for SendSafely SDK failures."""

    def classify_error(self, error: Exception) -> ErrorCategory:
        return classify_exception(error)

    def is_transient(self, error: Exception) -> bool:
        return is_retryable_error(error)
