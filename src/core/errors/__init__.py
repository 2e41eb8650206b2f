"""
Error classification and exception hierarchy.

Provides:
- ErrorCategory enum for classifying errors
- NodeError hierarchy for typed exceptions
- Classification utilities used by the retry controller
"""

from core.errors.exceptions import (
    AuthError,
    ConfigurationError,
    CredentialsError,
    # Enums
    ErrorCategory,
    # Base classes
    NodeError,
    NodeOperationError,
    PermanentError,
    RetryExhaustedError,
    # SDK errors
    SdkError,
    SdkErrorClassifier,
    SdkProtocolError,
    TransientError,
    UnsupportedOperationError,
    ValidationError,
    # Classification utilities
    classify_exception,
    classify_http_status,
    get_status_code,
    is_rate_limit_error,
    is_retryable_error,
    is_server_error,
)

__all__ = [
    # Enums
    "ErrorCategory",
    # Base classes
    "NodeError",
    "AuthError",
    "TransientError",
    "PermanentError",
    "ConfigurationError",
    "CredentialsError",
    "UnsupportedOperationError",
    "ValidationError",
    "NodeOperationError",
    "RetryExhaustedError",
    # SDK errors
    "SdkError",
    "SdkProtocolError",
    "SdkErrorClassifier",
    # Classification utilities
    "get_status_code",
    "is_rate_limit_error",
    "is_server_error",
    "is_retryable_error",
    "classify_http_status",
    "classify_exception",
]
