"""
Core library: Reusable, SDK-agnostic components for the SendSafely action.

Modules:
    resilience  - Retry with exponential backoff and jitter
    logging     - Structured JSON logging with execution context
    errors      - Error classification and exception hierarchy
    security    - Credential redaction and input validation
    utils       - Callback adaptation and JSON serialization

Design Principles:
    - No dependency on the host platform or a concrete SDK
    - All modules are independently testable
    - Async-first where applicable
"""

from .types import ErrorCategory, ErrorClassifier

__version__ = "0.1.0"

__all__ = [
    "ErrorCategory",
    "ErrorClassifier",
]
