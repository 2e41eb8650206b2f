"""
Security module.

Provides credential redaction and input validation for the SendSafely action:
    - sanitize_error(): Display-safe error text with credentials masked
    - validate_email() / validate_package_id(): Parameter validation
    - sanitize_file_name(): Path traversal prevention for uploads
"""

from core.security.input_validation import (
    parse_email_list,
    require_package_id,
    require_valid_emails,
    sanitize_file_name,
    validate_email,
    validate_package_id,
)
from core.security.redaction import (
    REDACTED,
    UNKNOWN_ERROR_MESSAGE,
    redact,
    sanitize_error,
)

__all__ = [
    # Redaction
    "sanitize_error",
    "redact",
    "REDACTED",
    "UNKNOWN_ERROR_MESSAGE",
    # Input validation
    "validate_email",
    "validate_package_id",
    "require_package_id",
    "parse_email_list",
    "require_valid_emails",
    "sanitize_file_name",
]
