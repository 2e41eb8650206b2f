"""
Credential redaction for error messages and log output.

SendSafely credentials travel as ``ss-api-key`` headers and as constructor
arguments to the SDK, so SDK and transport errors can echo them back.
Everything user-visible passes through :func:`sanitize_error` first.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

REDACTED = "***"

# Order matters: the longest names must be tried before their substrings
# (ss-api-key before api-key).
_SENSITIVE_NAMES = (
    r"ss-api-key",
    r"api[_-]?key",
    r"api[_-]?secret",
    r"password",
    r"token",
    r"authorization",
)

# Patterns that may contain sensitive data in error messages. The field name
# and separator are kept; only the value is replaced, so redaction is
# idempotent.
SENSITIVE_PATTERNS = [
    (re.compile(r"(bearer\s+)[^\s,}]+", re.IGNORECASE), r"\1" + REDACTED),
    (
        re.compile(
            r"(?P<name>" + "|".join(_SENSITIVE_NAMES) + r")"
            r"(?P<sep>[\"']?\s*[=:]\s*)"
            r"(?P<value>[^\s,}]+)",
            re.IGNORECASE,
        ),
        r"\g<name>\g<sep>" + REDACTED,
    ),
]


def _extract_message(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, str):
        return error
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    message = getattr(error, "message", None)
    if message:
        return str(message)
    try:
        return json.dumps(error, default=str)
    except (TypeError, ValueError):
        return repr(error)


def redact(message: str) -> str:
    """Mask credential-like ``name=value`` / ``name: value`` pairs in text."""
    if not message:
        return message

    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_error(error: Any) -> str:
    """
    Turn any error value into a display-safe string.

    Args:
        error: Exception, string, object with a ``message`` or anything
            JSON-serializable

    Returns:
        Message with credential values replaced by ``***``
    """
    if error is None:
        return UNKNOWN_ERROR_MESSAGE

    return redact(_extract_message(error))


__all__ = [
    "REDACTED",
    "UNKNOWN_ERROR_MESSAGE",
    "redact",
    "sanitize_error",
]
