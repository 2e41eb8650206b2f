"""
Validation of user-supplied parameters before they reach the SDK.

Covers recipient email addresses, package identifiers and uploaded file
names (path traversal prevention).
"""

import re

from core.errors.exceptions import ValidationError

# RFC 5322 simplified email validation
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

# SendSafely package IDs are alphanumeric with hyphens/underscores
PACKAGE_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

# Separators accepted in a multi-recipient email list
EMAIL_LIST_SEPARATORS = re.compile(r"[,\n]")


def validate_email(email: str) -> bool:
    if not email or not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_package_id(package_id: str) -> bool:
    if not package_id or not isinstance(package_id, str):
        return False
    return PACKAGE_ID_PATTERN.fullmatch(package_id) is not None


def require_package_id(package_id: str) -> str:
    """Return the package ID unchanged, or raise ValidationError."""
    if not validate_package_id(package_id):
        raise ValidationError(f"Invalid package ID: {package_id!r}")
    return package_id


def parse_email_list(emails: str) -> list[str]:
    """
    Split a comma- or newline-separated email list.

    Entries are trimmed and blanks dropped; order is preserved.
    """
    if not emails:
        return []
    return [e.strip() for e in EMAIL_LIST_SEPARATORS.split(emails) if e.strip()]


def require_valid_emails(emails: list[str]) -> list[str]:
    """Raise ValidationError naming every invalid address in the list."""
    invalid = [email for email in emails if not validate_email(email)]
    if len(invalid) == 1 and len(emails) == 1:
        raise ValidationError(f"Invalid email address: {invalid[0]}")
    if invalid:
        raise ValidationError(f"Invalid email addresses: {', '.join(invalid)}")
    return emails


def sanitize_file_name(file_name: str) -> str:
    """
    Strip path traversal sequences from a file name.

    Removes ``..``, path separators and NUL bytes, then trims whitespace.

    Raises:
        ValidationError: If the name is not a string or nothing is left
    """
    if not file_name or not isinstance(file_name, str):
        raise ValidationError("Invalid file name")

    sanitized = file_name.replace("..", "")
    sanitized = re.sub(r"[/\\]", "", sanitized)
    sanitized = sanitized.replace("\0", "")
    sanitized = sanitized.strip()

    if not sanitized:
        raise ValidationError("File name cannot be empty after sanitization")

    return sanitized


__all__ = [
    "parse_email_list",
    "require_package_id",
    "require_valid_emails",
    "sanitize_file_name",
    "validate_email",
    "validate_package_id",
]
