"""Log filters applied to every handler."""

import logging

from core.security.redaction import redact


class RedactingFilter(logging.Filter):
    """
    Redact SendSafely credentials from log records.

    The rendered message and the extra fields that commonly carry raw
    error text are passed through the same redaction used for error
    output, so an API key or secret echoed by the SDK or aiohttp never
    reaches a log sink.

    Usage:
        handler = logging.StreamHandler()
        handler.addFilter(RedactingFilter())
    """

    # Extra fields that commonly carry raw error text
    TEXT_FIELDS = ("error_message", "error", "callback_error")

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Redact the record in place.

        Args:
            record: Log record to check

        Returns:
            Always True; records are rewritten, never dropped
        """
        try:
            rendered = record.getMessage()
        except (TypeError, ValueError):
            return True

        redacted = redact(rendered)
        if redacted != rendered:
            record.msg = redacted
            record.args = None

        for field in self.TEXT_FIELDS:
            value = getattr(record, field, None)
            if isinstance(value, str):
                setattr(record, field, redact(value))
        return True
