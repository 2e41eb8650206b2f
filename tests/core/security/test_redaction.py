"""
Tests for credential redaction.

Tests cover:
- Message extraction from exceptions, strings, mappings and objects
- Masking of every credential field name
- Idempotency
"""

import pytest

from core.errors.exceptions import SdkError
from core.security.redaction import (
    REDACTED,
    UNKNOWN_ERROR_MESSAGE,
    redact,
    sanitize_error,
)


class TestSanitizeErrorExtraction:
    """Tests for turning arbitrary error values into text."""

    def test_none_is_unknown_error(self):
        assert sanitize_error(None) == UNKNOWN_ERROR_MESSAGE

    def test_exception_uses_str(self):
        assert sanitize_error(ValueError("bad package")) == "bad package"

    def test_string_used_as_is(self):
        assert sanitize_error("plain failure") == "plain failure"

    def test_mapping_message_key(self):
        assert sanitize_error({"message": "from dict", "code": 7}) == "from dict"

    def test_object_message_attribute(self):
        class SdkFailure:
            message = "from object"

        assert sanitize_error(SdkFailure()) == "from object"

    def test_structural_dump(self):
        assert sanitize_error({"code": 7}) == '{"code": 7}'

    def test_list_dumped_structurally(self):
        result = sanitize_error(["a", 1])
        assert result == '["a", 1]'


class TestSanitizeErrorMasking:
    """Tests for credential masking."""

    def test_api_key_example(self):
        result = sanitize_error(Exception("apiKey=abc123 failed"))
        assert "apiKey=***" in result
        assert "abc123" not in result

    @pytest.mark.parametrize(
        "message,secret",
        [
            ("apiKey=abc123", "abc123"),
            ("api_key: abc123", "abc123"),
            ("api-key=abc123", "abc123"),
            ("apiSecret=s3cr3t", "s3cr3t"),
            ("api_secret = s3cr3t", "s3cr3t"),
            ("password=hunter2", "hunter2"),
            ("PASSWORD: hunter2", "hunter2"),
            ("token=tok_987", "tok_987"),
            ("authorization: xyz", "xyz"),
            ("ss-api-key: AKIA123", "AKIA123"),
            ("Bearer eyJhbGciOi", "eyJhbGciOi"),
        ],
    )
    def test_masks_values(self, message, secret):
        result = sanitize_error(f"Request failed: {message} end")
        assert secret not in result
        assert REDACTED in result
        assert result.endswith(" end")

    def test_json_fields(self):
        result = sanitize_error('{"apiKey":"abc","apiSecret":"def","name":"ok"}')
        assert "abc" not in result
        assert "def" not in result
        assert '"name":"ok"' in result

    def test_preserves_field_name_case(self):
        assert sanitize_error("ApiSecret=zzz") == "ApiSecret=***"

    def test_value_stops_at_comma(self):
        assert sanitize_error("token=abc,next=1") == "token=***,next=1"

    def test_no_credentials_unchanged(self):
        assert sanitize_error("Package not found") == "Package not found"

    def test_nested_cause_is_masked(self):
        err = SdkError("Upload failed", cause=Exception("apiKey=leaked"))
        result = sanitize_error(err)
        assert "leaked" not in result
        assert result == "Upload failed | Caused by: apiKey=***"


class TestIdempotency:
    @pytest.mark.parametrize(
        "message",
        [
            "apiKey=abc123 failed",
            "Authorization: Bearer abc.def",
            "ss-api-key: k password=p token=t",
            "nothing sensitive",
        ],
    )
    def test_sanitizing_twice_equals_once(self, message):
        once = sanitize_error(message)
        assert sanitize_error(once) == once


class TestRedact:
    def test_empty_passthrough(self):
        assert redact("") == ""

    def test_redacts_multiple_fields(self):
        assert redact("apiKey=a apiSecret=b") == "apiKey=*** apiSecret=***"
