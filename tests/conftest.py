"""
pytest configuration for the SendSafely action tests.

Adds src directory to Python path for imports and sets up test environment.
"""

import os
import sys
from pathlib import Path

import pytest

# Set test environment variables BEFORE any imports
os.environ.setdefault("TEST_MODE", "true")

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def clean_log_context():
    """Reset logging context variables between tests."""
    from core.logging.context import clear_log_context

    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def clean_sendsafely_env(monkeypatch):
    """Keep developer SENDSAFELY_* / LOG_* variables out of config tests."""
    for name in (
        "SENDSAFELY_BASE_URL",
        "SENDSAFELY_API_KEY",
        "SENDSAFELY_API_SECRET",
        "SENDSAFELY_MAX_RETRIES",
        "SENDSAFELY_BASE_DELAY",
        "SENDSAFELY_REQUEST_TIMEOUT_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
