"""
Resilience patterns module.

Components:
    - RetryConfig: Exponential backoff configuration
    - retry_async(): Retry an awaitable with jitter
    - @with_retry_async decorator: Same, for coroutine functions
"""

from .retry import (
    DEFAULT_RETRY,
    NO_RETRY,
    RetryConfig,
    RetryStats,
    retry_async,
    with_retry_async,
)

__all__ = [
    "RetryConfig",
    "RetryStats",
    "retry_async",
    "with_retry_async",
    "DEFAULT_RETRY",
    "NO_RETRY",
]
