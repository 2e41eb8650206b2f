"""
Retry utilities with exponential backoff and jitter.

SendSafely rate limits API keys and occasionally answers with 5xx during
deployments. Those failures are retried; everything else (bad package IDs,
rejected credentials, validation errors) fails on the first attempt:

- 429 / "rate limit" / "too many requests": retry with backoff
- 5xx: retry with backoff
- Anything else: fail immediately (no retry, no delay)
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, TypeVar

from core.errors.exceptions import (
    RetryExhaustedError,
    SdkErrorClassifier,
    classify_exception,
)
from core.security.redaction import sanitize_error
from core.types import ErrorClassifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_non_retryable(operation_name: str, error: BaseException) -> None:
    logger.warning(
        "Non-retryable error for %s, not retrying",
        operation_name,
        extra={
            "sdk_call": operation_name,
            "error_type": type(error).__name__,
            "error_category": classify_exception(error).value,
            "error_message": sanitize_error(error)[:200],
        },
    )


def _log_exhausted(
    operation_name: str, error: BaseException, config: "RetryConfig"
) -> None:
    logger.error(
        "Max retries exhausted for %s",
        operation_name,
        extra={
            "sdk_call": operation_name,
            "error_type": type(error).__name__,
            "error_category": classify_exception(error).value,
            "max_attempts": config.max_attempts,
            "error_message": sanitize_error(error)[:200],
        },
    )


def _log_retry_scheduled(
    operation_name: str,
    attempt: int,
    config: "RetryConfig",
    delay: float,
    error: BaseException,
) -> None:
    logger.warning(
        "Retryable error for %s, will retry",
        operation_name,
        extra={
            "sdk_call": operation_name,
            "attempt": attempt + 1,
            "max_attempts": config.max_attempts,
            "error_category": classify_exception(error).value,
            "delay_seconds": round(delay, 3),
            "error_message": sanitize_error(error)[:200],
        },
    )


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    # Additional attempts after the first one
    max_retries: int = 3
    base_delay: float = 1.0
    max_jitter: float = 0.2
    exponential_base: float = 2.0

    classifier: ErrorClassifier = field(default_factory=SdkErrorClassifier)

    def __post_init__(self):
        """Ensure proper types from YAML/env vars."""
        self.max_retries = int(self.max_retries)
        self.base_delay = float(self.base_delay)
        self.max_jitter = float(self.max_jitter)
        self.exponential_base = float(self.exponential_base)
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay < 0 or self.max_jitter < 0:
            raise ValueError("base_delay and max_jitter must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def get_delay(self, retry_index: int) -> float:
        """
        Calculate the delay before a retry.

        Args:
            retry_index: 0-indexed retry number (0 = first retry)

        Returns:
            Delay in seconds, in [base * 2^k, base * 2^k + max_jitter)
        """
        delay = self.base_delay * (self.exponential_base**retry_index)
        return delay + random.random() * self.max_jitter

    def should_retry(self, error: BaseException) -> bool:
        if not isinstance(error, Exception):
            return False
        return self.classifier.is_transient(error)


# Default configurations
DEFAULT_RETRY = RetryConfig()
NO_RETRY = RetryConfig(max_retries=0)


@dataclass
class RetryStats:
    """Statistics from a retry operation."""

    attempts: int = 0
    total_delay: float = 0.0
    final_error: BaseException | None = None
    success: bool = False

    @property
    def retried(self) -> bool:
        """Whether any retries occurred."""
        return self.attempts > 1


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    operation_name: str = "operation",
    stats: RetryStats | None = None,
) -> T:
    """
    Await an operation, retrying rate-limit and server errors with backoff.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        config: Retry configuration (defaults to DEFAULT_RETRY)
        operation_name: Name used in log events
        stats: Optional RetryStats populated as attempts are made

    Returns:
        Result of the first successful attempt

    Raises:
        The error of the last attempt when it is not retryable or when
        retries are exhausted.
    """
    if config is None:
        config = DEFAULT_RETRY
    if stats is None:
        stats = RetryStats()

    last_error: BaseException | None = None

    for attempt in range(config.max_attempts):
        stats.attempts = attempt + 1
        logger.debug(
            "Attempting %s",
            operation_name,
            extra={
                "sdk_call": operation_name,
                "attempt": attempt + 1,
                "max_attempts": config.max_attempts,
            },
        )
        try:
            result = await operation()
        except Exception as e:
            last_error = e
            stats.final_error = e

            if not config.should_retry(e):
                _log_non_retryable(operation_name, e)
                raise

            if attempt >= config.max_retries:
                _log_exhausted(operation_name, e, config)
                break

            delay = config.get_delay(attempt)
            _log_retry_scheduled(operation_name, attempt, config, delay, e)
            stats.total_delay += delay
            await asyncio.sleep(delay)
            continue

        if attempt > 0:
            logger.info(
                "Retry succeeded for %s after %d attempts",
                operation_name,
                attempt + 1,
                extra={
                    "sdk_call": operation_name,
                    "attempt": attempt + 1,
                    "total_attempts": config.max_attempts,
                },
            )
        stats.success = True
        return result

    if last_error is not None:
        raise last_error
    raise RetryExhaustedError("Retry failed with unknown error")


def with_retry_async(
    config: RetryConfig | None = None,
    operation_name: str | None = None,
):
    """
    Decorator form of retry_async for coroutine functions.

    Usage:
        @with_retry_async(RetryConfig(max_retries=5))
        async def fetch_package(client, package_id):
            ...
    """

    def decorator(func: Callable[..., Awaitable[Any]]):
        name = operation_name or func.__name__

        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await retry_async(
                lambda: func(*args, **kwargs), config=config, operation_name=name
            )

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "RetryStats",
    "retry_async",
    "with_retry_async",
    "DEFAULT_RETRY",
    "NO_RETRY",
]
