"""Context managers for structured logging."""

import logging
import time
from typing import Any, Dict, Optional

from core.logging.context import (
    get_log_context,
    restore_log_context,
    set_log_context,
)
from core.security.redaction import sanitize_error


class LogContext:
    """
    Context manager for temporary log context.

    Usage:
        with LogContext(resource="package", operation="get", item_index=3):
            # All logs in this block carry resource, operation and item_index
            await handler(ctx)
    """

    def __init__(
        self,
        execution_id: Optional[str] = None,
        node_name: Optional[str] = None,
        resource: Optional[str] = None,
        operation: Optional[str] = None,
        item_index: Optional[int] = None,
    ):
        self.new_context = {
            "execution_id": execution_id,
            "node_name": node_name,
            "resource": resource,
            "operation": operation,
            "item_index": item_index,
        }
        self.old_context: Dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self.old_context = get_log_context()
        set_log_context(**self.new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        restore_log_context(self.old_context)
        return False


class OperationContext:
    """Context manager for timed operations with automatic logging."""

    def __init__(
        self,
        logger: logging.Logger,
        operation: str,
        level: int = logging.DEBUG,
        slow_threshold_ms: Optional[float] = 5000.0,
        **context: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.slow_threshold_ms = slow_threshold_ms
        self.context = context
        self._start_time: Optional[float] = None

    def __enter__(self) -> "OperationContext":
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.perf_counter() - self._start_time) * 1000
        extra = {
            "operation": self.operation,
            "duration_ms": round(duration_ms, 2),
            **self.context,
        }

        if exc_val is not None:
            extra["error_type"] = type(exc_val).__name__
            extra["error_message"] = sanitize_error(exc_val)[:500]
            self.logger.warning("Failed: %s", self.operation, extra=extra)
            return False

        # Auto-promote to INFO if slow
        effective_level = self.level
        if self.slow_threshold_ms and duration_ms > self.slow_threshold_ms:
            effective_level = max(self.level, logging.INFO)
        self.logger.log(effective_level, "Completed: %s", self.operation, extra=extra)
        return False

    def add_context(self, **kwargs: Any) -> None:
        """Add context mid-operation (result counts, etc)."""
        self.context.update(kwargs)
