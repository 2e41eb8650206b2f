"""
Structured logging module.

Provides JSON logging with execution context propagation and credential
redaction.
"""

from core.logging.context import (
    clear_log_context,
    get_log_context,
    restore_log_context,
    set_log_context,
)
from core.logging.context_managers import LogContext, OperationContext
from core.logging.filters import RedactingFilter
from core.logging.formatters import ConsoleFormatter, JSONFormatter
from core.logging.setup import (
    generate_execution_id,
    get_logger,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    "generate_execution_id",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    # Filters
    "RedactingFilter",
    # Context
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    "restore_log_context",
    # Context Managers
    "LogContext",
    "OperationContext",
]
