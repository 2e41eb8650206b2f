"""Logging setup and configuration."""

import io
import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from core.logging.context import set_log_context
from core.logging.filters import RedactingFilter
from core.logging.formatters import ConsoleFormatter, JSONFormatter

# Default settings
DEFAULT_CONSOLE_LEVEL = logging.INFO
DEFAULT_FILE_LEVEL = logging.DEBUG
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

# Noisy loggers to suppress
NOISY_LOGGERS = [
    "aiohttp",
    "aiohttp.access",
    "asyncio",
    "urllib3",
]


def generate_execution_id() -> str:
    """Short random identifier correlating all log lines of one execution."""
    return uuid.uuid4().hex[:12]


def _console_stream():
    if sys.platform == "win32":
        return io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    return sys.stdout


def setup_logging(
    name: str = "sendsafely_node",
    level: int | str = DEFAULT_CONSOLE_LEVEL,
    json_format: bool = False,
    log_file: Path | None = None,
    file_level: int | str = DEFAULT_FILE_LEVEL,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    suppress_noisy: bool = True,
    execution_id: str | None = None,
) -> logging.Logger:
    """
    Configure console and optional rotating file logging.

    Every handler gets a RedactingFilter, so credentials are masked no
    matter which logger emits them.

    Args:
        name: Logger name to return
        level: Console handler level
        json_format: Use JSON lines on the console instead of human-readable text
        log_file: Optional path for a size-rotated JSON log file
        file_level: File handler level
        max_bytes: Rotate the log file after this many bytes
        backup_count: Number of rotated files to keep
        suppress_noisy: Quiet down aiohttp/asyncio loggers
        execution_id: Correlation ID for this process (generated if omitted)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if isinstance(file_level, str):
        file_level = logging.getLevelName(file_level.upper())

    set_log_context(execution_id=execution_id or generate_execution_id())

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    root_logger.handlers.clear()

    redacting_filter = RedactingFilter()

    console_handler = logging.StreamHandler(_console_stream())
    console_handler.setLevel(level)
    console_handler.setFormatter(JSONFormatter() if json_format else ConsoleFormatter())
    console_handler.addFilter(redacting_filter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(redacting_filter)
        root_logger.addHandler(file_handler)

    if suppress_noisy:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    logger.debug(
        "Logging initialized",
        extra={
            "json_format": json_format,
            "log_file": str(log_file) if log_file else None,
        },
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
