"""Utility modules for agent studio."""

from .cancellation import CancellationToken, RunCancelledError
from .id import (
    generate_agent_id,
    generate_message_id,
    generate_pipeline_id,
    generate_run_id,
    generate_uuid,
)
from .logging import LOG_LEVELS, ColoredFormatter, LogEntry, StructuredFormatter, get_logger, run_extra, setup_logging
from .timeout import TimeoutError, wait_with_timeout

__all__ = [
    # Cancellation
    "CancellationToken",
    "RunCancelledError",
    # ID generation
    "generate_uuid",
    "generate_agent_id",
    "generate_pipeline_id",
    "generate_message_id",
    "generate_run_id",
    # Timeout
    "TimeoutError",
    "wait_with_timeout",
    # Logging
    "setup_logging",
    "get_logger",
    "LOG_LEVELS",
    "run_extra",
    "LogEntry",
    "StructuredFormatter",
    "ColoredFormatter",
]
