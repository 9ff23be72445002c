"""Logging configuration for agent studio.

Console output is a short colored line per record. Files and ``json`` mode
get one structured line per record. Records logged with
``extra=run_extra(item_id, run_id)`` carry the run they belong to, which both
formats show.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


class LogEntry(BaseModel):
    """Structured log entry.

    Attributes:
        timestamp: Record time, ISO 8601
        level: Level name
        logger: Logger name
        message: Formatted message
        item_id: Agent or pipeline the record is about
        run_id: Run the record is about
        exception: Formatted traceback
    """

    timestamp: str
    level: str
    logger: str
    message: str
    item_id: Optional[str] = None
    run_id: Optional[str] = None
    exception: Optional[str] = None


def run_extra(item_id: str, run_id: Optional[str] = None) -> dict[str, Any]:
    """``extra`` mapping that tags a record with its run."""
    return {"item_id": item_id, "run_id": run_id}


def _run_label(record: logging.LogRecord) -> str:
    item_id = getattr(record, "item_id", None)
    return f" <{item_id}>" if item_id else ""


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log output, as JSON lines or plain text."""

    def __init__(self, json_output: bool = True) -> None:
        super().__init__()
        self.json_output = json_output

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        return LogEntry(
            timestamp=datetime.fromtimestamp(record.created).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            item_id=getattr(record, "item_id", None),
            run_id=getattr(record, "run_id", None),
            exception=self.formatException(record.exc_info) if record.exc_info else None,
        )

    def format(self, record: logging.LogRecord) -> str:
        entry = self.to_entry(record)
        if self.json_output:
            return json.dumps(entry.model_dump(exclude_none=True))

        line = f"{entry.timestamp} [{entry.level}] {entry.logger}{_run_label(record)}: {entry.message}"
        if entry.exception:
            line += "\n" + entry.exception
        return line


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level name with ANSI codes."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        return f"[{color}{record.levelname}{self.RESET}] {record.name}{_run_label(record)}: {record.getMessage()}"


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    use_colors: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """Set up logging for agent studio.

    Args:
        level: One of ``LOG_LEVELS``
        format_type: Console format, "text" or "json"
        use_colors: Whether to color text console output
        log_file: Optional file receiving JSON lines

    Raises:
        ValueError: If the level is unknown
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # stderr, so that run output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    if format_type == "json":
        console_handler.setFormatter(StructuredFormatter(json_output=True))
    elif use_colors:
        console_handler.setFormatter(ColoredFormatter())
    else:
        console_handler.setFormatter(StructuredFormatter(json_output=False))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter(json_output=True))
        root_logger.addHandler(file_handler)

    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
