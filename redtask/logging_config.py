"""
Logging configuration for redtask.

Provides structured logging with:
- Console output with color coding
- Optional JSON format for log aggregation
- Log levels configurable via environment or the CLI
"""

import json
import logging
import sys
from typing import Optional, TextIO

from redtask.config import get_settings


# ANSI color codes for terminal output
class Colors:
    GREY = "\x1b[38;20m"
    BLUE = "\x1b[34;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"
    GREEN = "\x1b[32;20m"
    CYAN = "\x1b[36;20m"


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for different log levels."""

    FORMATS = {
        logging.DEBUG: Colors.GREY + LOG_FORMAT + Colors.RESET,
        logging.INFO: Colors.GREEN + LOG_FORMAT + Colors.RESET,
        logging.WARNING: Colors.YELLOW + LOG_FORMAT + Colors.RESET,
        logging.ERROR: Colors.RED + LOG_FORMAT + Colors.RESET,
        logging.CRITICAL: Colors.BOLD_RED + LOG_FORMAT + Colors.RESET,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, LOG_FORMAT)
        formatter = logging.Formatter(log_fmt, datefmt="%Y-%m-%d %H:%M:%S")
        return formatter.format(record)


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls back to
            the configured level, then DEBUG/INFO depending on debug mode.
        json_format: If True, use JSON format. Defaults to the configured value.
        stream: Where log lines go. The CLI keeps stdout for its tables, so
            the default is stderr.
    """
    settings = get_settings()

    # Determine log level
    if level is None and settings.log_level is not None:
        level = settings.log_level.value
    log_level = level or ("DEBUG" if settings.debug else "INFO")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if json_format is None:
        json_format = settings.log_json

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(JsonFormatter() if json_format else ColoredFormatter())
    root_logger.addHandler(console_handler)

    # Silence noisy loggers
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger("redtask").setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Usage:
        from redtask.logging_config import get_logger
        logger = get_logger(__name__)
        logger.info("Something happened")
    """
    # Prefix with 'redtask' for consistent naming
    if not name.startswith("redtask"):
        name = f"redtask.{name}"
    return logging.getLogger(name)
