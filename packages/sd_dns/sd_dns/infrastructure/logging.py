"""Logging setup for the discovery source and its host process.

Library code logs through :func:`get_logger` and passes context (host, port,
source) with ``extra=``. :func:`setup_logging` is only called by a host
process such as the CLI. Logs go to stderr, leaving stdout to command output.
"""

import json
import logging
import logging.handlers
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation for the optional log file
LOG_FILE_MAX_BYTES = 10_485_760
LOG_FILE_BACKUP_COUNT = 5

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRIBUTES
    }


class LogLevel(str, Enum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration, read from ``SD_DNS_LOGGING__*``."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Global log level")
    json_format: bool = Field(default=False, description="Emit one JSON object per line")
    console_enabled: bool = Field(default=True, description="Log to stderr")
    file_path: Path | None = Field(default=None, description="Also log to this rotating file")

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, v: Path | None) -> Path | None:
        """Ensure the log directory exists."""
        if v is not None:
            v.parent.mkdir(parents=True, exist_ok=True)
        return v


class ContextFormatter(logging.Formatter):
    """Text formatter appending ``extra`` context as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line

        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


class StructuredFormatter(logging.Formatter):
    """Formatter rendering records, including ``extra`` context, as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(_record_context(record))
        return json.dumps(log_data, default=str)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure the root logger.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(config.level.value)

    formatter: logging.Formatter
    if config.json_format:
        formatter = StructuredFormatter()
    else:
        formatter = ContextFormatter()

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if config.file_path is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            filename=config.file_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging configured", extra={"config": config.model_dump()})


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
