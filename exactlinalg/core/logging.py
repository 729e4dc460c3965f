"""
Structured logging configuration.

The library only emits records through module loggers; handlers are attached
when an application calls :func:`setup_logging`.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import Settings, get_settings

LIBRARY_LOGGER = "exactlinalg"


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text log formatter"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Attach handlers to the library logger according to the settings"""
    config = config or get_settings()

    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)

    if config.LOG_FORMAT == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    handlers: list[logging.Handler] = [console_handler]

    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class OperationLogger(logging.LoggerAdapter):
    """
    Logger bound to one computation.

    The operation name and its parameters travel with every record as
    ``extra_data`` (merged into the JSON output of StructuredFormatter), and
    messages are prefixed with the operation name.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Attach the operation context to the record"""
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return f"{self.extra['operation']}: {msg}", kwargs


def get_operation_logger(name: str, operation: str, **context: Any) -> OperationLogger:
    """Get a logger that tags records with an operation and its parameters"""
    return OperationLogger(get_logger(name), {"operation": operation, **context})


logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())
