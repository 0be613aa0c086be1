"""Logging setup for the scoring engine and its command line.

Records carry a correlation id so that one CLI invocation (or one call
from an embedding application) can be followed across scorer loggers.
"""

import json
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "correlation_id", "taskName"}


class CorrelationIdFilter(logging.Filter):
    """Stamps the current correlation id onto each record."""

    def filter(self, record):
        if not getattr(record, "correlation_id", ""):
            record.correlation_id = correlation_id.get()
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, extras included as top-level keys."""

    def format(self, record):
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_ATTRIBUTES
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Column layout for terminals: time, level, logger, message."""

    def format(self, record):
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        trace = getattr(record, "correlation_id", "")
        prefix = f"[{trace}] " if trace else ""
        line = f"{when} {record.levelname:<8} {record.name:<22} {prefix}{record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _attach(root: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    root.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True,
    enable_file: bool = False,
    structured: bool = False,
    max_file_size: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """Replace the root handlers with console and/or rotating file output.

    Args:
        level: Root level name, case-insensitive
        log_file: Target of the rotating file handler
        enable_console: Log to stderr, leaving stdout to command output
        enable_file: Log to ``log_file`` when one is given
        structured: JSON lines instead of the column layout
        max_file_size: Rotation threshold in bytes
        backup_count: Rotated files to keep
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = StructuredFormatter() if structured else HumanReadableFormatter()
    if enable_console:
        _attach(root, logging.StreamHandler(sys.stderr), formatter)
    if enable_file and log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _attach(
            root,
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
            ),
            formatter,
        )

    logging.getLogger("interview_scoring").debug(
        "Logging configured", extra={"log_level": level.upper(), "structured": structured}
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a scorer, service or CLI component."""
    return logging.getLogger(name)


def set_correlation_id(value: str) -> None:
    correlation_id.set(value)


def get_correlation_id() -> str:
    return correlation_id.get()


def log_performance(operation: str, duration: float, **details: Any) -> None:
    """Debug-level timing record for ``operation``."""
    logging.getLogger("performance").debug(
        "%s took %.2fms", operation, duration * 1000,
        extra={"operation": operation, "duration_ms": round(duration * 1000, 3), **details},
    )
