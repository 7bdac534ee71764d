"""Logging setup helpers for clinicflow.

clinicflow installs only a NullHandler, so the engines stay quiet until the
host application opts in through one of the functions below.

Example usage:
    import clinicflow

    # Human-readable output on stderr
    clinicflow.enable_console_logging(level="DEBUG")

    # Size-capped log files next to a batch of replications
    clinicflow.enable_file_logging("logs/replications.log", max_bytes=5_000_000)

    # One JSON object per line for log shippers
    clinicflow.enable_json_logging()

    # Let the environment decide
    clinicflow.configure_from_env()

Environment variables:
    CF_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CF_LOG_FILE: Path to a log file (switches to rotating file output)
    CF_LOG_JSON: "1" selects JSON formatting
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "clinicflow"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """Renders each record as a single JSON object.

    Example output:
        {"timestamp": "2026-03-02T09:15:00.000000+00:00", "level": "INFO",
         "logger": "clinicflow.engine.batch", "message": "Batch run finished"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "sim_time"):
            payload["sim_time"] = record.sim_time
        return json.dumps(payload)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Detach and close every non-null handler on the clinicflow logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _attach(handler: logging.Handler, level: LogLevel | int) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    logger.addHandler(handler)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Send clinicflow log records to stderr.

    Args:
        level: Log level name or numeric level.
        format: Format string for each record.
        date_format: Format for ``%(asctime)s``.

    Returns:
        The StreamHandler that was attached.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Write clinicflow log records to a size-capped rotating file.

    Long replication sweeps at DEBUG level produce one line per event, so the
    file is rolled over at ``max_bytes`` and at most ``backup_count`` old
    files are kept.

    Args:
        path: Log file location. Missing parent directories are created.
        level: Log level name or numeric level.
        max_bytes: Size at which the file is rotated.
        backup_count: Number of rotated files to keep.
        format: Format string for each record.
        date_format: Format for ``%(asctime)s``.

    Returns:
        The RotatingFileHandler that was attached.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Send clinicflow log records to stderr as JSON lines."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    _attach(handler, level)
    return handler


def enable_json_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """Write JSON lines to a rotating file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(JsonFormatter())
    _attach(handler, level)
    return handler


def configure_from_env() -> None:
    """Configure logging from ``CF_LOGGING``, ``CF_LOG_FILE`` and ``CF_LOG_JSON``.

    Does nothing when neither a level nor a file is set.
    """
    level = os.environ.get("CF_LOGGING", "").upper()
    log_file = os.environ.get("CF_LOG_FILE", "")
    use_json = os.environ.get("CF_LOG_JSON", "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"

    if use_json:
        if log_file:
            enable_json_file_logging(log_file, level=level)
        else:
            enable_json_logging(level=level)
    elif log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Change the level of the top-level clinicflow logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Change the level of one clinicflow submodule.

    Example:
        >>> clinicflow.enable_console_logging(level="INFO")
        >>> clinicflow.set_module_level("engine.realtime", "DEBUG")
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove all clinicflow handlers and silence the logger."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
