"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Logging setup (text or JSON, console plus optional file)
- Console header/footer printing
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from constants import LoggingConfig

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # extra fields supplied via LoggerAdapter/extra
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    Console output goes to stderr so that stdout stays free for the
    serialized graph. If the log file cannot be created, the system temp
    directory and then the user home directory are tried before falling back
    to console-only logging.

    Args:
        level: Log level used when the config does not set one.
        log_file: Log file override.
        config: Optional ``"logging"`` configuration section
            (``level``, ``file``, ``format``).

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    config_dict = dict(config or {})

    resolved_level = str(config_dict.get('level') or level or LoggingConfig.DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, resolved_level.upper(), logging.WARNING)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers: List[Handler] = [console_handler]
    actual_log_file = None

    if file_path:
        log_filename = os.path.basename(file_path) or "microdata_rdf.log"
        fallback_locations = [
            file_path,
            os.path.join(tempfile.gettempdir(), log_filename),
            os.path.join(Path.home(), log_filename),
        ]
        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = logging.FileHandler(fallback_path, encoding='utf-8')
            except OSError as exc:
                print(f"  Could not create log at {fallback_path}: {exc}", file=sys.stderr)
                continue
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
            actual_log_file = fallback_path
            if fallback_path != file_path:
                print(f"Note: Using fallback log file: {fallback_path}", file=sys.stderr)
            break
        else:
            print("Warning: Could not write log file to any location; logging to console only", file=sys.stderr)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")

    return actual_log_file


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title to stderr."""
    print("\n" + "=" * width, file=sys.stderr)
    print(title, file=sys.stderr)
    print("=" * width, file=sys.stderr)


def print_footer(width: int = 60) -> None:
    """Print a footer line to stderr."""
    print("=" * width + "\n", file=sys.stderr)
