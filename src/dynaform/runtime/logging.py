"""
dynaform logging infrastructure.

Provides:
- JSONL file output (one JSON object per line, with structured context)
- Human-readable console output (respects NO_COLOR)
- Component loggers under the "dynaform" hierarchy

Modules log through logging.getLogger(__name__) and may attach structured
data with ``extra={"context": {...}}``; setup_logging() decides where it goes.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# =============================================================================
# Terminal Colors (respects NO_COLOR)
# =============================================================================

_NO_COLOR = bool(os.environ.get("NO_COLOR")) or not sys.stdout.isatty()


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "" if _NO_COLOR else "\033[0m"
    DIM = "" if _NO_COLOR else "\033[2m"

    DEBUG = "" if _NO_COLOR else "\033[36m"  # Cyan
    INFO = "" if _NO_COLOR else "\033[32m"  # Green
    WARNING = "" if _NO_COLOR else "\033[33m"  # Yellow
    ERROR = "" if _NO_COLOR else "\033[31m"  # Red
    CRITICAL = "" if _NO_COLOR else "\033[35m"  # Magenta

    COMPONENT = "" if _NO_COLOR else "\033[34m"  # Blue


# =============================================================================
# Formatters
# =============================================================================


class JSONLFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines.

    Each entry contains timestamp, level, component, logger, message, and
    optionally context (from ``extra={"context": ...}``), source location
    for warnings and above, and exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", _component_from_name(record.name)),
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.levelno >= logging.WARNING:
            source_info: dict[str, Any] = {}
            if record.pathname:
                source_info["file"] = record.pathname
            if record.lineno:
                source_info["line"] = record.lineno
            if record.funcName and record.funcName != "<module>":
                source_info["function"] = record.funcName
            if source_info:
                entry["source"] = source_info

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DEBUG,
        logging.INFO: Colors.INFO,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.ERROR,
        logging.CRITICAL: Colors.CRITICAL,
    }

    def format(self, record: logging.LogRecord) -> str:
        component = getattr(record, "component", _component_from_name(record.name))
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        if _NO_COLOR:
            prefix = f"[{timestamp}] [{component}]"
        else:
            prefix = f"{Colors.DIM}{timestamp}{Colors.RESET} {Colors.COMPONENT}[{component}]{Colors.RESET}"

        if record.levelno != logging.INFO:
            level_name = record.levelname
            if not _NO_COLOR:
                level_name = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level_name}{Colors.RESET}"
            prefix = f"{prefix} {level_name}:"

        return f"{prefix} {record.getMessage()}"


def _component_from_name(name: str) -> str:
    """dynaform.runtime.visibility -> visibility"""
    return name.rsplit(".", 1)[-1]


# =============================================================================
# Logger Setup
# =============================================================================

_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    log_dir: Path | str | None = ".dynaform/logs",
    level: int | str = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    console: bool = True,
) -> Path | None:
    """
    Initialize logging for the "dynaform" logger hierarchy.

    Args:
        log_dir: Directory for the JSONL log file (None disables file output)
        level: Minimum log level (number or name)
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep
        console: Also log human-readable lines to stderr

    Returns:
        Path to the log file, or None when file output is disabled
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger("dynaform")
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ConsoleFormatter())
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if log_dir is None:
        if not console:
            root_logger.addHandler(logging.NullHandler())
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / "dynaform.log"

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONLFormatter())
    file_handler.setLevel(level)
    root_logger.addHandler(file_handler)

    root_logger.debug(
        "dynaform logging initialized",
        extra={"context": {"log_format": "jsonl", "log_file": str(log_file)}},
    )
    return log_file


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a named component (e.g. "CLI").

    Records from it carry the component name in both output formats.
    """
    if component in _loggers:
        return _loggers[component]

    logger = logging.getLogger(f"dynaform.{component.lower().replace(' ', '_')}")

    class ComponentFilter(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            if not hasattr(record, "component"):
                record.component = component
            return True

    logger.addFilter(ComponentFilter())
    _loggers[component] = logger
    return logger
