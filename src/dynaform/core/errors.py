"""
Error types for dynaform configuration, record loading, and review sessions.

The schema-building and visibility core never raises: malformed data degrades
to defaults and failed rules degrade to hidden. These exceptions only surface
at the outer edges (config files, record files, the review panel, the CLI).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class DynaformError(Exception):
    """Base exception for all dynaform errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(DynaformError):
    """
    Raised when a dynaform.toml file cannot be loaded.

    Examples:
    - File missing or not valid TOML
    - Unknown criteria dialect
    - Unknown log level
    """

    pass


class RecordsError(DynaformError):
    """
    Raised when a metadata records file cannot be read.

    Examples:
    - File missing or unreadable
    - Invalid JSON
    - Top-level value is neither a record list nor a response object
    """

    pass


class ReviewSessionError(DynaformError):
    """Raised when a closed review session is edited or submitted."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error came from.

    Attributes:
        source: File path or logical source name
        detail: Optional extra detail (key name, JSON position, ...)
    """

    source: Path | str
    detail: str | None = None

    def format(self) -> str:
        """Format as "source (detail)"."""
        if self.detail:
            return f"{self.source} ({self.detail})"
        return str(self.source)


def make_config_error(message: str, path: Path, key: str | None = None) -> ConfigError:
    """
    Helper to create a ConfigError pointing at a config file.

    Args:
        message: Error description
        path: Config file path
        key: Optional offending key (e.g. "criteria.dialect")

    Returns:
        ConfigError with context attached
    """
    return ConfigError(message, ErrorContext(source=path, detail=key))


def make_records_error(message: str, path: Path, detail: str | None = None) -> RecordsError:
    """Helper to create a RecordsError pointing at a records file."""
    return RecordsError(message, ErrorContext(source=path, detail=detail))
