import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dynaform.core.errors import make_config_error
from dynaform.core.ir import DEFAULT_SECTION_NAME, CriteriaDialect
from dynaform.core.records import DEFAULT_METADATA_OBJECT

CONFIG_FILENAME = "dynaform.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CriteriaConfig:
    """Criteria language configuration."""

    dialect: CriteriaDialect = CriteriaDialect.NAME  # positional is legacy


@dataclass
class SchemaConfig:
    """Schema building configuration."""

    default_section: str = DEFAULT_SECTION_NAME
    metadata_object: str = DEFAULT_METADATA_OBJECT


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str = ".dynaform/logs"

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)


@dataclass
class FormConfig:
    criteria: CriteriaConfig = field(default_factory=CriteriaConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def find_config(start: Path | None = None) -> Path | None:
    """Return dynaform.toml in the given (or current) directory, if present."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _table(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise make_config_error(f"[{name}] must be a table", path, key=name)
    return value


def _string(
    table: dict[str, Any], section: str, key: str, default: str, path: Path, required: bool = False
) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise make_config_error(
            f"{key} must be a string, got {type(value).__name__}", path, key=f"{section}.{key}"
        )
    if required and not value.strip():
        raise make_config_error(f"{key} must not be empty", path, key=f"{section}.{key}")
    return value


def load_config(path: Path) -> FormConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_config_error(f"Cannot read config: {e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e

    criteria_data = _table(data, "criteria", path)
    schema_data = _table(data, "schema", path)
    logging_data = _table(data, "logging", path)

    dialect_name = _string(
        criteria_data, "criteria", "dialect", CriteriaDialect.NAME.value, path
    ).lower()
    try:
        dialect = CriteriaDialect(dialect_name)
    except ValueError:
        choices = ", ".join(d.value for d in CriteriaDialect)
        raise make_config_error(
            f"Unknown criteria dialect {dialect_name!r} (expected one of: {choices})",
            path,
            key="criteria.dialect",
        ) from None

    level = _string(logging_data, "logging", "level", "INFO", path).upper()
    if level not in _LOG_LEVELS:
        raise make_config_error(f"Unknown log level {level!r}", path, key="logging.level")

    return FormConfig(
        criteria=CriteriaConfig(dialect=dialect),
        schema=SchemaConfig(
            default_section=_string(
                schema_data, "schema", "default_section", DEFAULT_SECTION_NAME, path, required=True
            ),
            metadata_object=_string(
                schema_data, "schema", "metadata_object", DEFAULT_METADATA_OBJECT, path,
                required=True,
            ),
        ),
        logging=LoggingConfig(
            level=level,
            log_dir=_string(logging_data, "logging", "log_dir", ".dynaform/logs", path),
        ),
    )
