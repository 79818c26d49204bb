"""
dynaform CLI utilities.

Shared helpers used across CLI commands.
"""

import platform
from pathlib import Path

import typer

import dynaform
from dynaform.core.errors import ConfigError
from dynaform.core.ir import CriteriaDialect
from dynaform.core.manifest import FormConfig, find_config, load_config
from dynaform.core.records import load_records_file
from dynaform.runtime.controller import FormController
from dynaform.runtime.logging import get_logger, setup_logging

logger = get_logger("CLI")


def get_version() -> str:
    """Get dynaform version (pyproject.toml when editable, else package metadata)."""
    return dynaform.__version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"dynaform version {get_version()}")
        typer.echo(f"  Python:   {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform: {platform.system()} {platform.release()}")
        raise typer.Exit()


def parse_value(text: str) -> bool | str | None:
    """CLI value literal: true/false -> bool, empty -> None, else the string."""
    low = text.strip().lower()
    if low == "true":
        return True
    if low == "false":
        return False
    if text == "":
        return None
    return text


def parse_assignments(assignments: list[str] | None) -> list[tuple[str, bool | str | None]]:
    """Split NAME=VALUE options into (name, value) pairs."""
    pairs = []
    for item in assignments or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected NAME=VALUE, got {item!r}", param_hint="--set")
        pairs.append((name.strip(), parse_value(value)))
    return pairs


def resolve_config(config: Path | None, dialect: str | None) -> FormConfig:
    """Load --config (or ./dynaform.toml), then apply a --dialect override."""
    path = config or find_config()
    form_config = load_config(path) if path else FormConfig()

    if dialect:
        try:
            form_config.criteria.dialect = CriteriaDialect(dialect.lower())
        except ValueError:
            choices = ", ".join(d.value for d in CriteriaDialect)
            raise typer.BadParameter(
                f"Unknown dialect {dialect!r} (expected one of: {choices})", param_hint="--dialect"
            ) from None
    return form_config


# Global options set by the main callback
_verbose = False
_write_log = False


def set_global_options(verbose: bool, write_log: bool) -> None:
    global _verbose, _write_log
    _verbose = verbose
    _write_log = write_log


def configure_logging(form_config: FormConfig) -> None:
    """
    Console logging to stderr only with --verbose (at DEBUG).

    With --log, records also go to the configured log_dir as JSONL.
    """
    log_dir = form_config.logging.log_dir if _write_log else None
    level = "DEBUG" if _verbose else form_config.logging.level
    setup_logging(log_dir=log_dir, level=level, console=_verbose)


def load_controller(
    records: Path,
    config: Path | None,
    dialect: str | None,
    assignments: list[str] | None,
) -> FormController:
    """Build a controller from a records file and apply --set edits in order."""
    try:
        form_config = resolve_config(config, dialect)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1)

    configure_logging(form_config)
    edits = parse_assignments(assignments)

    rows, errors = load_records_file(records, form_config.schema.metadata_object)
    logger.info(
        "Loaded %d records from %s",
        len(rows),
        records,
        extra={"context": {"dialect": form_config.criteria.dialect.value, "edits": len(edits)}},
    )
    controller = FormController(form_config)
    if errors:
        controller.fail(errors)
        return controller

    controller.load(rows)
    for name, value in edits:
        controller.edit(name, value)
    return controller
