"""
Form commands for dynaform CLI.

Build a schema from a records file, apply edits, and inspect visibility,
parsed criteria and review payloads.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from dynaform.cli.utils import configure_logging, load_controller
from dynaform.core.criteria import parse_criteria
from dynaform.core.errors import DynaformError
from dynaform.core.ir import CriteriaDialect, FormSchema
from dynaform.core.manifest import FormConfig
from dynaform.runtime.controller import FormController

console = Console()

RecordsArg = Annotated[
    Path,
    typer.Argument(help="JSON file: a list of metadata records, or a {data, errors} response"),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to dynaform.toml (default: ./dynaform.toml)"),
]
DialectOpt = Annotated[
    str | None,
    typer.Option("--dialect", "-d", help="Criteria dialect: 'name' or 'positional' (legacy)"),
]
SetOpt = Annotated[
    list[str] | None,
    typer.Option("--set", "-s", help="Edit NAME=VALUE (repeatable; true/false are booleans)"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: 'table' or 'json'"),
]


def _controller_or_exit(
    records: Path,
    config: Path | None,
    dialect: str | None,
    assignments: list[str] | None,
) -> FormController:
    try:
        controller = load_controller(records, config, dialect, assignments)
    except DynaformError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if controller.schema_error:
        typer.echo(f"Schema error: {controller.schema_error}", err=True)
        raise typer.Exit(code=1)
    return controller


def _print_schema_table(schema: FormSchema, show_details: bool) -> None:
    table = Table(title="Form schema")
    table.add_column("Section")
    table.add_column("Field")
    table.add_column("Kind")
    table.add_column("Order", justify="right")
    table.add_column("Value")
    table.add_column("Visible")
    if show_details:
        table.add_column("Detail")

    for section in schema.sections:
        row = [
            f"[bold]{section.name}[/bold]",
            "",
            "",
            "" if section.order is None else str(section.order),
            "",
            "yes" if section.is_visible else "[red]no[/red]",
        ]
        if show_details:
            row.append(section.visibility_detail or "")
        table.add_row(*row)

        for fld in section.fields:
            row = [
                "",
                fld.field_api_name,
                fld.kind.value,
                "" if fld.order is None else str(fld.order),
                "" if fld.value is None else str(fld.value),
                "yes" if fld.is_visible else "[red]no[/red]",
            ]
            if show_details:
                row.append(fld.visibility_detail or "")
            table.add_row(*row)

    console.print(table)


def build_command(
    records: RecordsArg,
    config: ConfigOpt = None,
    dialect: DialectOpt = None,
    format: FormatOpt = "table",
) -> None:
    """Build the ordered form schema and run the initial visibility pass."""
    controller = _controller_or_exit(records, config, dialect, None)
    if format == "json":
        typer.echo(controller.schema.model_dump_json(indent=2))
    else:
        _print_schema_table(controller.schema, show_details=False)


def evaluate_command(
    records: RecordsArg,
    assignments: SetOpt = None,
    config: ConfigOpt = None,
    dialect: DialectOpt = None,
    format: FormatOpt = "table",
) -> None:
    """Apply edits in order and show resulting visibility with diagnostics."""
    controller = _controller_or_exit(records, config, dialect, assignments)
    report = controller.last_report

    if format == "json":
        typer.echo(
            json.dumps(
                {
                    "hidden_sections": report.hidden_sections if report else [],
                    "hidden_fields": report.hidden_fields if report else [],
                    "details": report.details if report else {},
                },
                indent=2,
            )
        )
        return

    _print_schema_table(controller.schema, show_details=True)
    if report:
        console.print(
            f"{report.visible_sections} sections, {report.visible_fields} fields visible; "
            f"{report.hidden_count} hidden"
        )


def review_command(
    records: RecordsArg,
    assignments: SetOpt = None,
    config: ConfigOpt = None,
    dialect: DialectOpt = None,
) -> None:
    """Print the review payload (camelCase JSON) after applying edits."""
    controller = _controller_or_exit(records, config, dialect, assignments)
    typer.echo(json.dumps(controller.review_payload().to_dict(), indent=2))


def parse_command(
    criteria: Annotated[str, typer.Argument(help="Raw criteria string")],
    dialect: DialectOpt = None,
) -> None:
    """Parse a criteria string and print its atoms as JSON."""
    try:
        selected = CriteriaDialect((dialect or CriteriaDialect.NAME.value).lower())
    except ValueError:
        raise typer.BadParameter(f"Unknown dialect {dialect!r}", param_hint="--dialect") from None

    configure_logging(FormConfig())
    atoms = parse_criteria(criteria, selected)
    typer.echo(json.dumps([a.model_dump(exclude_none=True) for a in atoms], indent=2))
