"""
dynaform CLI package.

- form.py: build / evaluate / review / parse commands
- utils.py: shared helpers (version, config resolution, --set parsing)
"""

from typing import Annotated

import typer

from dynaform.cli.form import build_command, evaluate_command, parse_command, review_command
from dynaform.cli.utils import get_version, set_global_options, version_callback

app = typer.Typer(
    help="""dynaform - metadata-driven dynamic forms

Commands:
  • build     Ordered schema from a records file
  • evaluate  Apply --set edits and show visibility with diagnostics
  • review    Review payload JSON
  • parse     Parse a criteria string
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log to stderr at DEBUG level")
    ] = False,
    log: Annotated[
        bool, typer.Option("--log", help="Also write a JSONL log to the configured log_dir")
    ] = False,
) -> None:
    """dynaform CLI main callback for global options."""
    set_global_options(verbose=verbose, write_log=log)


app.command(name="build")(build_command)
app.command(name="evaluate")(evaluate_command)
app.command(name="review")(review_command)
app.command(name="parse")(parse_command)


def main() -> None:
    app()


__all__ = ["app", "main", "get_version", "version_callback"]
