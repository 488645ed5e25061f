"""Command-line interface for docx-merge.

Provides commands for merging field data into Word templates from the terminal.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from . import Document, __version__
from .batch import DEFAULT_NAME_FIELD, merge_batch
from .errors import DocxMergeError
from .field_map import load_field_map, load_field_rows
from .merge import MergeEngine

app = typer.Typer(
    name="docx-merge",
    help="Merge field data into Word document templates from the command line.",
    no_args_is_help=True,
)

# Errors reported as "Error: ..." with exit code 1
_CLI_ERRORS = (DocxMergeError, OSError, ValueError)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docx-merge version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every merge step.")
    ] = False,
) -> None:
    """Merge field data into Word document templates from the command line."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def merge(
    template: Annotated[Path, typer.Argument(help="Path to the .docx template")],
    fields: Annotated[Path, typer.Argument(help="JSON or YAML file of field values")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Merge one set of field values into a template."""
    try:
        field_map = load_field_map(fields)
        with Document(template) as doc:
            stats = MergeEngine(field_map).run(doc)
            output_path = output or template.with_name(f"{template.stem}-merged.docx")
            doc.save(output_path)
        typer.echo(f"{stats}, saved to {output_path}")
    except _CLI_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def batch(
    template: Annotated[Path, typer.Argument(help="Path to the .docx template")],
    table: Annotated[
        Path, typer.Argument(help="CSV file, or JSON/YAML list, with one row per document")
    ],
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-d", help="Directory for merged documents")
    ] = Path("."),
    name_field: Annotated[
        str, typer.Option("--name-field", help="Field holding each document's file name")
    ] = DEFAULT_NAME_FIELD,
    stop_on_error: Annotated[
        bool, typer.Option("--stop-on-error", help="Stop at the first failing row")
    ] = False,
) -> None:
    """Create one merged document per data row."""
    try:
        rows = load_field_rows(table)
        results = merge_batch(
            template, rows, output_dir, name_field=name_field, stop_on_error=stop_on_error
        )
    except _CLI_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count
    typer.echo(f"Merged {success_count} documents ({fail_count} failed) into {output_dir}")

    if fail_count:
        for r in results:
            if not r.success:
                typer.echo(f"  Failed: row {r.row}: {r.message}", err=True)
        raise typer.Exit(1)


@app.command()
def tags(
    template: Annotated[Path, typer.Argument(help="Path to the .docx template")],
) -> None:
    """List the tags used in a template."""
    try:
        with Document(template) as doc:
            names = doc.find_tags()
    except _CLI_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()
