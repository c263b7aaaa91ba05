"""csvjson CLI entry point."""

import sys
from pathlib import Path

import click

from .. import __version__
from ..core.pipeline import convert
from ..errors import ConfigError, CsvJsonError
from ..models import Separator
from ..paths import derive_output_path
from .helpers import log_level, stderr_logging
from .validation import (
    build_config,
    output_differs_from_input,
    validate_csv_file,
)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument(
    "csv_file",
    type=click.Path(dir_okay=False, path_type=Path),
    callback=validate_csv_file,
)
@click.option(
    "--separator",
    type=click.Choice([s.value for s in Separator]),
    default=Separator.COMMA.value,
    show_default=True,
    envvar="CSVJSON_SEPARATOR",
    help="Column separator",
)
@click.option(
    "--pretty/--compact",
    default=False,
    envvar="CSVJSON_PRETTY",
    help="Generate pretty JSON (default: compact)",
)
@click.option(
    "--sort-keys", is_flag=True, help="Sort object keys by column name"
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: CSV_FILE with a .json extension)",
)
@click.option(
    "--encoding",
    default="utf-8-sig",
    show_default=True,
    help="Input file encoding",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress output (skipped-row warnings still shown)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="csvjson")
def cli(csv_file, separator, pretty, sort_keys, output, encoding, quiet, verbose):
    """Convert CSV_FILE to a JSON array of records.

    Rows are streamed one at a time, so files of any size convert in
    constant memory. Rows whose column count does not match the header
    are reported and skipped.

    Example:
        csvjson data.csv                          # writes data.json
        csvjson --separator semicolon --pretty data.csv
    """
    output_path = output or derive_output_path(csv_file)
    try:
        output_differs_from_input(csv_file, output_path)
        config = build_config(
            input_path=csv_file,
            separator=separator,
            pretty=pretty,
            sort_keys=sort_keys,
            encoding=encoding,
            output_path=output_path,
        )
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    with stderr_logging(log_level(verbose)):
        if not quiet:
            click.echo("Writing JSON file...")
        try:
            result = convert(config)
        except CsvJsonError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if not quiet:
        message = f"Completed! {result.records_written} records written to {result.output_path}"
        if result.rows_skipped:
            message += f" ({result.rows_skipped} rows skipped)"
        click.echo(message)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
