"""Input validation helpers for the CLI."""

from pathlib import Path

import click
from pydantic import ValidationError

from ..errors import ConfigError
from ..models import ConvertConfig
from ..paths import validate_input_path


def validate_csv_file(ctx, param, value):
    """Click callback: the argument must name an existing .csv file."""
    if value is None:
        return value
    try:
        return validate_input_path(value)
    except ConfigError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def build_config(**settings) -> ConvertConfig:
    """Build the run configuration from parsed CLI values.

    Raises:
        ConfigError: If a value fails model validation
    """
    try:
        return ConvertConfig(**settings)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e


def output_differs_from_input(input_path: Path, output_path: Path) -> None:
    """Refuse to overwrite the file being read.

    Raises:
        ConfigError: If both paths resolve to the same file
    """
    if input_path.resolve() == output_path.resolve():
        raise ConfigError(f"Output path {output_path} is the input file")


__all__ = ["build_config", "output_differs_from_input", "validate_csv_file"]
