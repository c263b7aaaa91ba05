"""Input validation and output path derivation."""

from pathlib import Path

from .errors import ConfigError

INPUT_EXTENSIONS = (".csv",)
OUTPUT_EXTENSION = ".json"


def validate_input_path(path: str | Path) -> Path:
    """Check that ``path`` names an existing CSV file.

    Raises:
        ConfigError: If the extension is not recognised or the file is missing
    """
    path = Path(path)
    if path.suffix.lower() not in INPUT_EXTENSIONS:
        raise ConfigError(f"File {path} is not CSV")
    if not path.exists():
        raise ConfigError(f"File {path} does not exist")
    if not path.is_file():
        raise ConfigError(f"{path} is not a file")
    return path


def derive_output_path(input_path: str | Path) -> Path:
    """Same directory and base name as the input, with a .json extension.

    Example:
        >>> derive_output_path("data/people.csv")
        PosixPath('data/people.json')
    """
    return Path(input_path).with_suffix(OUTPUT_EXTENSION)


__all__ = ["derive_output_path", "validate_input_path"]
