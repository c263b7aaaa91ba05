"""Pytest configuration and shared fixtures."""

import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from csvjson.cli import cli
from csvjson.models import ConvertConfig


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["data.csv"])
        result = invoke(["--separator", "semicolon", "--pretty", "data.csv"])
    """

    def _invoke(args, env=None):
        return cli_runner.invoke(cli, args, env=env)

    return _invoke


@pytest.fixture
def test_data():
    """Provide path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def copy_data(test_data, tmp_path):
    """Copy a fixture CSV into tmp_path so the derived .json lands there."""

    def _copy(name: str) -> Path:
        target = tmp_path / name
        shutil.copy(test_data / name, target)
        return target

    return _copy


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a file in tmp_path and return its path."""

    def _write(text: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def people_csv(copy_data):
    """Provide a writable copy of people.csv."""
    return copy_data("people.csv")


@pytest.fixture
def make_config():
    def _make(path, **overrides) -> ConvertConfig:
        return ConvertConfig(input_path=path, **overrides)

    return _make
