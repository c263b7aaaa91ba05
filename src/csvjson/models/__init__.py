"""Pydantic models for conversion settings and results."""

from .config import ConvertConfig, Separator
from .result import ConversionResult

__all__ = [
    "ConversionResult",
    "ConvertConfig",
    "Separator",
]
