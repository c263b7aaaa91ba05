"""csvjson: stream a CSV file into a JSON array."""

from .core.pipeline import convert
from .models import ConversionResult, ConvertConfig, Separator

__all__ = [
    "__version__",
    "ConversionResult",
    "ConvertConfig",
    "Separator",
    "convert",
]

__version__ = "0.1.0"
