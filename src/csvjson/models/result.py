"""Summary returned by a finished conversion."""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Outcome of a successful run."""

    output_path: Path
    header: List[str] = Field(default_factory=list)
    records_written: int = 0
    rows_skipped: int = 0


__all__ = ["ConversionResult"]
