"""Conversion settings, fixed once at startup."""

from __future__ import annotations

import codecs
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Separator(str, Enum):
    """Column separators accepted on the command line."""

    COMMA = "comma"
    SEMICOLON = "semicolon"

    @property
    def delimiter(self) -> str:
        return "," if self is Separator.COMMA else ";"


class ConvertConfig(BaseModel):
    """Immutable settings for one conversion run."""

    model_config = ConfigDict(frozen=True)

    input_path: Path
    separator: Separator = Separator.COMMA
    pretty: bool = False
    sort_keys: bool = False
    encoding: str = "utf-8-sig"
    channel_capacity: int = Field(default=1, ge=1)
    output_path: Path | None = None

    @field_validator("encoding")
    @classmethod
    def encoding_known(cls, v: str) -> str:
        """Reject encodings the codec registry does not know."""

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v


__all__ = ["ConvertConfig", "Separator"]
