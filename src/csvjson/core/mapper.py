"""Pair a header row with a data row."""

from typing import Dict, Optional, Sequence

from ..errors import FormatMismatch

Record = Dict[str, str]


def map_record(
    header: Sequence[str],
    row: Sequence[str],
    line: Optional[int] = None,
) -> Record:
    """Build a record keyed by header names.

    Args:
        header: Column names, in file order
        row: Field values from one parsed data row
        line: Source line number, carried into the error for diagnostics

    Returns:
        Dict mapping header[i] to row[i], in header order

    Raises:
        FormatMismatch: If the row and header differ in length
    """
    if header is None:
        raise ValueError("header is required")

    if len(row) != len(header):
        raise FormatMismatch(row, expected=len(header), line=line)

    return dict(zip(header, row))


__all__ = ["Record", "map_record"]
