"""A1 notation to Sheets grid-range translation.

``A1:C3`` covers rows 1-3 and columns A-C, which the Sheets API expresses
as zero-based, half-open indices: rows [0, 3), columns [0, 3).
"""

import re

from workspace_docs_mcp.errors import ToolArgumentError
from workspace_docs_mcp.server.models import GridRange

A1_RANGE_PATTERN = re.compile(
    r"^(?:(?:'(?P<quoted>(?:[^']|'')+)'|(?P<bare>[^!']+))!)?"
    r"(?P<start_col>[A-Z]+)(?P<start_row>\d+):(?P<end_col>[A-Z]+)(?P<end_row>\d+)$"
)


def column_to_index(column: str) -> int:
    """Convert column letters to a zero-based index (A -> 0, Z -> 25, AA -> 26)."""
    result = 0
    for char in column:
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def a1_to_grid_range(a1_range: str) -> GridRange:
    """Translate an A1 range such as ``A1:C3`` or ``'My Sheet'!B2:D4``.

    Raises:
        ToolArgumentError: If the range is malformed, uses a zero row, or
            ends before it starts.
    """
    match = A1_RANGE_PATTERN.match(a1_range.strip()) if isinstance(a1_range, str) else None
    if not match:
        raise ToolArgumentError(f"Invalid A1 range: {a1_range}")

    try:
        start_row = int(match["start_row"])
        end_row = int(match["end_row"])
    except ValueError:
        raise ToolArgumentError(f"Invalid A1 range: {a1_range}") from None
    start_col = column_to_index(match["start_col"])
    end_col = column_to_index(match["end_col"])

    if start_row < 1 or end_row < start_row or end_col < start_col:
        raise ToolArgumentError(f"Invalid A1 range: {a1_range}")

    sheet_name = match["bare"]
    if match["quoted"] is not None:
        sheet_name = match["quoted"].replace("''", "'")

    return GridRange(
        start_row_index=start_row - 1,
        end_row_index=end_row,
        start_column_index=start_col,
        end_column_index=end_col + 1,
        sheet_name=sheet_name,
    )
