"""Unit tests for A1 notation translation."""

import sys

import pytest

from workspace_docs_mcp.errors import ToolArgumentError
from workspace_docs_mcp.server.a1_notation import a1_to_grid_range, column_to_index


@pytest.mark.unit
class TestColumnToIndex:
    """Tests for base-26 column letters."""

    @pytest.mark.parametrize(
        ("column", "index"),
        [("A", 0), ("C", 2), ("Z", 25), ("AA", 26), ("AZ", 51), ("BA", 52), ("ZZ", 701)],
    )
    def test_should_convert_letters_to_zero_based_index(self, column: str, index: int) -> None:
        assert column_to_index(column) == index


@pytest.mark.unit
class TestA1ToGridRange:
    """Tests for a1_to_grid_range()."""

    def test_should_translate_block_range(self) -> None:
        """Verify A1:C3 covers rows [0,3) and columns [0,3)."""
        grid = a1_to_grid_range("A1:C3")

        assert grid.start_row_index == 0
        assert grid.end_row_index == 3
        assert grid.start_column_index == 0
        assert grid.end_column_index == 3
        assert grid.sheet_name is None

    def test_should_translate_single_cell_range(self) -> None:
        """Verify B2:B2 is one row by one column."""
        grid = a1_to_grid_range("B2:B2")

        assert grid.end_row_index - grid.start_row_index == 1
        assert grid.end_column_index - grid.start_column_index == 1
        assert grid.to_api() == {
            "startRowIndex": 1,
            "endRowIndex": 2,
            "startColumnIndex": 1,
            "endColumnIndex": 2,
        }

    def test_should_translate_multi_letter_columns(self) -> None:
        grid = a1_to_grid_range("AA10:AB12")

        assert (grid.start_column_index, grid.end_column_index) == (26, 28)
        assert (grid.start_row_index, grid.end_row_index) == (9, 12)

    def test_should_keep_bare_sheet_prefix(self) -> None:
        grid = a1_to_grid_range("Data!A1:B2")

        assert grid.sheet_name == "Data"

    def test_should_unescape_quoted_sheet_prefix(self) -> None:
        """Verify quoted names keep spaces and unescape doubled quotes."""
        grid = a1_to_grid_range("'Q1 ''Final'''!A1:B2")

        assert grid.sheet_name == "Q1 'Final'"

    def test_should_add_sheet_id_when_rendering(self) -> None:
        grid = a1_to_grid_range("A1:A1")

        assert grid.to_api(sheet_id=42)["sheetId"] == 42

    @pytest.mark.parametrize(
        "a1_range",
        [
            "A1",  # no colon
            "A:C",  # missing row digits
            "A1:C",
            "a1:c3",  # lowercase
            "A0:C3",  # row zero
            "C3:A1",  # end before start
            "A3:C1",
            "B1:A1",
            "",
            "1A:3C",
        ],
    )
    def test_should_reject_malformed_range(self, a1_range: str) -> None:
        """Verify malformed ranges fail instead of producing an empty range."""
        with pytest.raises(ToolArgumentError) as exc_info:
            a1_to_grid_range(a1_range)

        assert str(exc_info.value) == f"Invalid A1 range: {a1_range}"

    @pytest.mark.skipif(
        not getattr(sys, "get_int_max_str_digits", lambda: 0)(),
        reason="no int string length limit",
    )
    def test_should_reject_row_too_long_to_parse(self) -> None:
        a1_range = "A1:B" + "9" * (sys.get_int_max_str_digits() + 1)

        with pytest.raises(ToolArgumentError, match="^Invalid A1 range: A1:B9"):
            a1_to_grid_range(a1_range)
