"""Typed tool requests and shared result shapes.

Each tool has exactly one request model, produced by its parser in
``validators``. Models are frozen: a handler never mutates its request.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

ExportFormat = Literal["pdf", "docx", "xlsx", "pptx"]

EXPORT_MIME_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}


class _Request(BaseModel):
    model_config = {"frozen": True}


# =============================================================================
# Spreadsheets
# =============================================================================


class GridRange(BaseModel):
    """Zero-based, half-open cell rectangle.

    ``sheet_name`` is set when the A1 range carried a ``Sheet!`` prefix and
    must be resolved to a sheetId before use.
    """

    model_config = {"frozen": True}

    start_row_index: int
    end_row_index: int
    start_column_index: int
    end_column_index: int
    sheet_name: str | None = None

    def to_api(self, sheet_id: int | None = None) -> dict[str, int]:
        """Render as a Sheets API GridRange."""
        grid: dict[str, int] = {
            "startRowIndex": self.start_row_index,
            "endRowIndex": self.end_row_index,
            "startColumnIndex": self.start_column_index,
            "endColumnIndex": self.end_column_index,
        }
        if sheet_id is not None:
            grid["sheetId"] = sheet_id
        return grid


class RangeUpdate(_Request):
    range: str
    values: list[list[Any]]


class BatchUpdateRequest(_Request):
    spreadsheet_id: str
    updates: list[RangeUpdate]


class CreateSpreadsheetRequest(_Request):
    title: str
    sheet_title: str = "Sheet1"
    data: list[list[Any]] = Field(default_factory=list)
    parent_folder_id: str | None = None


class AppendRowsRequest(_Request):
    spreadsheet_id: str
    range: str
    values: list[list[Any]]


class CellFormatRequest(_Request):
    range: str
    grid_range: GridRange
    format: dict[str, Any]


class FormatCellsRequest(_Request):
    spreadsheet_id: str
    requests: list[CellFormatRequest]


# =============================================================================
# Documents
# =============================================================================


class TextFormat(_Request):
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    font_size: float | None = None

    def to_api(self) -> dict[str, Any]:
        """Render as a Docs API TextStyle."""
        style: dict[str, Any] = {}
        if self.bold is not None:
            style["bold"] = self.bold
        if self.italic is not None:
            style["italic"] = self.italic
        if self.underline is not None:
            style["underline"] = self.underline
        if self.font_size is not None:
            style["fontSize"] = {"magnitude": self.font_size, "unit": "PT"}
        return style

    def to_output(self) -> dict[str, Any]:
        """Echo the format in the caller's field names."""
        output = self.model_dump(exclude_none=True)
        if "font_size" in output:
            output["fontSize"] = output.pop("font_size")
        return output


class CreateDocumentRequest(_Request):
    title: str
    content: str = ""
    parent_folder_id: str | None = None


class DocumentIdRequest(_Request):
    document_id: str


class InsertTextRequest(_Request):
    document_id: str
    text: str
    index: int | None = None


class ReplaceTextRequest(_Request):
    document_id: str
    find: str
    replace: str


class FormatTextRequest(_Request):
    document_id: str
    start_index: int
    end_index: int
    format: TextFormat


class SetHeadingRequest(_Request):
    document_id: str
    start_index: int
    end_index: int
    heading_level: int


# =============================================================================
# Drive
# =============================================================================


class DriveSearchRequest(_Request):
    query: str
    page_size: int = 10
    page_token: str | None = None


class FileIdRequest(_Request):
    file_id: str


class MoveFileRequest(_Request):
    file_id: str
    target_folder_id: str


class BatchMoveRequest(_Request):
    file_ids: list[str]
    target_folder_id: str


class CreateFolderRequest(_Request):
    name: str
    parent_folder_id: str | None = None


class CopyFolderRequest(_Request):
    source_folder_id: str
    target_parent_folder_id: str | None = None
    new_name: str | None = None


class SearchContentRequest(_Request):
    query: str
    folder_id: str | None = None
    max_results: int = 100


class GetRevisionsRequest(_Request):
    file_id: str
    max_results: int = 20


class ExportFileRequest(_Request):
    file_id: str
    mime_type: str


class BatchExportRequest(_Request):
    file_ids: list[str]
    format: ExportFormat

    @property
    def mime_type(self) -> str:
        return EXPORT_MIME_TYPES[self.format]


class ListFolderTreeRequest(_Request):
    folder_id: str
    recursive: bool = True
    include_metadata: bool = False


# =============================================================================
# Authorization helpers
# =============================================================================


class EmptyRequest(_Request):
    pass


class AuthCodeRequest(_Request):
    code: str


# =============================================================================
# Results
# =============================================================================


class FileNode(BaseModel):
    """One entry found while walking a folder tree.

    Metadata fields stay None unless metadata was requested, and are
    omitted from the serialized output when unset.
    """

    model_config = {"frozen": True}

    id: str
    name: str
    path: str
    type: str | None = None
    size: str | None = None
    created: str | None = None
    modified: str | None = None
    owner: str | None = None
    url: str | None = None

    def to_output(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class BatchFailure(BaseModel):
    file_id: str = Field(serialization_alias="fileId")
    error: str


class BatchResult(BaseModel):
    """Per-item outcome of a best-effort batch operation.

    Every input id is recorded exactly once, in input order, in either
    ``success`` or ``failed``.
    """

    success: list[Any] = Field(default_factory=list)
    failed: list[BatchFailure] = Field(default_factory=list)

    def record_success(self, item: Any) -> None:
        self.success.append(item)

    def record_failure(self, file_id: str, error: Exception | str) -> None:
        self.failed.append(BatchFailure(file_id=file_id, error=str(error)))

    def to_output(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
