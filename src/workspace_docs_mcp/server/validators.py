"""Argument parsers: raw tool arguments -> typed request models.

Each ``parse_*`` function is pure. Fields are checked in declared order and
the first violation raises ToolArgumentError naming that field, in the form
``Invalid <field>: expected <shape>``. Optional fields that are absent (or
empty) receive their documented defaults.
"""

import sys
from collections.abc import Mapping
from typing import Any, get_args

from workspace_docs_mcp.errors import ToolArgumentError
from workspace_docs_mcp.server.a1_notation import a1_to_grid_range
from workspace_docs_mcp.server.models import (
    AppendRowsRequest,
    AuthCodeRequest,
    BatchExportRequest,
    BatchMoveRequest,
    BatchUpdateRequest,
    CellFormatRequest,
    CopyFolderRequest,
    CreateDocumentRequest,
    CreateFolderRequest,
    CreateSpreadsheetRequest,
    DocumentIdRequest,
    DriveSearchRequest,
    EmptyRequest,
    ExportFileRequest,
    ExportFormat,
    FileIdRequest,
    FormatCellsRequest,
    FormatTextRequest,
    GetRevisionsRequest,
    InsertTextRequest,
    ListFolderTreeRequest,
    MoveFileRequest,
    RangeUpdate,
    ReplaceTextRequest,
    SearchContentRequest,
    SetHeadingRequest,
    TextFormat,
)

EXPORT_FORMATS: tuple[str, ...] = get_args(ExportFormat)

# =============================================================================
# Field helpers
# =============================================================================


def _invalid(field: str, shape: str) -> ToolArgumentError:
    return ToolArgumentError(f"Invalid {field}: expected {shape}")


def _require_object(arguments: Any) -> Mapping[str, Any]:
    if not isinstance(arguments, Mapping):
        raise _invalid("arguments", "object")
    return arguments


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid JSON number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # finite and representable as a double, like any JSON number
    return -sys.float_info.max <= value <= sys.float_info.max


def _is_integer(value: Any) -> bool:
    if not _is_number(value):
        return False
    return isinstance(value, int) or value.is_integer()


def _required_string(args: Mapping[str, Any], field: str) -> str:
    value = args.get(field)
    if not isinstance(value, str) or not value:
        raise _invalid(field, "non-empty string")
    return value


def _optional_string(args: Mapping[str, Any], field: str) -> str | None:
    value = args.get(field)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise _invalid(field, "string")
    return value


def _optional_positive_int(args: Mapping[str, Any], field: str, default: int) -> int:
    value = args.get(field)
    if value is None:
        return default
    if not _is_integer(value) or value < 1:
        raise _invalid(field, "positive number")
    return int(value)


def _optional_bool(args: Mapping[str, Any], field: str, default: bool) -> bool:
    value = args.get(field)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _invalid(field, "boolean")
    return value


def _is_2d_array(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(row, list) for row in value)


def _required_2d_array(args: Mapping[str, Any], field: str) -> list[list[Any]]:
    value = args.get(field)
    if not _is_2d_array(value):
        raise _invalid(field, "2D array")
    return value


def _required_id_list(args: Mapping[str, Any], field: str) -> list[str]:
    value = args.get(field)
    if (
        not isinstance(value, list)
        or not value
        or not all(isinstance(item, str) and item for item in value)
    ):
        raise _invalid(field, "non-empty array of strings")
    return list(value)


def _required_index(args: Mapping[str, Any], field: str, minimum: int, shape: str) -> int:
    value = args.get(field)
    if not _is_integer(value) or value < minimum:
        raise _invalid(field, shape)
    return int(value)


# =============================================================================
# Spreadsheets
# =============================================================================


def parse_batch_update(arguments: Any) -> BatchUpdateRequest:
    args = _require_object(arguments)
    spreadsheet_id = _required_string(args, "spreadsheetId")
    updates = args.get("updates")
    if not isinstance(updates, list):
        raise _invalid("updates", "array")

    parsed = []
    for index, update in enumerate(updates):
        if not isinstance(update, Mapping):
            raise _invalid(f"update at index {index}", "object")
        cell_range = update.get("range")
        if not isinstance(cell_range, str) or not cell_range:
            raise _invalid(f"range at index {index}", "non-empty string")
        if not _is_2d_array(update.get("values")):
            raise _invalid(f"values at index {index}", "2D array")
        parsed.append(RangeUpdate(range=cell_range, values=update["values"]))

    return BatchUpdateRequest(spreadsheet_id=spreadsheet_id, updates=parsed)


def parse_create_spreadsheet(arguments: Any) -> CreateSpreadsheetRequest:
    args = _require_object(arguments)
    title = _required_string(args, "title")
    sheet_title = _optional_string(args, "sheetTitle") or "Sheet1"
    data = args.get("data")
    if data is None:
        data = []
    elif not _is_2d_array(data):
        raise _invalid("data", "2D array")
    return CreateSpreadsheetRequest(
        title=title,
        sheet_title=sheet_title,
        data=data,
        parent_folder_id=_optional_string(args, "parentFolderId"),
    )


def parse_append_rows(arguments: Any) -> AppendRowsRequest:
    args = _require_object(arguments)
    return AppendRowsRequest(
        spreadsheet_id=_required_string(args, "spreadsheetId"),
        range=_required_string(args, "range"),
        values=_required_2d_array(args, "values"),
    )


def parse_format_cells(arguments: Any) -> FormatCellsRequest:
    """Parse formatting requests, translating each A1 range up front.

    A malformed range fails here, before any remote call is attempted.
    """
    args = _require_object(arguments)
    spreadsheet_id = _required_string(args, "spreadsheetId")
    requests = args.get("requests")
    if not isinstance(requests, list):
        raise _invalid("requests", "array")

    parsed = []
    for index, request in enumerate(requests):
        if not isinstance(request, Mapping):
            raise _invalid(f"request at index {index}", "object")
        cell_range = request.get("range")
        if not isinstance(cell_range, str) or not cell_range:
            raise _invalid(f"range at index {index}", "non-empty string")
        cell_format = request.get("format")
        if not isinstance(cell_format, Mapping) or not cell_format:
            raise _invalid(f"format at index {index}", "non-empty object")
        parsed.append(
            CellFormatRequest(
                range=cell_range,
                grid_range=a1_to_grid_range(cell_range),
                format=dict(cell_format),
            )
        )

    return FormatCellsRequest(spreadsheet_id=spreadsheet_id, requests=parsed)


# =============================================================================
# Documents
# =============================================================================


def parse_create_document(arguments: Any) -> CreateDocumentRequest:
    args = _require_object(arguments)
    title = _required_string(args, "title")
    content = args.get("content")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        raise _invalid("content", "string")
    return CreateDocumentRequest(
        title=title,
        content=content,
        parent_folder_id=_optional_string(args, "parentFolderId"),
    )


def parse_document_id(arguments: Any) -> DocumentIdRequest:
    args = _require_object(arguments)
    return DocumentIdRequest(document_id=_required_string(args, "documentId"))


def parse_insert_text(arguments: Any) -> InsertTextRequest:
    """Parse insert/append arguments; a missing index means end of document."""
    args = _require_object(arguments)
    document_id = _required_string(args, "documentId")
    text = _required_string(args, "text")
    index = None
    if args.get("index") is not None:
        index = _required_index(args, "index", 1, "number >= 1")
    return InsertTextRequest(document_id=document_id, text=text, index=index)


def parse_replace_text(arguments: Any) -> ReplaceTextRequest:
    args = _require_object(arguments)
    document_id = _required_string(args, "documentId")
    find = _required_string(args, "find")
    replace = args.get("replace")
    if not isinstance(replace, str):
        raise _invalid("replace", "string")
    return ReplaceTextRequest(document_id=document_id, find=find, replace=replace)


def _parse_text_range(args: Mapping[str, Any]) -> tuple[str, int, int]:
    document_id = _required_string(args, "documentId")
    start_index = _required_index(args, "startIndex", 0, "non-negative number")
    end_index = _required_index(
        args, "endIndex", start_index + 1, "number greater than startIndex"
    )
    return document_id, start_index, end_index


def _parse_text_format(value: Any) -> TextFormat:
    if not isinstance(value, Mapping):
        raise _invalid("format", "object")
    for key in ("bold", "italic", "underline"):
        if value.get(key) is not None and not isinstance(value[key], bool):
            raise _invalid(f"format.{key}", "boolean")
    font_size = value.get("fontSize")
    if font_size is not None and (not _is_number(font_size) or font_size <= 0):
        raise _invalid("format.fontSize", "positive number")
    text_format = TextFormat(
        bold=value.get("bold"),
        italic=value.get("italic"),
        underline=value.get("underline"),
        font_size=font_size,
    )
    if not text_format.to_api():
        raise _invalid("format", "at least one of: bold, italic, underline, fontSize")
    return text_format


def parse_format_text(arguments: Any) -> FormatTextRequest:
    args = _require_object(arguments)
    document_id, start_index, end_index = _parse_text_range(args)
    return FormatTextRequest(
        document_id=document_id,
        start_index=start_index,
        end_index=end_index,
        format=_parse_text_format(args.get("format")),
    )


def parse_set_heading(arguments: Any) -> SetHeadingRequest:
    args = _require_object(arguments)
    document_id, start_index, end_index = _parse_text_range(args)
    level = args.get("headingLevel")
    if not _is_integer(level) or not 1 <= level <= 6:
        raise _invalid("headingLevel", "number between 1 and 6")
    return SetHeadingRequest(
        document_id=document_id,
        start_index=start_index,
        end_index=end_index,
        heading_level=int(level),
    )


# =============================================================================
# Drive
# =============================================================================


def parse_drive_search(arguments: Any) -> DriveSearchRequest:
    args = _require_object(arguments)
    return DriveSearchRequest(
        query=_required_string(args, "query"),
        page_size=_optional_positive_int(args, "pageSize", 10),
        page_token=_optional_string(args, "pageToken"),
    )


def parse_file_id(arguments: Any) -> FileIdRequest:
    args = _require_object(arguments)
    return FileIdRequest(file_id=_required_string(args, "fileId"))


def parse_move_file(arguments: Any) -> MoveFileRequest:
    args = _require_object(arguments)
    return MoveFileRequest(
        file_id=_required_string(args, "fileId"),
        target_folder_id=_required_string(args, "targetFolderId"),
    )


def parse_batch_move(arguments: Any) -> BatchMoveRequest:
    args = _require_object(arguments)
    return BatchMoveRequest(
        file_ids=_required_id_list(args, "fileIds"),
        target_folder_id=_required_string(args, "targetFolderId"),
    )


def parse_create_folder(arguments: Any) -> CreateFolderRequest:
    args = _require_object(arguments)
    return CreateFolderRequest(
        name=_required_string(args, "name"),
        parent_folder_id=_optional_string(args, "parentFolderId"),
    )


def parse_copy_folder(arguments: Any) -> CopyFolderRequest:
    args = _require_object(arguments)
    return CopyFolderRequest(
        source_folder_id=_required_string(args, "sourceFolderId"),
        target_parent_folder_id=_optional_string(args, "targetParentFolderId"),
        new_name=_optional_string(args, "newName"),
    )


def parse_search_content(arguments: Any) -> SearchContentRequest:
    args = _require_object(arguments)
    return SearchContentRequest(
        query=_required_string(args, "query"),
        folder_id=_optional_string(args, "folderId"),
        max_results=_optional_positive_int(args, "maxResults", 100),
    )


def parse_get_revisions(arguments: Any) -> GetRevisionsRequest:
    args = _require_object(arguments)
    return GetRevisionsRequest(
        file_id=_required_string(args, "fileId"),
        max_results=_optional_positive_int(args, "maxResults", 20),
    )


def parse_export_file(arguments: Any) -> ExportFileRequest:
    args = _require_object(arguments)
    return ExportFileRequest(
        file_id=_required_string(args, "fileId"),
        mime_type=_required_string(args, "mimeType"),
    )


def parse_batch_export(arguments: Any) -> BatchExportRequest:
    args = _require_object(arguments)
    file_ids = _required_id_list(args, "fileIds")
    export_format = args.get("format")
    if export_format not in EXPORT_FORMATS:
        raise _invalid("format", f"one of: {', '.join(EXPORT_FORMATS)}")
    return BatchExportRequest(file_ids=file_ids, format=export_format)


def parse_list_folder_tree(arguments: Any) -> ListFolderTreeRequest:
    args = _require_object(arguments)
    return ListFolderTreeRequest(
        folder_id=_required_string(args, "folderId"),
        recursive=_optional_bool(args, "recursive", True),
        include_metadata=_optional_bool(args, "includeMetadata", False),
    )


# =============================================================================
# Authorization helpers
# =============================================================================


def parse_no_arguments(arguments: Any) -> EmptyRequest:
    if arguments is not None and not isinstance(arguments, Mapping):
        raise _invalid("arguments", "object")
    return EmptyRequest()


def parse_auth_code(arguments: Any) -> AuthCodeRequest:
    args = _require_object(arguments)
    return AuthCodeRequest(code=_required_string(args, "code"))
