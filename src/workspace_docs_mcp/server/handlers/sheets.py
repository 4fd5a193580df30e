"""Google Sheets tool handlers."""

from typing import Any

from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.handlers.drive import move_to_folder
from workspace_docs_mcp.server.models import (
    AppendRowsRequest,
    BatchUpdateRequest,
    CreateSpreadsheetRequest,
    FormatCellsRequest,
)

SPREADSHEET_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a sheet name for A1 notation (``My 'Q1'`` -> ``'My ''Q1'''``)."""
    return "'" + sheet_name.replace("'", "''") + "'"


async def batch_update(ctx: ToolContext, request: BatchUpdateRequest) -> dict[str, Any]:
    """Write several ranges in one values.batchUpdate call."""
    data = [{"range": update.range, "values": update.values} for update in request.updates]
    response = await ctx.sheets.batch_update_values(request.spreadsheet_id, data)
    return {
        "success": True,
        "updatedCells": response.get("totalUpdatedCells", 0),
        "updatedRows": response.get("totalUpdatedRows", 0),
        "updatedColumns": response.get("totalUpdatedColumns", 0),
        "updatedSheets": response.get("totalUpdatedSheets", 0),
    }


async def create_and_populate(
    ctx: ToolContext, request: CreateSpreadsheetRequest
) -> dict[str, Any]:
    """Create a spreadsheet, write its initial rows, then optionally reparent it."""
    spreadsheet = await ctx.sheets.create(request.title, request.sheet_title)
    spreadsheet_id = spreadsheet["spreadsheetId"]

    if request.data:
        await ctx.sheets.update_values(
            spreadsheet_id, f"{quote_sheet_name(request.sheet_title)}!A1", request.data
        )

    if request.parent_folder_id:
        await move_to_folder(ctx, spreadsheet_id, request.parent_folder_id)

    return {
        "success": True,
        "spreadsheetId": spreadsheet_id,
        "url": SPREADSHEET_URL.format(spreadsheet_id=spreadsheet_id),
        "rowsAdded": len(request.data),
        "parentFolderId": request.parent_folder_id or "root",
    }


async def append_rows(ctx: ToolContext, request: AppendRowsRequest) -> dict[str, Any]:
    response = await ctx.sheets.append_values(
        request.spreadsheet_id, request.range, request.values
    )
    updates = response.get("updates", {})
    return {
        "success": True,
        "updatedRange": updates.get("updatedRange"),
        "updatedRows": updates.get("updatedRows", 0),
    }


async def _resolve_sheet_ids(ctx: ToolContext, request: FormatCellsRequest) -> dict[str, int]:
    """Map sheet titles to ids, reading spreadsheet metadata only when needed."""
    if not any(item.grid_range.sheet_name for item in request.requests):
        return {}

    spreadsheet = await ctx.sheets.get_sheet_properties(request.spreadsheet_id)
    sheet_ids = {}
    for sheet in spreadsheet.get("sheets", []):
        properties = sheet.get("properties", {})
        sheet_ids[properties.get("title")] = properties.get("sheetId", 0)
    return sheet_ids


async def format_cells(ctx: ToolContext, request: FormatCellsRequest) -> dict[str, Any]:
    """Apply one repeatCell request per range.

    Ranges without a sheet prefix target the first sheet.
    """
    sheet_ids = await _resolve_sheet_ids(ctx, request)

    requests = []
    for item in request.requests:
        sheet_id = None
        sheet_name = item.grid_range.sheet_name
        if sheet_name:
            if sheet_name not in sheet_ids:
                raise ValueError(f"Sheet not found: {sheet_name}")
            sheet_id = sheet_ids[sheet_name]
        requests.append(
            {
                "repeatCell": {
                    "range": item.grid_range.to_api(sheet_id),
                    "cell": {"userEnteredFormat": item.format},
                    "fields": ",".join(f"userEnteredFormat.{key}" for key in item.format),
                }
            }
        )

    if requests:
        await ctx.sheets.batch_update(request.spreadsheet_id, requests)

    return {"success": True, "appliedFormats": len(requests)}
