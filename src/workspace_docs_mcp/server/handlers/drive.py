"""Google Drive tool handlers."""

import base64
import logging
from typing import Any

from workspace_docs_mcp.api import FOLDER_MIME_TYPE
from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.models import (
    BatchExportRequest,
    BatchMoveRequest,
    BatchResult,
    CreateFolderRequest,
    DriveSearchRequest,
    ExportFileRequest,
    FileIdRequest,
    GetRevisionsRequest,
    MoveFileRequest,
    SearchContentRequest,
)

logger = logging.getLogger(__name__)

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"
GOOGLE_SHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

# Drive-native types that must be exported rather than downloaded
TEXT_EXPORT_MIME_TYPES = {
    GOOGLE_DOC_MIME_TYPE: "text/plain",
    GOOGLE_SHEET_MIME_TYPE: "text/csv",
}

SEARCH_FIELDS = "nextPageToken, files(id,name,mimeType,size,modifiedTime,createdTime)"
FILE_INFO_FIELDS = "id,name,mimeType,size,createdTime,modifiedTime,owners"
CONTENT_SEARCH_FIELDS = "files(id,name,mimeType,modifiedTime,webViewLink,owners)"
REVISION_FIELDS = "revisions(id,modifiedTime,lastModifyingUser,size,originalFilename,keepForever)"
PERMISSION_FIELDS = (
    "permissions(id,type,role,emailAddress,domain,displayName,expirationTime,deleted)"
)

EXPORT_PREVIEW_CHARS = 100

QUERY_OPERATORS = ["contains", "=", "!=", "<", ">", " in ", " has ", " not "]


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _without_none(item: dict[str, Any]) -> dict[str, Any]:
    """Drop fields Google did not return, so they are absent rather than null."""
    return {key: value for key, value in item.items() if value is not None}


def normalize_drive_query(query: str) -> str:
    """Wrap bare search terms in ``fullText contains``.

    Queries that already use Drive query operators pass through unchanged.
    """
    query_lower = query.lower()
    if any(op in query_lower for op in QUERY_OPERATORS):
        return query
    return f"fullText contains '{escape_query_value(query)}'"


async def move_to_folder(
    ctx: ToolContext, file_id: str, folder_id: str
) -> tuple[dict[str, Any], list[str]]:
    """Reparent a file: read its parents, then add the target and remove them all.

    Returns:
        The file metadata read before the move, and its previous parent ids.
    """
    file = await ctx.drive.get_file(file_id, fields="id,name,parents")
    previous_parents = file.get("parents", [])
    await ctx.drive.update_parents(
        file_id,
        add_parents=folder_id,
        remove_parents=",".join(previous_parents),
        fields="id,parents",
    )
    return file, previous_parents


async def search(ctx: ToolContext, request: DriveSearchRequest) -> dict[str, Any]:
    """Search Drive files by query."""
    response = await ctx.drive.list_files(
        normalize_drive_query(request.query),
        fields=SEARCH_FIELDS,
        page_size=request.page_size,
        page_token=request.page_token,
    )
    files = [
        _without_none(
            {
                "id": item.get("id"),
                "name": item.get("name"),
                "mimeType": item.get("mimeType"),
                "size": item.get("size"),
                "createdTime": item.get("createdTime"),
                "modifiedTime": item.get("modifiedTime"),
            }
        )
        for item in response.get("files", [])
    ]
    result: dict[str, Any] = {"files": files, "count": len(files)}
    if response.get("nextPageToken"):
        result["nextPageToken"] = response["nextPageToken"]
    return result


async def read_file(ctx: ToolContext, request: FileIdRequest) -> str:
    """Read a file as text.

    Google Docs export as plain text, Google Sheets as CSV, and plain text
    or JSON files are downloaded directly. Anything else is rejected.
    """
    metadata = await ctx.drive.get_file(request.file_id, fields="id,name,mimeType")
    mime_type = metadata.get("mimeType", "")

    if mime_type in TEXT_EXPORT_MIME_TYPES:
        content = await ctx.drive.export_text(request.file_id, TEXT_EXPORT_MIME_TYPES[mime_type])
    elif mime_type.startswith("text/") or mime_type == "application/json":
        content = await ctx.drive.download_text(request.file_id)
    else:
        raise ValueError(
            f"Unsupported file type: {mime_type}. "
            "Can only read text files, Google Docs, and Google Sheets."
        )

    return f"Contents of {metadata.get('name')}:\n\n{content}"


async def get_file_info(ctx: ToolContext, request: FileIdRequest) -> dict[str, Any]:
    """Read file metadata; owners are reduced to their email addresses."""
    file = await ctx.drive.get_file(request.file_id, fields=FILE_INFO_FIELDS)
    return _without_none(
        {
            "id": file.get("id"),
            "name": file.get("name"),
            "mimeType": file.get("mimeType"),
            "size": file.get("size"),
            "createdTime": file.get("createdTime"),
            "modifiedTime": file.get("modifiedTime"),
            "owners": [owner.get("emailAddress") for owner in file.get("owners", [])],
        }
    )


async def move_file(ctx: ToolContext, request: MoveFileRequest) -> dict[str, Any]:
    file, previous_parents = await move_to_folder(ctx, request.file_id, request.target_folder_id)
    return {
        "success": True,
        "fileId": request.file_id,
        "fileName": file.get("name"),
        "previousParents": previous_parents,
        "newParent": request.target_folder_id,
    }


async def batch_move(ctx: ToolContext, request: BatchMoveRequest) -> dict[str, Any]:
    """Move files one at a time; a failed move never stops the rest."""
    outcome = BatchResult()
    for file_id in request.file_ids:
        try:
            await move_to_folder(ctx, file_id, request.target_folder_id)
        except Exception as e:
            logger.warning("Failed to move %s: %s", file_id, e)
            outcome.record_failure(file_id, e)
        else:
            outcome.record_success(file_id)

    return {
        "success": True,
        "movedCount": len(outcome.success),
        "failedCount": len(outcome.failed),
        "targetFolderId": request.target_folder_id,
        "details": outcome.to_output(),
    }


async def create_folder(ctx: ToolContext, request: CreateFolderRequest) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": request.name, "mimeType": FOLDER_MIME_TYPE}
    if request.parent_folder_id:
        metadata["parents"] = [request.parent_folder_id]

    folder = await ctx.drive.create_file(metadata, fields="id,name,webViewLink")
    return {
        "success": True,
        "folderId": folder.get("id"),
        "name": folder.get("name"),
        "parentFolderId": request.parent_folder_id or "root",
        "url": folder.get("webViewLink"),
    }


async def search_content(ctx: ToolContext, request: SearchContentRequest) -> dict[str, Any]:
    """Full-text search excluding trashed files, newest first."""
    query = f"fullText contains '{escape_query_value(request.query)}' and trashed=false"
    if request.folder_id:
        query += f" and '{escape_query_value(request.folder_id)}' in parents"

    response = await ctx.drive.list_files(
        query,
        fields=CONTENT_SEARCH_FIELDS,
        page_size=request.max_results,
        order_by="modifiedTime desc",
    )
    results = []
    for item in response.get("files", []):
        owners = item.get("owners") or [{}]
        results.append(
            _without_none(
                {
                    "id": item.get("id"),
                    "name": item.get("name"),
                    "type": item.get("mimeType"),
                    "modified": item.get("modifiedTime"),
                    "url": item.get("webViewLink"),
                    "owner": owners[0].get("emailAddress"),
                }
            )
        )

    return {
        "success": True,
        "query": request.query,
        "resultCount": len(results),
        "results": results,
    }


async def get_revisions(ctx: ToolContext, request: GetRevisionsRequest) -> dict[str, Any]:
    response = await ctx.drive.list_revisions(
        request.file_id, page_size=request.max_results, fields=REVISION_FIELDS
    )
    revisions = []
    for revision in response.get("revisions", []):
        user = revision.get("lastModifyingUser") or {}
        revisions.append(
            _without_none(
                {
                    "id": revision.get("id"),
                    "modifiedTime": revision.get("modifiedTime"),
                    "modifiedBy": user.get("displayName") or user.get("emailAddress"),
                    "size": revision.get("size"),
                    "filename": revision.get("originalFilename"),
                    "keepForever": revision.get("keepForever"),
                }
            )
        )

    return {
        "success": True,
        "fileId": request.file_id,
        "revisionCount": len(revisions),
        "revisions": revisions,
    }


async def export_file(ctx: ToolContext, request: ExportFileRequest) -> dict[str, Any]:
    """Export a file and return a truncated base64 preview with its size."""
    data = await ctx.drive.export_bytes(request.file_id, request.mime_type)
    encoded = base64.b64encode(data).decode("ascii")
    return {
        "success": True,
        "fileId": request.file_id,
        "mimeType": request.mime_type,
        "sizeInBytes": len(data),
        "sizeFormatted": f"{len(data) / 1024:.2f} KB",
        "base64Data": encoded[:EXPORT_PREVIEW_CHARS] + "... (truncated for display)",
        "note": "Full base64 data available. Use this to save or process the file.",
    }


async def batch_export(ctx: ToolContext, request: BatchExportRequest) -> dict[str, Any]:
    """Export files one at a time to a single format, collecting per-file outcomes."""
    outcome = BatchResult()
    total_size = 0
    for file_id in request.file_ids:
        try:
            data = await ctx.drive.export_bytes(file_id, request.mime_type)
        except Exception as e:
            logger.warning("Failed to export %s: %s", file_id, e)
            outcome.record_failure(file_id, e)
        else:
            total_size += len(data)
            outcome.record_success({"fileId": file_id, "size": len(data)})

    return {
        "success": True,
        "format": request.format,
        "mimeType": request.mime_type,
        "exportedCount": len(outcome.success),
        "failedCount": len(outcome.failed),
        "totalSize": total_size,
        "details": outcome.to_output(),
    }


async def list_permissions(ctx: ToolContext, request: FileIdRequest) -> dict[str, Any]:
    response = await ctx.drive.list_permissions(request.file_id, fields=PERMISSION_FIELDS)
    permissions = [
        _without_none(
            {
                "id": permission.get("id"),
                "type": permission.get("type"),
                "role": permission.get("role"),
                "email": permission.get("emailAddress"),
                "domain": permission.get("domain"),
                "displayName": permission.get("displayName"),
                "expirationTime": permission.get("expirationTime"),
                "deleted": permission.get("deleted"),
            }
        )
        for permission in response.get("permissions", [])
    ]
    return {
        "success": True,
        "fileId": request.file_id,
        "permissionCount": len(permissions),
        "permissions": permissions,
    }
