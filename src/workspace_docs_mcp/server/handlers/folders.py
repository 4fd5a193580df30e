"""Recursive folder copy and folder tree listing."""

import logging
from dataclasses import dataclass, field
from typing import Any

from workspace_docs_mcp.api import FOLDER_MIME_TYPE
from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.handlers.drive import escape_query_value
from workspace_docs_mcp.server.models import CopyFolderRequest, FileNode, ListFolderTreeRequest

logger = logging.getLogger(__name__)

CHILD_FIELDS = "nextPageToken, files(id,name,mimeType)"
TREE_FIELDS = "files(id,name,mimeType)"
TREE_METADATA_FIELDS = "files(id,name,mimeType,size,createdTime,modifiedTime,owners,webViewLink)"

# One listing call per folder; larger folders are truncated
TREE_PAGE_SIZE = 1000


def _children_query(folder_id: str) -> str:
    return f"'{escape_query_value(folder_id)}' in parents and trashed=false"


@dataclass
class CopyOutcome:
    """Counts for one copied folder, including everything beneath it."""

    folder_id: str
    folder_name: str
    url: str | None
    source_files_found: int = 0
    copied_files: int = 0
    copied_folders: int = 0
    errors: list[str] = field(default_factory=list)

    def absorb(self, child: "CopyOutcome") -> None:
        """Fold a copied subfolder's counts into this folder's."""
        self.copied_folders += 1 + child.copied_folders
        self.copied_files += child.copied_files
        self.errors.extend(child.errors)


async def _list_children(ctx: ToolContext, folder_id: str) -> list[dict[str, Any]]:
    children: list[dict[str, Any]] = []
    page_token = None
    while True:
        response = await ctx.drive.list_files(
            _children_query(folder_id), fields=CHILD_FIELDS, page_token=page_token
        )
        children.extend(response.get("files", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            return children


async def _copy_folder(
    ctx: ToolContext,
    source_folder_id: str,
    target_parent_folder_id: str | None,
    new_name: str | None,
) -> CopyOutcome:
    """Deep-copy one folder.

    Failing to read the source or create the destination raises; failures
    on individual children are collected and the walk continues.
    """
    source = await ctx.drive.get_file(source_folder_id, fields="id,name")
    folder_name = new_name or f"Copy of {source.get('name')}"

    metadata: dict[str, Any] = {"name": folder_name, "mimeType": FOLDER_MIME_TYPE}
    if target_parent_folder_id:
        metadata["parents"] = [target_parent_folder_id]
    new_folder = await ctx.drive.create_file(metadata, fields="id,name,webViewLink")
    new_folder_id = new_folder["id"]

    children = await _list_children(ctx, source_folder_id)
    outcome = CopyOutcome(
        folder_id=new_folder_id,
        folder_name=folder_name,
        url=new_folder.get("webViewLink"),
        source_files_found=len(children),
    )

    for child in children:
        name = child.get("name")
        try:
            if child.get("mimeType") == FOLDER_MIME_TYPE:
                outcome.absorb(await _copy_folder(ctx, child["id"], new_folder_id, None))
                continue

            copied = await ctx.drive.copy_file(
                child["id"], {"name": name, "parents": [new_folder_id]}, fields="id,name"
            )
            if copied.get("id"):
                outcome.copied_files += 1
            else:
                outcome.errors.append(f"Failed to copy {name}: No file ID returned")
        except Exception as e:
            logger.warning("Failed to copy %s: %s", name, e)
            outcome.errors.append(f"Failed to copy {name}: {e}")

    return outcome


async def copy_folder(ctx: ToolContext, request: CopyFolderRequest) -> dict[str, Any]:
    """Copy a folder and everything beneath it.

    Subfolders are named ``Copy of <name>``; files keep their names.
    """
    outcome = await _copy_folder(
        ctx, request.source_folder_id, request.target_parent_folder_id, request.new_name
    )
    result: dict[str, Any] = {
        "success": True,
        "newFolderId": outcome.folder_id,
        "newFolderName": outcome.folder_name,
        "url": outcome.url,
        "sourceFilesFound": outcome.source_files_found,
        "copiedFiles": outcome.copied_files,
        "copiedFolders": outcome.copied_folders,
    }
    if outcome.errors:
        result["errors"] = outcome.errors
    return result


async def _walk_folder(
    ctx: ToolContext, folder_id: str, path: str, request: ListFolderTreeRequest
) -> list[FileNode]:
    response = await ctx.drive.list_files(
        _children_query(folder_id),
        fields=TREE_METADATA_FIELDS if request.include_metadata else TREE_FIELDS,
        page_size=TREE_PAGE_SIZE,
    )

    nodes: list[FileNode] = []
    for item in response.get("files", []):
        if not item.get("id") or not item.get("name"):
            continue

        item_path = f"{path}/{item['name']}" if path else item["name"]
        details: dict[str, Any] = {}
        if request.include_metadata:
            owners = item.get("owners") or [{}]
            details = {
                "size": item.get("size"),
                "created": item.get("createdTime"),
                "modified": item.get("modifiedTime"),
                "owner": owners[0].get("emailAddress"),
                "url": item.get("webViewLink"),
            }
        nodes.append(
            FileNode(
                id=item["id"],
                name=item["name"],
                path=item_path,
                type=item.get("mimeType"),
                **details,
            )
        )

        if request.recursive and item.get("mimeType") == FOLDER_MIME_TYPE:
            nodes.extend(await _walk_folder(ctx, item["id"], item_path, request))

    return nodes


async def list_folder_tree(ctx: ToolContext, request: ListFolderTreeRequest) -> dict[str, Any]:
    """Flatten a folder's contents, each entry annotated with its relative path."""
    nodes = await _walk_folder(ctx, request.folder_id, "", request)
    return {
        "success": True,
        "folderId": request.folder_id,
        "totalFiles": len(nodes),
        "recursive": request.recursive,
        "includeMetadata": request.include_metadata,
        "files": [node.to_output() for node in nodes],
    }
