"""Google Docs tool handlers."""

from typing import Any

from workspace_docs_mcp.api.docs import document_end_index, extract_document_text
from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.handlers.drive import move_to_folder
from workspace_docs_mcp.server.models import (
    CreateDocumentRequest,
    DocumentIdRequest,
    FormatTextRequest,
    InsertTextRequest,
    ReplaceTextRequest,
    SetHeadingRequest,
)

DOCUMENT_URL = "https://docs.google.com/document/d/{document_id}/edit"


def _insert_text(index: int, text: str) -> dict[str, Any]:
    return {"insertText": {"location": {"index": index}, "text": text}}


async def _end_of_document(ctx: ToolContext, document_id: str) -> int:
    document = await ctx.docs.get(document_id)
    return document_end_index(document)


async def create_document(ctx: ToolContext, request: CreateDocumentRequest) -> dict[str, Any]:
    """Create a document, insert initial text if any, then optionally reparent it."""
    document = await ctx.docs.create(request.title)
    document_id = document["documentId"]

    if request.content.strip():
        await ctx.docs.batch_update(document_id, [_insert_text(1, request.content)])

    if request.parent_folder_id:
        await move_to_folder(ctx, document_id, request.parent_folder_id)

    return {
        "success": True,
        "documentId": document_id,
        "url": DOCUMENT_URL.format(document_id=document_id),
        "title": request.title,
        "parentFolderId": request.parent_folder_id or "root",
    }


async def get_document(ctx: ToolContext, request: DocumentIdRequest) -> str:
    document = await ctx.docs.get(request.document_id)
    text = extract_document_text(document)
    return f"Document: {document.get('title')}\n\nContent:\n{text}"


async def insert_text(ctx: ToolContext, request: InsertTextRequest) -> dict[str, Any]:
    """Insert at the given index, or at the end of the document when none is given."""
    index = request.index
    if index is None:
        index = await _end_of_document(ctx, request.document_id)

    await ctx.docs.batch_update(request.document_id, [_insert_text(index, request.text)])
    return {"success": True, "insertedAt": index, "textLength": len(request.text)}


async def append_text(ctx: ToolContext, request: InsertTextRequest) -> dict[str, Any]:
    index = await _end_of_document(ctx, request.document_id)
    await ctx.docs.batch_update(request.document_id, [_insert_text(index, request.text)])
    return {"success": True, "appendedAt": index, "textLength": len(request.text)}


async def replace_text(ctx: ToolContext, request: ReplaceTextRequest) -> dict[str, Any]:
    """Case-sensitive replace of every occurrence."""
    response = await ctx.docs.batch_update(
        request.document_id,
        [
            {
                "replaceAllText": {
                    "containsText": {"text": request.find, "matchCase": True},
                    "replaceText": request.replace,
                }
            }
        ],
    )
    replies = response.get("replies") or [{}]
    replacements = replies[0].get("replaceAllText", {}).get("occurrencesChanged", 0)
    return {
        "success": True,
        "replacements": replacements,
        "find": request.find,
        "replace": request.replace,
    }


async def format_text(ctx: ToolContext, request: FormatTextRequest) -> dict[str, Any]:
    text_style = request.format.to_api()
    await ctx.docs.batch_update(
        request.document_id,
        [
            {
                "updateTextStyle": {
                    "range": {"startIndex": request.start_index, "endIndex": request.end_index},
                    "textStyle": text_style,
                    "fields": ",".join(text_style),
                }
            }
        ],
    )
    return {
        "success": True,
        "formattedRange": f"{request.start_index}-{request.end_index}",
        "appliedFormat": request.format.to_output(),
    }


async def set_heading(ctx: ToolContext, request: SetHeadingRequest) -> dict[str, Any]:
    await ctx.docs.batch_update(
        request.document_id,
        [
            {
                "updateParagraphStyle": {
                    "range": {"startIndex": request.start_index, "endIndex": request.end_index},
                    "paragraphStyle": {"namedStyleType": f"HEADING_{request.heading_level}"},
                    "fields": "namedStyleType",
                }
            }
        ],
    )
    return {
        "success": True,
        "headingLevel": request.heading_level,
        "formattedRange": f"{request.start_index}-{request.end_index}",
    }
