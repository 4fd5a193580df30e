"""The tool catalogue: name, description, argument schema, validator, handler."""

from workspace_docs_mcp.server import validators
from workspace_docs_mcp.server.dispatch import ToolSpec
from workspace_docs_mcp.server.handlers import auth, docs, drive, folders, sheets

VALUES_SCHEMA = {"type": "array", "items": {"type": "array"}}

SHEETS_TOOLS = [
    ToolSpec(
        name="gsheets_batch_update",
        description="Update multiple ranges in a Google Sheet in a single API call",
        input_schema={
            "type": "object",
            "properties": {
                "spreadsheetId": {
                    "type": "string",
                    "description": "The ID of the spreadsheet to update",
                },
                "updates": {
                    "type": "array",
                    "description": "Array of range updates to perform",
                    "items": {
                        "type": "object",
                        "properties": {
                            "range": {
                                "type": "string",
                                "description": 'A1 notation range (e.g., "Sheet1!A1:C3")',
                            },
                            "values": {
                                **VALUES_SCHEMA,
                                "description": "2D array of values to insert",
                            },
                        },
                        "required": ["range", "values"],
                    },
                },
            },
            "required": ["spreadsheetId", "updates"],
        },
        validator=validators.parse_batch_update,
        handler=sheets.batch_update,
        action="updating spreadsheet",
    ),
    ToolSpec(
        name="gsheets_create_and_populate",
        description="Create a new Google Sheet and populate it with data",
        input_schema={
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Title for the new spreadsheet"},
                "sheetTitle": {
                    "type": "string",
                    "description": "Title for the first sheet tab (optional)",
                    "default": "Sheet1",
                },
                "data": {
                    **VALUES_SCHEMA,
                    "description": "2D array of data to populate the sheet",
                },
                "parentFolderId": {
                    "type": "string",
                    "description": "ID of the parent folder to create the spreadsheet in "
                    "(optional, defaults to root)",
                },
            },
            "required": ["title"],
        },
        validator=validators.parse_create_spreadsheet,
        handler=sheets.create_and_populate,
        action="creating spreadsheet",
    ),
    ToolSpec(
        name="gsheets_append_rows",
        description="Append rows to the end of a sheet",
        input_schema={
            "type": "object",
            "properties": {
                "spreadsheetId": {"type": "string", "description": "The ID of the spreadsheet"},
                "range": {
                    "type": "string",
                    "description": 'Range to append to (e.g., "Sheet1!A:Z")',
                },
                "values": {**VALUES_SCHEMA, "description": "2D array of values to append"},
            },
            "required": ["spreadsheetId", "range", "values"],
        },
        validator=validators.parse_append_rows,
        handler=sheets.append_rows,
        action="appending rows",
    ),
    ToolSpec(
        name="gsheets_format_cells",
        description="Apply formatting to cell ranges",
        input_schema={
            "type": "object",
            "properties": {
                "spreadsheetId": {"type": "string", "description": "The ID of the spreadsheet"},
                "requests": {
                    "type": "array",
                    "description": "Array of formatting requests",
                    "items": {
                        "type": "object",
                        "properties": {
                            "range": {
                                "type": "string",
                                "description": "A1 notation range to format "
                                "(e.g., \"A1:C3\" or \"'Sheet 2'!B2:D4\")",
                            },
                            "format": {
                                "type": "object",
                                "description": "Formatting options (bold, backgroundColor, etc.)",
                            },
                        },
                        "required": ["range", "format"],
                    },
                },
            },
            "required": ["spreadsheetId", "requests"],
        },
        validator=validators.parse_format_cells,
        handler=sheets.format_cells,
        action="formatting cells",
    ),
]

DOCS_TOOLS = [
    ToolSpec(
        name="gdocs_create_document",
        description="Create a new Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Title for the new document"},
                "content": {
                    "type": "string",
                    "description": "Initial content for the document (optional)",
                },
                "parentFolderId": {
                    "type": "string",
                    "description": "ID of the parent folder to create the document in "
                    "(optional, defaults to root)",
                },
            },
            "required": ["title"],
        },
        validator=validators.parse_create_document,
        handler=docs.create_document,
        action="creating document",
    ),
    ToolSpec(
        name="gdocs_get_document",
        description="Get the content of a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {
                    "type": "string",
                    "description": "The ID of the document to retrieve",
                },
            },
            "required": ["documentId"],
        },
        validator=validators.parse_document_id,
        handler=docs.get_document,
        action="getting document",
    ),
    ToolSpec(
        name="gdocs_insert_text",
        description="Insert text into a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {"type": "string", "description": "The ID of the document"},
                "text": {"type": "string", "description": "Text to insert"},
                "index": {
                    "type": "number",
                    "description": "Position to insert text (optional, defaults to end)",
                },
            },
            "required": ["documentId", "text"],
        },
        validator=validators.parse_insert_text,
        handler=docs.insert_text,
        action="inserting text",
    ),
    ToolSpec(
        name="gdocs_append_text",
        description="Append text to the end of a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {"type": "string", "description": "The ID of the document"},
                "text": {"type": "string", "description": "Text to append"},
            },
            "required": ["documentId", "text"],
        },
        validator=validators.parse_insert_text,
        handler=docs.append_text,
        action="appending text",
    ),
    ToolSpec(
        name="gdocs_replace_text",
        description="Find and replace text in a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {"type": "string", "description": "The ID of the document"},
                "find": {"type": "string", "description": "Text to find"},
                "replace": {"type": "string", "description": "Text to replace with"},
            },
            "required": ["documentId", "find", "replace"],
        },
        validator=validators.parse_replace_text,
        handler=docs.replace_text,
        action="replacing text",
    ),
    ToolSpec(
        name="gdocs_format_text",
        description="Apply formatting to text in a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {"type": "string", "description": "The ID of the document"},
                "startIndex": {"type": "number", "description": "Start index of text to format"},
                "endIndex": {"type": "number", "description": "End index of text to format"},
                "format": {
                    "type": "object",
                    "description": "Formatting options",
                    "properties": {
                        "bold": {"type": "boolean"},
                        "italic": {"type": "boolean"},
                        "underline": {"type": "boolean"},
                        "fontSize": {"type": "number"},
                    },
                },
            },
            "required": ["documentId", "startIndex", "endIndex", "format"],
        },
        validator=validators.parse_format_text,
        handler=docs.format_text,
        action="formatting text",
    ),
    ToolSpec(
        name="gdocs_set_heading",
        description="Convert text to a heading in a Google Document",
        input_schema={
            "type": "object",
            "properties": {
                "documentId": {"type": "string", "description": "The ID of the document"},
                "startIndex": {
                    "type": "number",
                    "description": "Start index of text to make a heading",
                },
                "endIndex": {
                    "type": "number",
                    "description": "End index of text to make a heading",
                },
                "headingLevel": {
                    "type": "number",
                    "description": "Heading level (1-6)",
                    "minimum": 1,
                    "maximum": 6,
                },
            },
            "required": ["documentId", "startIndex", "endIndex", "headingLevel"],
        },
        validator=validators.parse_set_heading,
        handler=docs.set_heading,
        action="setting heading",
    ),
]

AUTH_TOOLS = [
    ToolSpec(
        name="gsheets_get_auth_url",
        description="Get Google OAuth authorization URL for initial setup",
        input_schema={"type": "object", "properties": {}},
        validator=validators.parse_no_arguments,
        handler=auth.get_auth_url,
        action="generating auth URL",
    ),
    ToolSpec(
        name="gsheets_set_auth_code",
        description="Exchange authorization code for access tokens",
        input_schema={
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Authorization code from Google OAuth flow",
                },
            },
            "required": ["code"],
        },
        validator=validators.parse_auth_code,
        handler=auth.set_auth_code,
        action="exchanging code for tokens",
    ),
]

DRIVE_TOOLS = [
    ToolSpec(
        name="gdrive_search",
        description=(
            "Search for files in Google Drive. Bare search terms like 'budget' are "
            "automatically wrapped in 'fullText contains' syntax."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (e.g., \"name contains 'budget'\" or "
                    "\"mimeType = 'application/pdf'\")",
                },
                "pageSize": {
                    "type": "number",
                    "description": "Number of results per page (max 100)",
                    "default": 10,
                },
                "pageToken": {
                    "type": "string",
                    "description": "Token for the next page of results",
                },
            },
            "required": ["query"],
        },
        validator=validators.parse_drive_search,
        handler=drive.search,
        action="searching Drive",
    ),
    ToolSpec(
        name="gdrive_read_file",
        description="Read contents of a file from Google Drive",
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file to read"},
            },
            "required": ["fileId"],
        },
        validator=validators.parse_file_id,
        handler=drive.read_file,
        action="reading file",
    ),
    ToolSpec(
        name="gdrive_get_file_info",
        description="Get metadata information about a Google Drive file",
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file to get info for"},
            },
            "required": ["fileId"],
        },
        validator=validators.parse_file_id,
        handler=drive.get_file_info,
        action="getting file info",
    ),
    ToolSpec(
        name="gdrive_move_file",
        description="Move a file to a different folder in Google Drive",
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file to move"},
                "targetFolderId": {
                    "type": "string",
                    "description": "ID of the target folder to move the file to",
                },
            },
            "required": ["fileId", "targetFolderId"],
        },
        validator=validators.parse_move_file,
        handler=drive.move_file,
        action="moving file",
    ),
    ToolSpec(
        name="gdrive_batch_move",
        description="Move multiple files to a folder at once (bulk operation)",
        input_schema={
            "type": "object",
            "properties": {
                "fileIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of file IDs to move",
                },
                "targetFolderId": {"type": "string", "description": "ID of the target folder"},
            },
            "required": ["fileIds", "targetFolderId"],
        },
        validator=validators.parse_batch_move,
        handler=drive.batch_move,
        action="in batch move",
    ),
    ToolSpec(
        name="gdrive_create_folder",
        description="Create a new folder in Google Drive",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the folder to create"},
                "parentFolderId": {
                    "type": "string",
                    "description": "ID of the parent folder (optional, defaults to root)",
                },
            },
            "required": ["name"],
        },
        validator=validators.parse_create_folder,
        handler=drive.create_folder,
        action="creating folder",
    ),
    ToolSpec(
        name="gdrive_copy_folder",
        description="Recursively copy a folder and all its contents",
        input_schema={
            "type": "object",
            "properties": {
                "sourceFolderId": {"type": "string", "description": "ID of the folder to copy"},
                "targetParentFolderId": {
                    "type": "string",
                    "description": "ID of the parent folder for the copy "
                    "(optional, defaults to root)",
                },
                "newName": {
                    "type": "string",
                    "description": "Name for the copied folder "
                    '(optional, defaults to "Copy of [original name]")',
                },
            },
            "required": ["sourceFolderId"],
        },
        validator=validators.parse_copy_folder,
        handler=folders.copy_folder,
        action="copying folder",
    ),
    ToolSpec(
        name="gdrive_search_content",
        description="Search for text within file contents (fullText search)",
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Text to search for within file contents",
                },
                "folderId": {
                    "type": "string",
                    "description": "Limit search to specific folder (optional)",
                },
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of results to return (default: 100)",
                    "default": 100,
                },
            },
            "required": ["query"],
        },
        validator=validators.parse_search_content,
        handler=drive.search_content,
        action="searching content",
    ),
    ToolSpec(
        name="gdrive_get_revisions",
        description="Get version history/revisions for a file",
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file"},
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of revisions to return (default: 20)",
                    "default": 20,
                },
            },
            "required": ["fileId"],
        },
        validator=validators.parse_get_revisions,
        handler=drive.get_revisions,
        action="getting revisions",
    ),
    ToolSpec(
        name="gdrive_export_file",
        description=(
            "Export a Google Workspace file to a specific format (PDF, Word, Excel, etc.)"
        ),
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file to export"},
                "mimeType": {
                    "type": "string",
                    "description": 'Target MIME type (e.g., "application/pdf", '
                    '"application/vnd.openxmlformats-officedocument.wordprocessingml.document")',
                },
            },
            "required": ["fileId", "mimeType"],
        },
        validator=validators.parse_export_file,
        handler=drive.export_file,
        action="exporting file",
    ),
    ToolSpec(
        name="gdrive_batch_export",
        description="Export multiple files to a specific format at once",
        input_schema={
            "type": "object",
            "properties": {
                "fileIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of file IDs to export",
                },
                "format": {
                    "type": "string",
                    "enum": list(validators.EXPORT_FORMATS),
                    "description": "Export format: pdf, docx, xlsx, or pptx",
                },
            },
            "required": ["fileIds", "format"],
        },
        validator=validators.parse_batch_export,
        handler=drive.batch_export,
        action="in batch export",
    ),
    ToolSpec(
        name="gdrive_list_folder_tree",
        description="List all files in a folder, optionally recursive with metadata",
        input_schema={
            "type": "object",
            "properties": {
                "folderId": {"type": "string", "description": "ID of the folder to list"},
                "recursive": {
                    "type": "boolean",
                    "description": "Recursively list subfolders (default: true)",
                    "default": True,
                },
                "includeMetadata": {
                    "type": "boolean",
                    "description": "Include detailed metadata for each file (default: false)",
                    "default": False,
                },
            },
            "required": ["folderId"],
        },
        validator=validators.parse_list_folder_tree,
        handler=folders.list_folder_tree,
        action="listing folder tree",
    ),
    ToolSpec(
        name="gdrive_list_permissions",
        description="List all permissions (who has access) for a file or folder",
        input_schema={
            "type": "object",
            "properties": {
                "fileId": {"type": "string", "description": "ID of the file or folder"},
            },
            "required": ["fileId"],
        },
        validator=validators.parse_file_id,
        handler=drive.list_permissions,
        action="listing permissions",
    ),
]

TOOL_SPECS = SHEETS_TOOLS + DOCS_TOOLS + AUTH_TOOLS + DRIVE_TOOLS
