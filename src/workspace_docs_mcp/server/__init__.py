"""MCP server implementation for Google Drive, Sheets and Docs.

Provides 26 tools:

Sheets Tools (4):
- Batch range updates
- Create a spreadsheet with initial data
- Append rows
- Cell formatting from A1 ranges

Docs Tools (7):
- Create and read documents
- Insert, append, and find/replace text
- Text styling and headings

Drive Tools (13):
- Search by query or file content
- Read, inspect, move, and batch move files
- Create folders, recursive copy, and tree listing
- Revisions, permissions, single and batch export

Authorization Tools (2):
- Consent URL and code exchange for first-time setup

Transport: Stdio (for Claude Desktop)
Authentication: OAuth 2.0 refresh token from the environment
"""

from workspace_docs_mcp.server.workspace_server import WorkspaceDocsServer, main


def create_server() -> WorkspaceDocsServer:
    """Create and configure a workspace-docs MCP server.

    Returns:
        WorkspaceDocsServer: Configured server instance ready to run.

    Example:
        >>> server = create_server()
        >>> asyncio.run(server.run())
    """
    return WorkspaceDocsServer()


__all__ = ["create_server", "WorkspaceDocsServer", "main"]
