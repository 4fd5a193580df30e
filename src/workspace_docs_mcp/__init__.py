"""MCP server for Google Drive, Sheets and Docs."""

from workspace_docs_mcp.__version__ import __version__

__all__ = ["__version__"]
