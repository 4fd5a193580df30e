"""Async clients for the Google Drive, Sheets and Docs REST APIs."""

from workspace_docs_mcp.api.client import GoogleApiClient
from workspace_docs_mcp.api.docs import DocsApi
from workspace_docs_mcp.api.drive import FOLDER_MIME_TYPE, DriveApi
from workspace_docs_mcp.api.sheets import SheetsApi

__all__ = [
    "GoogleApiClient",
    "DriveApi",
    "SheetsApi",
    "DocsApi",
    "FOLDER_MIME_TYPE",
]
