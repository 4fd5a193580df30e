"""Shared, immutable state handed to every tool handler."""

from dataclasses import dataclass

import httpx

from workspace_docs_mcp.api import DocsApi, DriveApi, GoogleApiClient, SheetsApi
from workspace_docs_mcp.auth import OAuthManager
from workspace_docs_mcp.config import Settings


@dataclass(frozen=True)
class ToolContext:
    """Authorized API facades built once at startup.

    Handlers receive this explicitly; there is no module-level client.
    """

    settings: Settings
    oauth: OAuthManager
    client: GoogleApiClient
    drive: DriveApi
    sheets: SheetsApi
    docs: DocsApi

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ToolContext":
        """Wire the OAuth manager and one shared HTTP client into the facades."""
        oauth = OAuthManager(settings)
        client = GoogleApiClient(oauth, transport=transport)
        return cls(
            settings=settings,
            oauth=oauth,
            client=client,
            drive=DriveApi(client),
            sheets=SheetsApi(client),
            docs=DocsApi(client),
        )

    async def close(self) -> None:
        await self.client.close()
