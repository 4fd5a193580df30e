"""Google Drive, Sheets and Docs MCP server for Claude Desktop integration.

This MCP server exposes a fixed catalogue of tools over stdio. Each call is
validated, forwarded to the Google REST APIs with the credentials read from
the environment at startup, and the result returned as a single text block.

Missing credentials do not prevent startup: tools can still be listed, and
every tool that needs Google fails with a message naming what is missing.
"""

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from workspace_docs_mcp.config import Settings, configure_logging, load_settings
from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.dispatch import ToolDispatcher
from workspace_docs_mcp.server.tool_definitions import TOOL_SPECS

logger = logging.getLogger(__name__)

SERVER_NAME = "google-workspace"


class WorkspaceDocsServer:
    """MCP server for Google Drive, Sheets and Docs.

    Attributes:
        server: MCP Server instance.
        context: Immutable tool context shared by every handler.
        dispatcher: Tool registry performing validation and enveloping.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        context: ToolContext | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            settings: Configuration to use. Loaded from the environment if omitted.
            context: Prebuilt tool context (used by tests).
        """
        if context is None:
            context = ToolContext.from_settings(settings or load_settings())
        self.context = context
        self.dispatcher = ToolDispatcher(TOOL_SPECS)
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return self.dispatcher.list_tools()

        # Argument checking is done by the validators, which report
        # field-specific messages instead of raw schema errors.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
            """Handle tool calls."""
            return await self.dispatcher.call(name, arguments, self.context)

    def log_credential_status(self) -> None:
        """Log which credentials are set, never their values."""
        logger.info("Serving %d tools", len(self.dispatcher))
        for key, status in self.context.settings.credential_report().items():
            logger.info("%s: %s", key, status)
        if not self.context.oauth.is_configured:
            logger.warning(
                "Google credentials incomplete; tools calling Google will fail "
                "until they are set. Run 'workspace-docs-mcp setup'."
            )

    async def close(self) -> None:
        """Close the shared HTTP client and release resources."""
        await self.context.close()

    async def run(self) -> None:
        """Run the MCP server using stdio transport."""
        self.log_credential_status()
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.close()


def main() -> None:
    """Entry point for the Google Workspace MCP server."""
    settings = load_settings()
    configure_logging(settings.log_level)
    server = WorkspaceDocsServer(settings)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
