"""Integration tests for the Workspace Docs MCP server.

Tools are invoked through the registered MCP request handlers, so each call
runs the full path: dispatch, validation, handler, API facade and the shared
httpx client. Google is simulated with httpx.MockTransport.
"""

import json
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from mcp import types

from workspace_docs_mcp.config import Settings
from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.workspace_server import WorkspaceDocsServer


class FakeGoogle:
    """Routes requests to canned JSON responses keyed by (method, path)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, **kwargs: Any) -> None:
        self.routes[(method, path)] = httpx.Response(status, **kwargs)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"error": {"code": 404, "message": "Not routed"}})
        return response


@pytest.fixture
def google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def server(settings: Settings, google: FakeGoogle) -> WorkspaceDocsServer:
    """Create a server whose HTTP client talks to FakeGoogle with a fixed token."""
    context = ToolContext.from_settings(settings, transport=httpx.MockTransport(google))
    token_source = AsyncMock()
    token_source.get_access_token.return_value = "mock_access_token_12345"
    context.client.token_source = token_source
    return WorkspaceDocsServer(context=context)


async def call_tool(
    server: WorkspaceDocsServer, name: str, arguments: dict[str, Any] | None
) -> types.CallToolResult:
    handler = server.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await handler(request)
    return result.root


def text_of(result: types.CallToolResult) -> str:
    assert len(result.content) == 1
    return result.content[0].text


@pytest.mark.integration
class TestServerWiring:
    """Tests for tool listing and envelope behavior through MCP."""

    @pytest.mark.asyncio
    async def test_should_list_every_tool(self, server: WorkspaceDocsServer) -> None:
        handler = server.server.request_handlers[types.ListToolsRequest]

        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert len(names) == 26
        assert "gdrive_copy_folder" in names
        assert "gsheets_set_auth_code" in names

    @pytest.mark.asyncio
    async def test_should_report_unknown_tool(self, server: WorkspaceDocsServer) -> None:
        result = await call_tool(server, "gdrive_delete_everything", {})

        assert result.isError is True
        assert text_of(result) == "Error: Unknown tool: gdrive_delete_everything"

    @pytest.mark.asyncio
    async def test_should_reject_invalid_arguments_before_any_request(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        result = await call_tool(server, "gdrive_get_file_info", {"fileId": 42})

        assert result.isError is True
        assert text_of(result) == "Error: Invalid fileId: expected non-empty string"
        assert google.requests == []

    @pytest.mark.asyncio
    async def test_should_wrap_google_errors_with_action(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        google.add(
            "GET",
            "/drive/v3/files/missing",
            status=404,
            json={"error": {"code": 404, "message": "File not found: missing."}},
        )

        result = await call_tool(server, "gdrive_get_file_info", {"fileId": "missing"})

        assert result.isError is True
        assert text_of(result) == "Error getting file info: 404 File not found: missing."

    @pytest.mark.asyncio
    async def test_should_fail_tools_when_credentials_missing(
        self, empty_settings: Settings
    ) -> None:
        """Verify the server starts unconfigured and tools name the missing variables."""
        server = WorkspaceDocsServer(settings=empty_settings)

        result = await call_tool(server, "gdrive_search", {"query": "report"})

        assert result.isError is True
        assert text_of(result).startswith("Error searching Drive: Google OAuth credentials")
        assert "GOOGLE_REFRESH_TOKEN" in text_of(result)
        await server.close()


@pytest.mark.integration
class TestToolsEndToEnd:
    """Representative tool calls from each family."""

    @pytest.mark.asyncio
    async def test_drive_search_returns_json_text(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        google.add(
            "GET",
            "/drive/v3/files",
            json={
                "files": [{"id": "f1", "name": "Q3 report", "mimeType": "text/plain"}],
                "nextPageToken": "next_1",
            },
        )

        result = await call_tool(server, "gdrive_search", {"query": "report", "pageSize": 5})

        assert result.isError is False
        payload = json.loads(text_of(result))
        assert payload["count"] == 1
        assert payload["files"][0]["name"] == "Q3 report"
        assert payload["nextPageToken"] == "next_1"

        sent = google.requests[0]
        assert sent.headers["Authorization"] == "Bearer mock_access_token_12345"
        assert sent.url.params["q"] == "fullText contains 'report'"
        assert sent.url.params["pageSize"] == "5"
        await server.close()

    @pytest.mark.asyncio
    async def test_docs_get_document_returns_plain_text(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        google.add(
            "GET",
            "/v1/documents/doc_001",
            json={
                "title": "Plan",
                "body": {
                    "content": [
                        {"paragraph": {"elements": [{"textRun": {"content": "Step one\n"}}]}}
                    ]
                },
            },
        )

        result = await call_tool(server, "gdocs_get_document", {"documentId": "doc_001"})

        assert result.isError is False
        assert text_of(result) == "Document: Plan\n\nContent:\nStep one\n"
        await server.close()

    @pytest.mark.asyncio
    async def test_sheets_append_rows(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        google.add(
            "POST",
            "/v4/spreadsheets/s1/values/Sheet1!A:C:append",
            json={"updates": {"updatedRange": "Sheet1!A4:C4", "updatedRows": 1}},
        )

        result = await call_tool(
            server,
            "gsheets_append_rows",
            {"spreadsheetId": "s1", "range": "Sheet1!A:C", "values": [["a", 1, True]]},
        )

        assert result.isError is False
        assert json.loads(text_of(result)) == {
            "success": True,
            "updatedRange": "Sheet1!A4:C4",
            "updatedRows": 1,
        }
        assert json.loads(google.requests[0].content) == {"values": [["a", 1, True]]}
        await server.close()

    @pytest.mark.asyncio
    async def test_batch_move_reports_partial_failure(
        self, server: WorkspaceDocsServer, google: FakeGoogle
    ) -> None:
        google.add("GET", "/drive/v3/files/ok", json={"id": "ok", "name": "a", "parents": ["p"]})
        google.add("PATCH", "/drive/v3/files/ok", json={"id": "ok", "parents": ["dest"]})

        result = await call_tool(
            server, "gdrive_batch_move", {"fileIds": ["ok", "gone"], "targetFolderId": "dest"}
        )

        assert result.isError is False
        payload = json.loads(text_of(result))
        assert payload["movedCount"] == 1
        assert payload["failedCount"] == 1
        assert payload["details"]["success"] == ["ok"]
        assert payload["details"]["failed"][0]["fileId"] == "gone"
        assert payload["details"]["failed"][0]["error"] == "404 Not routed"
        await server.close()
