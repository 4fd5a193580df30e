"""Unit tests for the Google API HTTP client and REST facades.

Requests go through httpx.MockTransport, so no network is used.
"""

import json
from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from workspace_docs_mcp.api import DocsApi, DriveApi, GoogleApiClient, SheetsApi
from workspace_docs_mcp.errors import GoogleApiError


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> GoogleApiClient:
    token_source = AsyncMock()
    token_source.get_access_token.return_value = "access_abc"
    return GoogleApiClient(token_source, transport=httpx.MockTransport(handler))


class Recorder:
    """Transport handler that records requests and replies with a fixed response."""

    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"ok": True})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.mark.unit
class TestGoogleApiClient:
    """Tests for GoogleApiClient requests and error mapping."""

    @pytest.mark.asyncio
    async def test_should_send_bearer_token_and_drop_none_params(self) -> None:
        recorder = Recorder()
        client = _client(recorder)

        result = await client.request(
            "GET", "https://example.test/files", params={"q": "x", "pageToken": None}
        )

        assert result == {"ok": True}
        assert recorder.last.headers["Authorization"] == "Bearer access_abc"
        assert dict(recorder.last.url.params) == {"q": "x"}
        await client.close()

    @pytest.mark.asyncio
    async def test_should_return_empty_dict_for_empty_body(self) -> None:
        client = _client(Recorder(httpx.Response(204)))

        assert await client.request("DELETE", "https://example.test/x") == {}
        await client.close()

    @pytest.mark.asyncio
    async def test_should_raise_with_google_error_message(self) -> None:
        body = {
            "error": {
                "code": 404,
                "message": "File not found: abc.",
                "errors": [{"reason": "notFound"}],
            }
        }
        client = _client(Recorder(httpx.Response(404, json=body)))

        with pytest.raises(GoogleApiError) as exc_info:
            await client.request("GET", "https://example.test/files/abc")

        assert exc_info.value.status_code == 404
        assert exc_info.value.reason == "notFound"
        assert str(exc_info.value) == "404 File not found: abc."
        await client.close()

    @pytest.mark.asyncio
    async def test_should_raise_with_oauth_error_description(self) -> None:
        body = {"error": "invalid_grant", "error_description": "Token has been revoked."}
        client = _client(Recorder(httpx.Response(400, json=body)))

        with pytest.raises(GoogleApiError, match="400 Token has been revoked."):
            await client.request("POST", "https://example.test/token")
        await client.close()

    @pytest.mark.asyncio
    async def test_should_fall_back_to_reason_phrase(self) -> None:
        client = _client(Recorder(httpx.Response(502, text="<html>bad gateway</html>")))

        with pytest.raises(GoogleApiError, match="502 Bad Gateway"):
            await client.request("GET", "https://example.test/x")
        await client.close()

    @pytest.mark.asyncio
    async def test_should_reuse_one_http_client(self) -> None:
        recorder = Recorder()
        client = _client(recorder)

        await client.request("GET", "https://example.test/a")
        first = client._http_client
        await client.request("GET", "https://example.test/b")

        assert client._http_client is first
        await client.close()
        assert client._http_client is None


@pytest.mark.unit
class TestFacades:
    """Tests for the URLs and bodies the Drive, Sheets and Docs facades send."""

    @pytest.mark.asyncio
    async def test_should_quote_file_ids_in_drive_urls(self) -> None:
        recorder = Recorder()
        drive = DriveApi(_client(recorder))

        await drive.get_file("a/b c", fields="id,name")

        assert recorder.last.url.raw_path.startswith(b"/drive/v3/files/a%2Fb%20c?")
        assert recorder.last.url.params["fields"] == "id,name"

    @pytest.mark.asyncio
    async def test_should_move_with_add_and_remove_parents(self) -> None:
        recorder = Recorder()
        drive = DriveApi(_client(recorder))

        await drive.update_parents("f1", add_parents="dest", remove_parents="", fields="id")

        assert recorder.last.method == "PATCH"
        assert dict(recorder.last.url.params) == {"addParents": "dest", "fields": "id"}

    @pytest.mark.asyncio
    async def test_should_return_exported_bytes(self) -> None:
        recorder = Recorder(httpx.Response(200, content=b"%PDF-1.4"))
        drive = DriveApi(_client(recorder))

        data = await drive.export_bytes("doc1", "application/pdf")

        assert data == b"%PDF-1.4"
        assert recorder.last.url.path == "/drive/v3/files/doc1/export"
        assert recorder.last.url.params["mimeType"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_should_append_values_user_entered(self) -> None:
        recorder = Recorder()
        sheets = SheetsApi(_client(recorder))

        await sheets.append_values("s1", "Sheet1!A:Z", [[1, "a"]])

        assert recorder.last.method == "POST"
        assert recorder.last.url.raw_path.startswith(
            b"/v4/spreadsheets/s1/values/Sheet1%21A%3AZ:append?"
        )
        assert recorder.last.url.params["valueInputOption"] == "USER_ENTERED"
        assert json.loads(recorder.last.content) == {"values": [[1, "a"]]}

    @pytest.mark.asyncio
    async def test_should_post_docs_batch_update(self) -> None:
        recorder = Recorder()
        docs = DocsApi(_client(recorder))

        await docs.batch_update("d1", [{"insertText": {"location": {"index": 1}, "text": "x"}}])

        assert str(recorder.last.url) == "https://docs.googleapis.com/v1/documents/d1:batchUpdate"
        assert json.loads(recorder.last.content)["requests"][0]["insertText"]["text"] == "x"
