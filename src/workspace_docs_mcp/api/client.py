"""Authenticated HTTP client for Google REST APIs."""

import logging
from typing import Any, Protocol

import httpx

from workspace_docs_mcp.errors import GoogleApiError

logger = logging.getLogger(__name__)

# Google API base URLs
DRIVE_API_BASE = "https://www.googleapis.com/drive/v3"
SHEETS_API_BASE = "https://sheets.googleapis.com/v4"
DOCS_API_BASE = "https://docs.googleapis.com/v1"


class AccessTokenSource(Protocol):
    """Anything that can hand out a bearer token (OAuthManager in practice)."""

    async def get_access_token(self) -> str: ...


class GoogleApiClient:
    """Shared, lazily created httpx client that authorizes every request.

    Requests are issued one at a time by the handlers; there is no retry or
    backoff here. Non-success responses raise GoogleApiError carrying the
    message Google returned.

    Attributes:
        token_source: Provider of bearer access tokens.
    """

    def __init__(
        self,
        token_source: AccessTokenSource,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token_source: Provider of bearer access tokens.
            transport: Optional transport override (used by tests).
        """
        self.token_source = token_source
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling.

        Returns:
            Shared httpx.AsyncClient instance.
        """
        if self._http_client is None:
            if self._transport is not None:
                self._http_client = httpx.AsyncClient(transport=self._transport)
            else:
                self._http_client = httpx.AsyncClient(
                    http2=True,
                    limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                    timeout=httpx.Timeout(60.0, connect=10.0),
                )
        return self._http_client

    async def close(self) -> None:
        """Close the shared HTTP client and release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def request_raw(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make an authenticated HTTP request returning the raw response.

        Args:
            method: HTTP method (GET, POST, etc.).
            url: Full URL to request.
            params: Optional query parameters; None values are dropped.
            json_data: Optional JSON body data.

        Returns:
            Raw httpx.Response object.

        Raises:
            GoogleApiError: If Google returns a non-success status.
        """
        access_token = await self.token_source.get_access_token()
        client = await self._get_http_client()

        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("API: %s %s params=%s", method, url, clean_params)

        response = await client.request(
            method=method,
            url=url,
            params=clean_params or None,
            json=json_data,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.is_error:
            raise self._error_from_response(response)
        return response

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request and decode the JSON body.

        Returns:
            JSON response as a dictionary (empty for bodiless responses).
        """
        response = await self.request_raw(method, url, params=params, json_data=json_data)
        if not response.content:
            return {}
        result: dict[str, Any] = response.json()
        return result

    @staticmethod
    def _error_from_response(response: httpx.Response) -> GoogleApiError:
        try:
            body = response.json()
        except ValueError:
            body = None
        return GoogleApiError.from_response_body(
            response.status_code, body, response.reason_phrase or "Request failed"
        )
