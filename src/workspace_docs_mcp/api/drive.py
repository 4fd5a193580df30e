"""Google Drive v3 operations used by the tool handlers."""

from typing import Any
from urllib.parse import quote

from workspace_docs_mcp.api.client import DRIVE_API_BASE, GoogleApiClient

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class DriveApi:
    """Thin async wrapper over the Drive REST endpoints.

    Every method is a single request; callers compose them.
    """

    def __init__(self, client: GoogleApiClient) -> None:
        self.client = client

    @staticmethod
    def _file_url(file_id: str, suffix: str = "") -> str:
        return f"{DRIVE_API_BASE}/files/{quote(file_id, safe='')}{suffix}"

    async def list_files(
        self,
        query: str,
        fields: str,
        page_size: int | None = None,
        page_token: str | None = None,
        order_by: str | None = None,
    ) -> dict[str, Any]:
        """files.list with a Drive query."""
        params = {
            "q": query,
            "fields": fields,
            "pageSize": page_size,
            "pageToken": page_token,
            "orderBy": order_by,
        }
        return await self.client.request("GET", f"{DRIVE_API_BASE}/files", params=params)

    async def get_file(self, file_id: str, fields: str) -> dict[str, Any]:
        """files.get returning metadata."""
        return await self.client.request("GET", self._file_url(file_id), params={"fields": fields})

    async def download_text(self, file_id: str) -> str:
        """files.get with alt=media, decoded as text."""
        response = await self.client.request_raw(
            "GET", self._file_url(file_id), params={"alt": "media"}
        )
        return response.text

    async def export_text(self, file_id: str, mime_type: str) -> str:
        """files.export decoded as text."""
        response = await self.client.request_raw(
            "GET", self._file_url(file_id, "/export"), params={"mimeType": mime_type}
        )
        return response.text

    async def export_bytes(self, file_id: str, mime_type: str) -> bytes:
        """files.export returning the raw bytes."""
        response = await self.client.request_raw(
            "GET", self._file_url(file_id, "/export"), params={"mimeType": mime_type}
        )
        return response.content

    async def update_parents(
        self,
        file_id: str,
        add_parents: str,
        remove_parents: str | None,
        fields: str,
    ) -> dict[str, Any]:
        """files.update moving a file between parents in one call."""
        params = {
            "addParents": add_parents,
            "removeParents": remove_parents or None,
            "fields": fields,
        }
        return await self.client.request("PATCH", self._file_url(file_id), params=params)

    async def create_file(self, metadata: dict[str, Any], fields: str) -> dict[str, Any]:
        """files.create with metadata only (folders)."""
        return await self.client.request(
            "POST", f"{DRIVE_API_BASE}/files", params={"fields": fields}, json_data=metadata
        )

    async def copy_file(self, file_id: str, body: dict[str, Any], fields: str) -> dict[str, Any]:
        """files.copy."""
        return await self.client.request(
            "POST", self._file_url(file_id, "/copy"), params={"fields": fields}, json_data=body
        )

    async def list_revisions(self, file_id: str, page_size: int, fields: str) -> dict[str, Any]:
        """revisions.list."""
        return await self.client.request(
            "GET",
            self._file_url(file_id, "/revisions"),
            params={"pageSize": page_size, "fields": fields},
        )

    async def list_permissions(self, file_id: str, fields: str) -> dict[str, Any]:
        """permissions.list."""
        return await self.client.request(
            "GET", self._file_url(file_id, "/permissions"), params={"fields": fields}
        )
