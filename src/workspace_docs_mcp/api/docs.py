"""Google Docs v1 operations used by the tool handlers."""

from typing import Any
from urllib.parse import quote

from workspace_docs_mcp.api.client import DOCS_API_BASE, GoogleApiClient


class DocsApi:
    """Thin async wrapper over the Docs REST endpoints."""

    def __init__(self, client: GoogleApiClient) -> None:
        self.client = client

    @staticmethod
    def _document_url(document_id: str, suffix: str = "") -> str:
        return f"{DOCS_API_BASE}/documents/{quote(document_id, safe='')}{suffix}"

    async def create(self, title: str) -> dict[str, Any]:
        """documents.create."""
        return await self.client.request(
            "POST", f"{DOCS_API_BASE}/documents", json_data={"title": title}
        )

    async def get(self, document_id: str) -> dict[str, Any]:
        """documents.get."""
        return await self.client.request("GET", self._document_url(document_id))

    async def batch_update(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """documents.batchUpdate."""
        return await self.client.request(
            "POST",
            self._document_url(document_id, ":batchUpdate"),
            json_data={"requests": requests},
        )


def document_end_index(document: dict[str, Any]) -> int:
    """Index just before the trailing newline of the document body.

    Docs bodies always end with a newline that cannot be written past, so
    the insertion point is the largest ``endIndex - 1`` (at least 1).
    """
    end_index = 1
    for element in document.get("body", {}).get("content", []):
        if element.get("endIndex"):
            end_index = max(end_index, element["endIndex"] - 1)
    return end_index


def extract_document_text(document: dict[str, Any]) -> str:
    """Concatenate the text runs of every body paragraph."""
    text_parts = []
    for element in document.get("body", {}).get("content", []):
        for para_element in element.get("paragraph", {}).get("elements", []):
            content = para_element.get("textRun", {}).get("content")
            if content:
                text_parts.append(content)
    return "".join(text_parts)
