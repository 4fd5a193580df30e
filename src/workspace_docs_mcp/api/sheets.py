"""Google Sheets v4 operations used by the tool handlers."""

from typing import Any
from urllib.parse import quote

from workspace_docs_mcp.api.client import SHEETS_API_BASE, GoogleApiClient

VALUE_INPUT_OPTION = "USER_ENTERED"


class SheetsApi:
    """Thin async wrapper over the Sheets REST endpoints."""

    def __init__(self, client: GoogleApiClient) -> None:
        self.client = client

    @staticmethod
    def _spreadsheet_url(spreadsheet_id: str, suffix: str = "") -> str:
        return f"{SHEETS_API_BASE}/spreadsheets/{quote(spreadsheet_id, safe='')}{suffix}"

    async def create(self, title: str, sheet_title: str) -> dict[str, Any]:
        """spreadsheets.create with a single named sheet."""
        body = {
            "properties": {"title": title},
            "sheets": [{"properties": {"title": sheet_title}}],
        }
        return await self.client.request(
            "POST", f"{SHEETS_API_BASE}/spreadsheets", json_data=body
        )

    async def get_sheet_properties(self, spreadsheet_id: str) -> dict[str, Any]:
        """spreadsheets.get restricted to sheet properties."""
        return await self.client.request(
            "GET",
            self._spreadsheet_url(spreadsheet_id),
            params={"fields": "sheets.properties(sheetId,title)"},
        )

    async def update_values(
        self, spreadsheet_id: str, range_notation: str, values: list[list[Any]]
    ) -> dict[str, Any]:
        """spreadsheets.values.update."""
        url = self._spreadsheet_url(spreadsheet_id, f"/values/{quote(range_notation, safe='')}")
        return await self.client.request(
            "PUT",
            url,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            json_data={"range": range_notation, "values": values},
        )

    async def batch_update_values(
        self, spreadsheet_id: str, data: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """spreadsheets.values.batchUpdate."""
        return await self.client.request(
            "POST",
            self._spreadsheet_url(spreadsheet_id, "/values:batchUpdate"),
            json_data={"valueInputOption": VALUE_INPUT_OPTION, "data": data},
        )

    async def append_values(
        self, spreadsheet_id: str, range_notation: str, values: list[list[Any]]
    ) -> dict[str, Any]:
        """spreadsheets.values.append."""
        url = self._spreadsheet_url(
            spreadsheet_id, f"/values/{quote(range_notation, safe='')}:append"
        )
        return await self.client.request(
            "POST",
            url,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            json_data={"values": values},
        )

    async def batch_update(
        self, spreadsheet_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """spreadsheets.batchUpdate (structural and formatting requests)."""
        return await self.client.request(
            "POST",
            self._spreadsheet_url(spreadsheet_id, ":batchUpdate"),
            json_data={"requests": requests},
        )
