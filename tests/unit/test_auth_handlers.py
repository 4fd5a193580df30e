"""Unit tests for the authorization helper tools."""

from unittest.mock import MagicMock

import pytest

from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.handlers import auth
from workspace_docs_mcp.server.models import AuthCodeRequest, EmptyRequest


@pytest.mark.unit
class TestAuthHandlers:
    """Tests for get_auth_url() and set_auth_code()."""

    @pytest.mark.asyncio
    async def test_should_embed_consent_url(self, ctx: ToolContext) -> None:
        ctx.oauth.get_authorization_url.return_value = "https://accounts.google.com/consent?x=1"

        result = await auth.get_auth_url(ctx, EmptyRequest())

        assert result.startswith("Please visit this URL to authorize the application:")
        assert "https://accounts.google.com/consent?x=1" in result
        assert "gsheets_set_auth_code" in result

    @pytest.mark.asyncio
    async def test_should_return_refresh_token_line(self, ctx: ToolContext) -> None:
        ctx.oauth.exchange_code.return_value = MagicMock(refresh_token="1//new_refresh")

        result = await auth.set_auth_code(ctx, AuthCodeRequest(code="4/abc"))

        ctx.oauth.exchange_code.assert_awaited_once_with("4/abc")
        assert "GOOGLE_REFRESH_TOKEN=1//new_refresh" in result

    @pytest.mark.asyncio
    async def test_should_fail_without_refresh_token(self, ctx: ToolContext) -> None:
        """Verify a grant without a refresh token is reported, not printed as None."""
        ctx.oauth.exchange_code.return_value = MagicMock(refresh_token=None)

        with pytest.raises(ValueError, match="No refresh token returned"):
            await auth.set_auth_code(ctx, AuthCodeRequest(code="4/abc"))
