"""Authorization helper tools.

Both tools only produce text for the operator. The running server keeps the
credentials it was started with; a new refresh token takes effect after a
restart.
"""

from workspace_docs_mcp.server.context import ToolContext
from workspace_docs_mcp.server.models import AuthCodeRequest, EmptyRequest


async def get_auth_url(ctx: ToolContext, request: EmptyRequest) -> str:
    url = ctx.oauth.get_authorization_url()
    return (
        "Please visit this URL to authorize the application:\n\n"
        f"{url}\n\n"
        "After authorizing, copy the authorization code and use the "
        "gsheets_set_auth_code tool."
    )


async def set_auth_code(ctx: ToolContext, request: AuthCodeRequest) -> str:
    """Exchange an authorization code and hand back the refresh token."""
    credentials = await ctx.oauth.exchange_code(request.code)
    if not credentials.refresh_token:
        raise ValueError("No refresh token returned. Revoke access and authorize again.")
    return (
        "Authorization successful! Please save this refresh token in your environment:\n\n"
        f"GOOGLE_REFRESH_TOKEN={credentials.refresh_token}\n\n"
        "Restart the MCP server with this environment variable set."
    )
