"""Command-line interface for workspace-docs-mcp."""

import asyncio
import sys

import click

from workspace_docs_mcp.__version__ import __version__


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Workspace Docs MCP Server - Connect Claude to Google Drive, Sheets and Docs.

    This tool provides 26 tools across:
    - Sheets (batch update, create, append, format)
    - Docs (create, read, edit, style)
    - Drive (search, move, copy, export, revisions, permissions)
    """
    pass


@main.command()
@click.option("--client-id", envvar="GOOGLE_CLIENT_ID", help="Google OAuth client ID")
@click.option(
    "--client-secret", envvar="GOOGLE_CLIENT_SECRET", help="Google OAuth client secret"
)
def setup(client_id: str | None, client_secret: str | None) -> None:
    """Obtain a refresh token through the browser consent flow.

    This will:
    1. Open browser for OAuth2 consent flow
    2. Receive the authorization code on the local redirect URI
    3. Print GOOGLE_REFRESH_TOKEN for you to add to your environment

    Requires:
    - GOOGLE_CLIENT_ID environment variable or --client-id option
    - GOOGLE_CLIENT_SECRET environment variable or --client-secret option
    """
    from workspace_docs_mcp.auth import OAuthManager
    from workspace_docs_mcp.config import load_settings

    if not client_id or not client_secret:
        click.echo("❌ Error: OAuth client credentials required")
        click.echo("")
        click.echo("Set environment variables:")
        click.echo("  export GOOGLE_CLIENT_ID='your-client-id'")
        click.echo("  export GOOGLE_CLIENT_SECRET='your-client-secret'")
        click.echo("")
        click.echo("Or pass as options:")
        click.echo("  workspace-docs-mcp setup --client-id=... --client-secret=...")
        sys.exit(1)

    settings = load_settings().model_copy(
        update={"client_id": client_id, "client_secret": client_secret}
    )
    manager = OAuthManager(settings)

    click.echo("Starting OAuth authentication flow...")
    click.echo("Browser will open for Google consent...")
    click.echo(f"Listening for the redirect on {settings.redirect_uri}")
    click.echo("")

    try:
        credentials = asyncio.run(manager.authenticate())
    except Exception as e:
        click.echo(f"❌ Authentication failed: {e}")
        sys.exit(1)

    if not credentials.refresh_token:
        click.echo("❌ Google did not return a refresh token.")
        click.echo("Revoke the app's access in your Google account and run setup again.")
        sys.exit(1)

    click.echo("✓ Authentication successful!")
    click.echo("")
    click.echo("Add this to your environment (or .env file):")
    click.echo("")
    click.echo(f"GOOGLE_REFRESH_TOKEN={credentials.refresh_token}")
    click.echo("")
    click.echo("Run 'workspace-docs-mcp doctor' to verify setup.")


@main.command()
def mcp() -> None:
    """Start the MCP server for Claude Desktop integration.

    Starts the stdio MCP server that provides 26 tools across:
    - Sheets (4 tools): Batch update, create and populate, append, format
    - Docs (7 tools): Create, read, insert, append, replace, style, headings
    - Drive (13 tools): Search, move, copy, export, revisions, permissions
    - Authorization (2 tools): Consent URL and code exchange

    The server starts even without credentials; tools that call Google
    report the missing configuration until it is set.

    This command is typically invoked by Claude Desktop via the MCP protocol.
    """
    from workspace_docs_mcp.config import load_settings
    from workspace_docs_mcp.server import main as server_main

    settings = load_settings()
    if not settings.is_complete:
        click.echo(
            "⚠️  Google credentials incomplete. Run 'workspace-docs-mcp setup'.", err=True
        )

    # Start the MCP server (runs indefinitely)
    try:
        click.echo("Starting Workspace Docs MCP server...", err=True)
        click.echo("Server provides 26 tools for Claude Desktop", err=True)
        click.echo("", err=True)
        server_main()
    except KeyboardInterrupt:
        click.echo("\nServer stopped.", err=True)
    except Exception as e:
        click.echo(f"❌ Server error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option(
    "--skip-token-check", is_flag=True, help="Do not contact Google to refresh the token"
)
def doctor(skip_token_check: bool) -> None:
    """Check installation and configuration status.

    Verifies:
    1. Python dependencies installed
    2. OAuth credentials configured
    3. Refresh token accepted by Google
    """
    from workspace_docs_mcp.auth import OAuthManager
    from workspace_docs_mcp.config import load_settings

    click.echo("Workspace Docs MCP Status:")
    click.echo("")

    # Check dependencies
    click.echo("Dependencies:")
    try:
        import google.auth  # noqa: F401
        import google_auth_oauthlib  # noqa: F401
        import httpx  # noqa: F401
        import mcp  # noqa: F401

        click.echo("  ✓ google-auth installed")
        click.echo("  ✓ google-auth-oauthlib installed")
        click.echo("  ✓ httpx installed")
        click.echo("  ✓ mcp installed")
    except ImportError as e:
        click.echo(f"  ❌ Missing dependency: {e}")
        sys.exit(1)

    click.echo("")

    # Check configuration
    settings = load_settings()
    click.echo("Configuration:")
    for key, status in settings.credential_report().items():
        marker = "✓" if status == "Set" else "❌"
        click.echo(f"  {marker} {key}: {status}")
    click.echo(f"  Redirect URI: {settings.redirect_uri}")
    click.echo("")

    if not settings.is_complete:
        click.echo("❌ Setup required. Run 'workspace-docs-mcp setup' to obtain a refresh token.")
        sys.exit(1)

    if skip_token_check:
        click.echo("✓ Configured (token not verified)")
        return

    # Check the refresh token against Google
    click.echo("Authentication:")
    manager = OAuthManager(settings)
    try:
        asyncio.run(manager.get_access_token())
    except Exception as e:
        click.echo(f"  ❌ Token refresh failed: {e}")
        click.echo("")
        click.echo("Run 'workspace-docs-mcp setup' to obtain a new refresh token.")
        sys.exit(1)

    click.echo("  ✓ Access token refreshed")
    click.echo("")
    click.echo("✓ Ready to use!")


if __name__ == "__main__":
    main()
