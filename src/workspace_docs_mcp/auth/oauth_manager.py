"""OAuth manager for Google Drive, Sheets and Docs access.

Credentials are built once from the environment-provided client ID, client
secret and refresh token. Access tokens are refreshed on demand through
google-auth; the refresh token itself is never rotated at runtime.

The one-time authorization-code flow (browser consent plus a local callback
listener) lives here too. It prints nothing to stdout on its own; callers
decide how to present the resulting refresh token.
"""

import asyncio
import logging
import secrets
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlparse

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from workspace_docs_mcp.config import Settings
from workspace_docs_mcp.errors import CredentialsNotConfiguredError

logger = logging.getLogger(__name__)

# Drive scope is the full one: search, move and copy act on files the
# server did not create.
GOOGLE_WORKSPACE_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/documents",
]

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"  # nosec B105 - public endpoint

DEFAULT_OAUTH_HOST = "localhost"
DEFAULT_OAUTH_PORT = 3000
CALLBACK_TIMEOUT_SECONDS = 300


class OAuthManager:
    """OAuth credential manager.

    Holds the google-auth ``Credentials`` used for every API call and runs
    the authorization-code exchange used during first-time setup.

    Attributes:
        settings: Immutable configuration the credentials are built from.

    Example:
        ```python
        manager = OAuthManager(Settings.from_env())
        token = await manager.get_access_token()
        ```
    """

    def __init__(self, settings: Settings, scopes: list[str] | None = None) -> None:
        """Initialize OAuth manager.

        Args:
            settings: Configuration holding client credentials and refresh token.
            scopes: OAuth scopes. Uses GOOGLE_WORKSPACE_SCOPES if not specified.
        """
        self.settings = settings
        self.scopes = scopes or GOOGLE_WORKSPACE_SCOPES
        self._credentials = self._build_credentials()

    def _build_credentials(self) -> Credentials | None:
        """Build refreshable credentials, or None when settings are incomplete."""
        if not self.settings.is_complete:
            return None
        return Credentials(  # nosec B106 - token_uri is public Google OAuth endpoint
            token=None,
            refresh_token=self.settings.refresh_token,
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
            token_uri=GOOGLE_TOKEN_URI,
            scopes=self.scopes,
        )

    @property
    def is_configured(self) -> bool:
        """True when API calls can be authorized."""
        return self._credentials is not None

    async def get_access_token(self) -> str:
        """Get a valid access token, refreshing if necessary.

        Returns:
            Bearer access token.

        Raises:
            CredentialsNotConfiguredError: If client ID, secret or refresh token is missing.
            google.auth.exceptions.RefreshError: If Google rejects the refresh.
        """
        if self._credentials is None:
            missing = [k for k, v in self.settings.credential_report().items() if v == "Missing"]
            raise CredentialsNotConfiguredError(
                f"Google OAuth credentials not configured (missing: {', '.join(missing)}). "
                "Run 'workspace-docs-mcp setup' and set the environment variables."
            )

        if not self._credentials.valid:
            logger.debug("Access token missing or expired, refreshing")
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._credentials.refresh, Request())

        token: str = self._credentials.token
        return token

    def _client_config(self) -> dict:
        """Build the web-application client configuration for Flow."""
        if not self.settings.has_client_credentials:
            raise ValueError(
                "Client ID and secret required. "
                "Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET environment variables."
            )
        return {
            "web": {
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [self.settings.redirect_uri],
            }
        }

    def _build_flow(self) -> Flow:
        """Create an authorization-code flow without PKCE.

        The consent URL and the code exchange may happen in separate tool
        calls, so no code verifier can be carried between them.
        """
        return Flow.from_client_config(
            self._client_config(),
            scopes=self.scopes,
            redirect_uri=self.settings.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def get_authorization_url(self, state: str | None = None) -> str:
        """Build the consent URL that yields a refresh token.

        Raises:
            ValueError: If client ID/secret are not configured.
        """
        flow = self._build_flow()
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",
            state=state or secrets.token_urlsafe(32),
        )
        return auth_url

    async def exchange_code(self, code: str) -> Credentials:
        """Exchange an authorization code for tokens.

        The running server's credentials are left untouched; the operator
        persists the returned refresh token and restarts.

        Returns:
            Credentials holding the new access and refresh tokens.
        """
        flow = self._build_flow()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: flow.fetch_token(code=code))
        credentials: Credentials = flow.credentials
        return credentials

    async def authenticate(self) -> Credentials:
        """Perform the interactive authorization-code flow.

        Opens the browser at the consent URL and waits for a single callback
        on the redirect URI.

        Returns:
            Credentials containing the refresh token.

        Raises:
            ValueError: If client ID/secret not configured.
            RuntimeError: If authorization fails or no code is received.
        """
        client_config = self._client_config()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._run_oauth_flow, client_config)

    def _run_oauth_flow(self, client_config: dict) -> Credentials:
        """Run the OAuth flow (blocking operation).

        Args:
            client_config: Google OAuth client configuration (web type).

        Returns:
            Google OAuth2 credentials.
        """
        redirect_uri = self.settings.redirect_uri
        flow = Flow.from_client_config(
            client_config,
            scopes=self.scopes,
            redirect_uri=redirect_uri,
        )

        state = secrets.token_urlsafe(32)
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",
            state=state,
        )

        parsed = urlparse(redirect_uri)
        host = parsed.hostname or DEFAULT_OAUTH_HOST
        port = parsed.port or DEFAULT_OAUTH_PORT
        callback_path = parsed.path or "/oauth/callback"

        auth_code: list[str | None] = [None]
        error_message: list[str | None] = [None]

        class OAuthCallbackHandler(BaseHTTPRequestHandler):
            """HTTP handler for OAuth callback."""

            def log_message(self, format: str, *args) -> None:
                """Suppress HTTP server logs."""
                pass

            def _respond(self, status: int, body: bytes) -> None:
                self.send_response(status)
                self.send_header("Content-type", "text/html")
                self.end_headers()
                self.wfile.write(body)

            def do_GET(self) -> None:
                """Handle GET request from OAuth redirect."""
                request_parsed = urlparse(self.path)

                if request_parsed.path != callback_path:
                    self.send_response(404)
                    self.end_headers()
                    self.wfile.write(b"Not Found")
                    return

                query_params = parse_qs(request_parsed.query)

                if "error" in query_params:
                    error_message[0] = query_params["error"][0]
                    self._respond(
                        400,
                        b"<html><body><h1>Authorization Failed</h1>"
                        b"<p>Please close this window and try again.</p></body></html>",
                    )
                    return

                if query_params.get("state", [None])[0] != state:
                    error_message[0] = "state mismatch"
                    self._respond(
                        400,
                        b"<html><body><h1>Authorization Failed</h1>"
                        b"<p>State mismatch.</p></body></html>",
                    )
                    return

                if "code" in query_params:
                    auth_code[0] = query_params["code"][0]
                    self._respond(
                        200,
                        b"<html><body><h1>Authorization Successful!</h1>"
                        b"<p>You can close this window and return to your terminal.</p>"
                        b"</body></html>",
                    )
                else:
                    self._respond(
                        400,
                        b"<html><body><h1>Authorization Failed</h1>"
                        b"<p>No authorization code received.</p></body></html>",
                    )

        server = HTTPServer((host, port), OAuthCallbackHandler)
        server.timeout = CALLBACK_TIMEOUT_SECONDS

        logger.info("Waiting for OAuth callback on %s:%s%s", host, port, callback_path)
        if not webbrowser.open(auth_url):
            logger.warning("Could not open browser automatically. Visit: %s", auth_url)

        try:
            server.handle_request()
        finally:
            server.server_close()

        if error_message[0]:
            raise RuntimeError(f"OAuth authorization failed: {error_message[0]}")

        if not auth_code[0]:
            raise RuntimeError("No authorization code received from Google")

        flow.fetch_token(code=auth_code[0])
        credentials: Credentials = flow.credentials
        return credentials
