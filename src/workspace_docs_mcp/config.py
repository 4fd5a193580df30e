"""Runtime configuration for workspace-docs-mcp.

Settings are read once at startup from the process environment. A
project-level ``.env`` file is loaded first (without overriding variables
that are already set), mirroring how Claude Desktop launches the server.

Environment Variables:
    GOOGLE_CLIENT_ID: Google OAuth client ID
    GOOGLE_CLIENT_SECRET: Google OAuth client secret
    GOOGLE_REFRESH_TOKEN: Long-lived refresh token obtained via ``setup``
    GOOGLE_OAUTH_REDIRECT_URI: Redirect URI (default: http://localhost:3000/oauth/callback)
    LOG_LEVEL: Logging level (default: INFO)
"""

import logging
import os
import sys
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_REDIRECT_URI = "http://localhost:3000/oauth/callback"


class Settings(BaseModel):
    """Immutable server configuration.

    Attributes:
        client_id: OAuth client ID, or None when not configured.
        client_secret: OAuth client secret, or None when not configured.
        refresh_token: Long-lived refresh token, or None when not configured.
        redirect_uri: Redirect URI registered for the OAuth client.
        log_level: Name of the root logging level.
    """

    model_config = {"frozen": True}

    client_id: str | None = Field(default=None, description="OAuth client ID")
    client_secret: str | None = Field(default=None, description="OAuth client secret")
    refresh_token: str | None = Field(default=None, description="OAuth refresh token")
    redirect_uri: str = Field(default=DEFAULT_REDIRECT_URI, description="OAuth redirect URI")
    log_level: str = Field(default="INFO", description="Logging level")

    @property
    def has_client_credentials(self) -> bool:
        """True when both client ID and secret are set."""
        return bool(self.client_id and self.client_secret)

    @property
    def is_complete(self) -> bool:
        """True when every credential needed for API calls is set."""
        return self.has_client_credentials and bool(self.refresh_token)

    def credential_report(self) -> dict[str, str]:
        """Report which credentials are present, without exposing values."""
        return {
            "GOOGLE_CLIENT_ID": "Set" if self.client_id else "Missing",
            "GOOGLE_CLIENT_SECRET": "Set" if self.client_secret else "Missing",
            "GOOGLE_REFRESH_TOKEN": "Set" if self.refresh_token else "Missing",
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from an environment mapping.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Settings with empty strings treated as unset.
        """
        env = os.environ if environ is None else environ

        def _get(key: str) -> str | None:
            value = env.get(key, "").strip()
            return value or None

        return cls(
            client_id=_get("GOOGLE_CLIENT_ID"),
            client_secret=_get("GOOGLE_CLIENT_SECRET"),
            refresh_token=_get("GOOGLE_REFRESH_TOKEN"),
            redirect_uri=_get("GOOGLE_OAUTH_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
            log_level=(_get("LOG_LEVEL") or "INFO").upper(),
        )


def load_settings(load_env_file: bool = True) -> Settings:
    """Load settings from ``.env`` (if present) and the environment."""
    if load_env_file:
        load_dotenv(override=False)
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging to stderr.

    stdout carries the MCP stdio stream, so nothing may log there.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
