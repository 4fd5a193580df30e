"""OAuth authentication for Google Drive, Sheets and Docs.

Quick Start:
    ```python
    from workspace_docs_mcp.auth import OAuthManager
    from workspace_docs_mcp.config import Settings

    manager = OAuthManager(Settings.from_env())

    # Bearer token for API calls
    token = await manager.get_access_token()

    # First-time setup: consent URL and code exchange
    url = manager.get_authorization_url()
    credentials = await manager.exchange_code(code)
    ```
"""

from workspace_docs_mcp.auth.oauth_manager import GOOGLE_WORKSPACE_SCOPES, OAuthManager

__all__ = [
    "OAuthManager",
    "GOOGLE_WORKSPACE_SCOPES",
]
