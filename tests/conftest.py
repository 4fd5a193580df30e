"""Shared pytest fixtures for workspace-docs-mcp tests.

This module provides reusable fixtures for settings, a tool context whose
Drive/Sheets/Docs facades are AsyncMocks, and the Click CLI runner.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from click.testing import CliRunner

from workspace_docs_mcp.api import DocsApi, DriveApi, GoogleApiClient, SheetsApi
from workspace_docs_mcp.auth import OAuthManager
from workspace_docs_mcp.config import Settings
from workspace_docs_mcp.server.context import ToolContext

# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Create fully configured settings."""
    return Settings(
        client_id="test_client_id.apps.googleusercontent.com",
        client_secret="test_client_secret",  # pragma: allowlist secret
        refresh_token="test_refresh_token_xyz789",
    )


@pytest.fixture
def empty_settings() -> Settings:
    """Create settings with no credentials at all."""
    return Settings()


# =============================================================================
# Tool Context Fixtures
# =============================================================================


@pytest.fixture
def mock_drive() -> AsyncMock:
    """Create a mock DriveApi; every method is awaitable."""
    return AsyncMock(spec=DriveApi)


@pytest.fixture
def mock_sheets() -> AsyncMock:
    """Create a mock SheetsApi."""
    return AsyncMock(spec=SheetsApi)


@pytest.fixture
def mock_docs() -> AsyncMock:
    """Create a mock DocsApi."""
    return AsyncMock(spec=DocsApi)


@pytest.fixture
def mock_oauth() -> MagicMock:
    """Create a mock OAuthManager with an async code exchange."""
    oauth = MagicMock(spec=OAuthManager)
    oauth.is_configured = True
    oauth.exchange_code = AsyncMock()
    oauth.get_access_token = AsyncMock(return_value="mock_access_token_12345")
    return oauth


@pytest.fixture
def ctx(
    settings: Settings,
    mock_oauth: MagicMock,
    mock_drive: AsyncMock,
    mock_sheets: AsyncMock,
    mock_docs: AsyncMock,
) -> ToolContext:
    """Create a ToolContext wired to mocked facades."""
    return ToolContext(
        settings=settings,
        oauth=mock_oauth,
        client=AsyncMock(spec=GoogleApiClient),
        drive=mock_drive,
        sheets=mock_sheets,
        docs=mock_docs,
    )


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()

