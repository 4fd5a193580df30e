"""CLI tests for the setup, mcp and doctor commands."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from workspace_docs_mcp.cli.main import main
from workspace_docs_mcp.config import Settings

NO_CREDENTIAL_ENV = {"GOOGLE_CLIENT_ID": None, "GOOGLE_CLIENT_SECRET": None}


@pytest.mark.unit
class TestSetupCommand:
    """Tests for the setup CLI command."""

    def test_should_show_error_without_credentials(self, cli_runner: CliRunner) -> None:
        """Verify error shown when client ID/secret not provided."""
        result = cli_runner.invoke(main, ["setup"], env=NO_CREDENTIAL_ENV)

        assert result.exit_code == 1
        assert "OAuth client credentials required" in result.output

    def test_should_print_refresh_token_after_authentication(
        self, cli_runner: CliRunner
    ) -> None:
        """Verify authentication runs and the refresh token is printed."""
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=Settings()
        ), patch("workspace_docs_mcp.auth.OAuthManager") as mock_manager_class:
            mock_manager = MagicMock()
            mock_manager.authenticate = AsyncMock(
                return_value=MagicMock(refresh_token="1//refresh_from_google")
            )
            mock_manager_class.return_value = mock_manager

            result = cli_runner.invoke(
                main,
                ["setup", "--client-id=test_id", "--client-secret=test_secret"],
            )

        assert result.exit_code == 0
        mock_manager.authenticate.assert_called_once_with()
        settings = mock_manager_class.call_args[0][0]
        assert settings.client_id == "test_id"
        assert settings.client_secret == "test_secret"  # pragma: allowlist secret
        assert "Browser will open" in result.output
        assert "Authentication successful" in result.output
        assert "GOOGLE_REFRESH_TOKEN=1//refresh_from_google" in result.output

    def test_should_fail_when_no_refresh_token_returned(self, cli_runner: CliRunner) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=Settings()
        ), patch("workspace_docs_mcp.auth.OAuthManager") as mock_manager_class:
            mock_manager_class.return_value.authenticate = AsyncMock(
                return_value=MagicMock(refresh_token=None)
            )

            result = cli_runner.invoke(
                main, ["setup", "--client-id=test_id", "--client-secret=test_secret"]
            )

        assert result.exit_code == 1
        assert "did not return a refresh token" in result.output

    def test_should_report_authentication_failure(self, cli_runner: CliRunner) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=Settings()
        ), patch("workspace_docs_mcp.auth.OAuthManager") as mock_manager_class:
            mock_manager_class.return_value.authenticate = AsyncMock(
                side_effect=RuntimeError("OAuth authorization failed: access_denied")
            )

            result = cli_runner.invoke(
                main, ["setup", "--client-id=test_id", "--client-secret=test_secret"]
            )

        assert result.exit_code == 1
        assert "Authentication failed: OAuth authorization failed: access_denied" in result.output


@pytest.mark.unit
class TestMcpCommand:
    """Tests for the mcp CLI command."""

    def test_should_start_server(self, cli_runner: CliRunner, settings: Settings) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=settings
        ), patch("workspace_docs_mcp.server.main") as mock_server_main:
            result = cli_runner.invoke(main, ["mcp"])

        assert result.exit_code == 0
        mock_server_main.assert_called_once_with()
        assert "credentials incomplete" not in result.output

    def test_should_warn_but_start_when_unconfigured(
        self, cli_runner: CliRunner, empty_settings: Settings
    ) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=empty_settings
        ), patch("workspace_docs_mcp.server.main") as mock_server_main:
            result = cli_runner.invoke(main, ["mcp"])

        assert result.exit_code == 0
        mock_server_main.assert_called_once_with()
        assert "Google credentials incomplete" in result.output


@pytest.mark.unit
class TestDoctorCommand:
    """Tests for the doctor CLI command."""

    def test_should_fail_when_credentials_missing(
        self, cli_runner: CliRunner, empty_settings: Settings
    ) -> None:
        with patch("workspace_docs_mcp.config.load_settings", return_value=empty_settings):
            result = cli_runner.invoke(main, ["doctor"])

        assert result.exit_code == 1
        assert "GOOGLE_REFRESH_TOKEN: Missing" in result.output
        assert "Setup required" in result.output

    def test_should_skip_token_check_when_requested(
        self, cli_runner: CliRunner, settings: Settings
    ) -> None:
        with patch("workspace_docs_mcp.config.load_settings", return_value=settings):
            result = cli_runner.invoke(main, ["doctor", "--skip-token-check"])

        assert result.exit_code == 0
        assert "GOOGLE_CLIENT_ID: Set" in result.output
        assert "token not verified" in result.output

    def test_should_refresh_token_against_google(
        self, cli_runner: CliRunner, settings: Settings
    ) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=settings
        ), patch("workspace_docs_mcp.auth.OAuthManager") as mock_manager_class:
            mock_manager_class.return_value.get_access_token = AsyncMock(return_value="tok")

            result = cli_runner.invoke(main, ["doctor"])

        assert result.exit_code == 0
        mock_manager_class.assert_called_once_with(settings)
        assert "Access token refreshed" in result.output
        assert "Ready to use" in result.output

    def test_should_fail_when_refresh_rejected(
        self, cli_runner: CliRunner, settings: Settings
    ) -> None:
        with patch(
            "workspace_docs_mcp.config.load_settings", return_value=settings
        ), patch("workspace_docs_mcp.auth.OAuthManager") as mock_manager_class:
            mock_manager_class.return_value.get_access_token = AsyncMock(
                side_effect=RuntimeError("invalid_grant")
            )

            result = cli_runner.invoke(main, ["doctor"])

        assert result.exit_code == 1
        assert "Token refresh failed: invalid_grant" in result.output
