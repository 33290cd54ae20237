"""Tests for credential loading."""

import json
import os
from datetime import datetime
from unittest.mock import patch

import pytest
from google.auth.exceptions import RefreshError

from quotation_sheet import Config, State
from quotation_sheet.auth import CredentialsManager
from quotation_sheet.config import SCOPES, AuthError

OAUTH_CLIENT = {
    "installed": {
        "client_id": "client-123",
        "client_secret": "secret-456",
        "token_uri": "https://oauth2.googleapis.com/token",
    }
}


def make_manager(tmp_path, creds_data, state=None):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(creds_data))
    state = state or State()
    with patch.dict(os.environ, {"GOOGLE_CREDENTIALS_PATH": str(path)}, clear=True):
        config = Config(state)
    return CredentialsManager(config, state)


class TestCredentialsManager:
    """Test cases for CredentialsManager."""

    @patch("quotation_sheet.auth.service_account.Credentials.from_service_account_info")
    def test_service_account(self, mock_from_info, tmp_path):
        """Test that service account keys are loaded with the Sheets scope."""
        key = {"type": "service_account", "client_email": "bot@example.com"}
        manager = make_manager(tmp_path, key)

        creds = manager.get_credentials()

        assert creds is mock_from_info.return_value
        mock_from_info.assert_called_once_with(key, scopes=SCOPES)

    def test_unknown_credentials_format(self, tmp_path):
        """Test that unrecognised credential files are rejected."""
        manager = make_manager(tmp_path, {"something": "else"})

        with pytest.raises(AuthError, match="neither"):
            manager.get_credentials()

    def test_oauth_client_without_refresh_token(self, tmp_path):
        """Test that an OAuth client needs a saved refresh token."""
        manager = make_manager(tmp_path, OAUTH_CLIENT)

        with pytest.raises(AuthError, match="refresh token"):
            manager.get_credentials()

    @patch("quotation_sheet.auth.Credentials.refresh")
    def test_oauth_refreshes_and_saves_tokens(self, mock_refresh, tmp_path):
        """Test that tokens are refreshed and written back to state."""
        state = State(refresh_token="refresh-abc")
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        with patch.object(CredentialsManager, "_save_credentials") as mock_save:
            creds = manager.get_credentials()

        assert creds.refresh_token == "refresh-abc"
        assert creds.client_id == "client-123"
        mock_refresh.assert_called_once()
        mock_save.assert_called_once_with(creds)

    def test_save_credentials_updates_state(self, tmp_path, state_file):
        """Test that refreshed tokens are persisted."""
        state = State(refresh_token="refresh-abc")
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        class FakeCreds:
            token = "fresh-access"
            refresh_token = "refresh-abc"
            expiry = datetime(2030, 1, 1)

        manager._save_credentials(FakeCreds())

        assert state.access_token == "fresh-access"
        assert state.token_expiry == "2030-01-01T00:00:00"
        assert State.load().access_token == "fresh-access"

    @patch("quotation_sheet.auth.Credentials.refresh")
    def test_oauth_refresh_failure(self, mock_refresh, tmp_path):
        """Test that refresh failures surface as AuthError."""
        mock_refresh.side_effect = RefreshError("invalid_grant")
        state = State(refresh_token="revoked")
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        with pytest.raises(AuthError, match="refresh failed"):
            manager.get_credentials()


class TestSavedTokenExpiry:
    """Test cases for reusing or refreshing a saved access token."""

    @patch("quotation_sheet.auth.Credentials.refresh")
    def test_valid_saved_token_is_reused(self, mock_refresh, tmp_path):
        """Test that an unexpired access token skips the refresh round trip."""
        state = State(
            refresh_token="refresh-abc",
            access_token="access-123",
            token_expiry="2999-01-01T00:00:00",
        )
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        creds = manager.get_credentials()

        mock_refresh.assert_not_called()
        assert creds.token == "access-123"
        assert creds.expiry == datetime(2999, 1, 1)
        assert not creds.expired

    @patch("quotation_sheet.auth.Credentials.refresh")
    def test_expired_saved_token_is_refreshed(self, mock_refresh, tmp_path):
        """Test that a stored expiry in the past triggers a refresh and save."""
        state = State(
            refresh_token="refresh-abc",
            access_token="access-old",
            token_expiry="2000-01-01T00:00:00",
        )
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        with patch.object(CredentialsManager, "_save_credentials") as mock_save:
            creds = manager.get_credentials()

        mock_refresh.assert_called_once()
        mock_save.assert_called_once_with(creds)

    @patch("quotation_sheet.auth.Credentials.refresh")
    def test_unknown_expiry_is_refreshed(self, mock_refresh, tmp_path):
        """Test that a token without a readable expiry is refreshed."""
        state = State(
            refresh_token="refresh-abc",
            access_token="access-123",
            token_expiry="not-a-date",
        )
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        with patch.object(CredentialsManager, "_save_credentials"):
            manager.get_credentials()

        mock_refresh.assert_called_once()

    def test_timezone_aware_expiry_is_normalized(self, tmp_path):
        """Test that offsets are converted to the naive UTC google-auth uses."""
        state = State(refresh_token="r", token_expiry="2030-01-01T02:00:00+02:00")
        manager = make_manager(tmp_path, OAUTH_CLIENT, state)

        assert manager._saved_expiry() == datetime(2030, 1, 1, 0, 0, 0)
