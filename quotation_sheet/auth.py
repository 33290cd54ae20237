"""Google credential loading."""

import logging
from datetime import datetime, timezone
from typing import Any

from google.auth.credentials import Credentials as BaseCredentials
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials

from .config import SCOPES, AuthError, Config, State

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class CredentialsManager:
    """Builds Sheets credentials from a service-account key or a saved token."""

    def __init__(self, config: Config, state: State):
        self.config = config
        self.state = state

    def get_credentials(self) -> BaseCredentials:
        creds_data = self.config.load_credentials_file()

        if creds_data.get("type") == "service_account":
            logger.debug("Using service account credentials")
            return service_account.Credentials.from_service_account_info(
                creds_data, scopes=SCOPES
            )

        client_config = creds_data.get("installed") or creds_data.get("web")
        if not client_config:
            raise AuthError(
                "Credentials file is neither a service account key nor an OAuth client"
            )
        return self._authorized_user(client_config)

    def _authorized_user(self, client_config: dict[str, Any]) -> Credentials:
        """Rebuild user credentials from the refresh token kept in state."""
        if not self.state.refresh_token:
            raise AuthError("No saved refresh token; authorize the OAuth client first")

        creds = Credentials(
            token=self.state.access_token or None,
            refresh_token=self.state.refresh_token,
            token_uri=client_config.get("token_uri", DEFAULT_TOKEN_URI),
            client_id=client_config["client_id"],
            client_secret=client_config["client_secret"],
            scopes=SCOPES,
            expiry=self._saved_expiry(),
        )

        if not self.state.access_token or creds.expiry is None or creds.expired:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise AuthError(f"Token refresh failed: {e}") from e
            self._save_credentials(creds)
        return creds

    def _saved_expiry(self) -> datetime | None:
        """Parse the stored expiry as the naive UTC datetime google-auth expects."""
        if not self.state.token_expiry:
            return None
        try:
            expiry = datetime.fromisoformat(self.state.token_expiry)
        except ValueError:
            logger.warning(
                f"Ignoring unreadable token expiry: {self.state.token_expiry}"
            )
            return None
        if expiry.tzinfo is not None:
            expiry = expiry.astimezone(timezone.utc).replace(tzinfo=None)
        return expiry

    def _save_credentials(self, creds: Credentials) -> None:
        self.state.access_token = creds.token
        self.state.refresh_token = creds.refresh_token
        self.state.token_expiry = creds.expiry.isoformat() if creds.expiry else None
        self.state.save()
