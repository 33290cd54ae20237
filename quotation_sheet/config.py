"""Configuration, state management and error types."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv = __import__("dotenv").load_dotenv

load_dotenv()

STATE_FILE = Path.home() / ".quotation_sheet_state.json"

SHEET_NAME = "Quotations"
HEADERS = ("Date", "Sender", "Subject", "Product", "Quantity")

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

logger = logging.getLogger(__name__)


class QuotationSheetError(Exception):
    """Base error for quotation sheet operations."""


class ConfigError(QuotationSheetError):
    """Required configuration is missing or invalid."""


class AuthError(QuotationSheetError):
    """Credentials could not be loaded or refreshed."""


class ResourceNotFoundError(QuotationSheetError):
    """A workbook or sheet could not be resolved."""


class WorkbookNotFoundError(ResourceNotFoundError):
    def __init__(self, workbook_id: str):
        super().__init__(f"Workbook not found: {workbook_id}")
        self.workbook_id = workbook_id


class SheetNotFoundError(ResourceNotFoundError):
    def __init__(self, sheet_name: str):
        super().__init__(f"Sheet not found: {sheet_name}")
        self.sheet_name = sheet_name


class ActionNotFoundError(QuotationSheetError):
    """A menu item points at an action symbol nobody registered."""


class State(BaseModel):
    """Run bookkeeping and OAuth tokens that persist between runs.

    Target spreadsheet and sheet come from settings only; keys left over from
    older state files are ignored.
    """

    model_config = {"extra": "ignore"}

    last_run: str | None = None
    refresh_token: str | None = None
    access_token: str | None = None
    token_expiry: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "State":
        return cls(**data)

    def save(self) -> None:
        """Save state to file."""
        with open(STATE_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls) -> "State":
        """Load state from file or return empty state."""
        if STATE_FILE.exists():
            data = cls._load_state_file()
            if data is not None:
                return cls.from_dict(data)
        return cls()

    @staticmethod
    def _load_state_file() -> dict[str, Any] | None:
        try:
            with open(STATE_FILE) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load state file: {e}")
            return None


class AppSettings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    google_credentials_path: str = "credentials.json"
    spreadsheet_id: str = ""
    sheet_name: str = SHEET_NAME
    email_action_handler: str = ""


class Config:
    """Effective configuration from environment settings."""

    def __init__(self, state: State):
        self.app_settings = AppSettings()

        self.google_credentials_path = self.app_settings.google_credentials_path
        self.spreadsheet_id = self.app_settings.spreadsheet_id
        self.sheet_name = self.app_settings.sheet_name
        self.email_action_handler = self.app_settings.email_action_handler
        self.state = state

    def require_spreadsheet_id(self) -> str:
        if not self.spreadsheet_id:
            raise ConfigError("SPREADSHEET_ID environment variable is required")
        return self.spreadsheet_id

    def load_credentials_file(self) -> dict[str, Any]:
        """Read the Google credentials JSON file."""
        path = Path(self.google_credentials_path)
        if not path.exists():
            raise AuthError(f"Credentials file not found: {path}")
        try:
            with open(path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AuthError(f"Failed to load credentials file {path}: {e}") from e
