"""Google API client helpers."""

from google.auth.credentials import Credentials
from googleapiclient.discovery import Resource, build


def build_sheets_service(credentials: Credentials) -> Resource:
    """Create a Google Sheets API client."""
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)
