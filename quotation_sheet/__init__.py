"""Quotation sheet package."""

from .app import main
from .config import HEADERS, SHEET_NAME, Config, State
from .headers import apply_headers
from .menu import EMAIL_ACTIONS_MENU, on_open

__all__ = [
    "main",
    "Config",
    "State",
    "HEADERS",
    "SHEET_NAME",
    "EMAIL_ACTIONS_MENU",
    "apply_headers",
    "on_open",
]
