"""Command line entry points."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

import click

from .auth import CredentialsManager
from .config import STATE_FILE, Config, QuotationSheetError, State
from .headers import apply_headers
from .menu import (
    EMAIL_ACTIONS_MENU,
    REFRESH_ACTION,
    ActionRegistry,
    InMemoryMenuRegistry,
    on_open,
)
from .sheets import GoogleSheetsService

logger = logging.getLogger(__name__)

REFRESH_LABEL = EMAIL_ACTIONS_MENU.items[0].label


@contextmanager
def _user_errors(ctx: click.Context) -> Iterator[None]:
    """Report domain errors to the user and exit non-zero."""
    try:
        yield
    except QuotationSheetError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ {e}")
        ctx.exit(1)


def _build_actions(config: Config) -> ActionRegistry:
    actions = ActionRegistry()
    if config.email_action_handler:
        actions.register_path(REFRESH_ACTION, config.email_action_handler)
    return actions


def _open_document() -> InMemoryMenuRegistry:
    ui = InMemoryMenuRegistry()
    on_open(ui)
    return ui


def _load_state(ctx: click.Context) -> None:
    """Load shared state into the Click context."""
    ctx.ensure_object(dict)
    if "state" not in ctx.obj:
        ctx.obj["state"] = State.load()


@click.group(help="QuotationSheet - prepare the Quotations sheet for email imports")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable DEBUG level logging",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Main entry point with CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level)
    _load_state(ctx)


@main.command("headers")
@click.option(
    "--spreadsheet-id",
    default=None,
    help="Target spreadsheet ID (defaults to SPREADSHEET_ID).",
)
@click.option(
    "--sheet",
    "sheet_name",
    default=None,
    help="Sheet to initialize (defaults to SHEET_NAME or 'Quotations').",
)
@click.pass_context
def headers_command(
    ctx: click.Context, spreadsheet_id: str | None, sheet_name: str | None
) -> None:
    """Write and bold the header row of the quotations sheet."""
    state = ctx.obj["state"]
    config = Config(state)

    with _user_errors(ctx):
        workbook_id = spreadsheet_id or config.require_spreadsheet_id()
        target_sheet = sheet_name or config.sheet_name
        credentials = CredentialsManager(config, state).get_credentials()
        apply_headers(workbook_id, GoogleSheetsService(credentials), target_sheet)

    state.last_run = datetime.now().isoformat()
    state.save()
    print(f"✅ Headers applied to '{target_sheet}'")


@main.command("open")
def open_command() -> None:
    """Simulate opening the document and show the registered menus."""
    ui = _open_document()
    for menu in ui.menus.values():
        print(menu.title)
        for item in menu.items:
            print(f"  {item.label} -> {item.action}")


@main.command("refresh")
@click.option(
    "--item",
    "label",
    default=REFRESH_LABEL,
    show_default=True,
    help="Menu item label to activate.",
)
@click.pass_context
def refresh_command(ctx: click.Context, label: str) -> None:
    """Activate a menu item, running the action bound to it."""
    config = Config(ctx.obj["state"])

    with _user_errors(ctx):
        item = _open_document().find_item(label)
        if item is None:
            raise click.BadParameter(f"No menu item labelled {label!r}")
        _build_actions(config).activate(item)


@main.command("status")
@click.pass_context
def status_command(ctx: click.Context) -> None:
    """Show current configuration."""
    config = Config(ctx.obj["state"])
    print(f"Spreadsheet ID:    {config.spreadsheet_id or '(not set)'}")
    print(f"Sheet name:        {config.sheet_name}")
    print(f"Credentials file:  {config.google_credentials_path}")
    print(f"Action handler:    {config.email_action_handler or '(not set)'}")
    print(f"Last run:          {config.state.last_run or 'never'}")


@main.command("reset")
def reset_command() -> None:
    """Reset saved configuration."""
    State().save()
    print(f"✅ Configuration reset ({STATE_FILE})")
