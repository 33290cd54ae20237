"""Email Actions menu and the actions it triggers."""

import importlib
import logging
from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel

from .config import ActionNotFoundError, ConfigError

logger = logging.getLogger(__name__)

REFRESH_ACTION = "processQuotationEmails"


class MenuItem(BaseModel):
    model_config = {"frozen": True}

    label: str
    action: str


class Menu(BaseModel):
    model_config = {"frozen": True}

    title: str
    items: tuple[MenuItem, ...] = ()


EMAIL_ACTIONS_MENU = Menu(
    title="📩 Email Actions",
    items=(MenuItem(label="🔄 Refresh List", action=REFRESH_ACTION),),
)


class MenuRegistry(Protocol):
    def add_menu(self, menu: Menu) -> None: ...


class InMemoryMenuRegistry:
    """Keeps menus by title; adding a title again replaces the old menu."""

    def __init__(self):
        self.menus: dict[str, Menu] = {}

    def add_menu(self, menu: Menu) -> None:
        self.menus[menu.title] = menu

    def find_item(self, label: str) -> MenuItem | None:
        for menu in self.menus.values():
            for item in menu.items:
                if item.label == label:
                    return item
        return None


def on_open(ui: MenuRegistry) -> None:
    """Document-open hook: expose the Email Actions menu."""
    ui.add_menu(EMAIL_ACTIONS_MENU)
    logger.debug(f"Registered menu {EMAIL_ACTIONS_MENU.title!r}")


def load_callable(path: str) -> Callable[[], object]:
    """Import ``package.module:function`` and return the function."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Action handler must look like 'module:function': {path}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(
            f"Cannot import action handler module {module_name}: {e}"
        ) from e
    handler = getattr(module, attr, None)
    if not callable(handler):
        raise ConfigError(f"Action handler {path} is not callable")
    return handler


class ActionRegistry:
    """Maps the symbol names menu items refer to onto Python callables."""

    def __init__(self):
        self._actions: dict[str, Callable[[], object]] = {}

    def register(self, name: str, handler: Callable[[], object]) -> None:
        self._actions[name] = handler

    def register_path(self, name: str, path: str) -> None:
        self.register(name, load_callable(path))

    def invoke(self, name: str) -> None:
        handler = self._actions.get(name)
        if handler is None:
            raise ActionNotFoundError(f"No handler registered for action {name!r}")
        logger.info(f"Running action {name}")
        handler()

    def activate(self, item: MenuItem) -> None:
        """Run the action bound to a clicked menu item."""
        self.invoke(item.action)
