from devtools_cli.menu.model import (
    ItemKind,
    Menu,
    MenuBuilder,
    MenuItem,
    back_item,
    quit_item,
    with_back,
    with_quit,
)
from devtools_cli.menu.navigator import MenuNavigator

__all__ = [
    "ItemKind",
    "Menu",
    "MenuBuilder",
    "MenuItem",
    "MenuNavigator",
    "back_item",
    "quit_item",
    "with_back",
    "with_quit",
]
