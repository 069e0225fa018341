from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from devtools_cli.requirements import RequirementCheck


class ItemKind(Enum):
    """What selecting a menu item does."""

    SUBMENU = "submenu"
    ACTION = "action"
    BACK = "back"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuItem:
    label: str
    description: str = ""
    action: Optional[Callable[[], str]] = None
    submenu: Optional[Menu] = None
    # Only consulted when entering ``submenu``.
    requirements: Tuple[RequirementCheck, ...] = ()
    kind: Optional[ItemKind] = None

    def __post_init__(self) -> None:
        if self.submenu is not None and self.action is not None:
            raise ValueError("Menu items cannot define both a submenu and an action.")
        object.__setattr__(self, "requirements", tuple(self.requirements))

    @property
    def target(self) -> ItemKind:
        if self.kind is not None:
            return self.kind
        if self.submenu is not None:
            return ItemKind.SUBMENU
        return ItemKind.ACTION


@dataclass(frozen=True)
class Menu:
    title: str
    items: Tuple[MenuItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


def back_item(label: str = "Back") -> MenuItem:
    return MenuItem(label=label, kind=ItemKind.BACK)


def quit_item(label: str = "Exit") -> MenuItem:
    return MenuItem(label=label, kind=ItemKind.QUIT)


def with_back(items: Iterable[MenuItem]) -> List[MenuItem]:
    return [*items, back_item()]


def with_quit(items: Iterable[MenuItem]) -> List[MenuItem]:
    return [*items, quit_item()]


class MenuBuilder:
    """Fluent construction of a :class:`Menu`.

    Example:
        menu = (
            MenuBuilder("Hello Tool")
            .action("Print greeting", "Simple example action", greet)
            .submenu("Utilities", "Nested submenu example", utilities)
            .with_back()
            .build()
        )
    """

    def __init__(self, title: str) -> None:
        self._title = title
        self._items: List[MenuItem] = []

    def action(self, label: str, description: str, run: Callable[[], str]) -> MenuBuilder:
        self._items.append(MenuItem(label=label, description=description, action=run))
        return self

    def submenu(
        self,
        label: str,
        description: str,
        submenu: Menu,
        *checks: RequirementCheck,
    ) -> MenuBuilder:
        self._items.append(
            MenuItem(
                label=label,
                description=description,
                submenu=submenu,
                requirements=checks,
            )
        )
        return self

    def custom(self, item: MenuItem) -> MenuBuilder:
        self._items.append(item)
        return self

    def with_back(self) -> MenuBuilder:
        self._items = with_back(self._items)
        return self

    def with_quit(self) -> MenuBuilder:
        self._items = with_quit(self._items)
        return self

    def build(self) -> Menu:
        return Menu(title=self._title, items=self._items)
