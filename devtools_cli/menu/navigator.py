from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from devtools_cli.config.settings import DEFAULT_MAX_DEPTH
from devtools_cli.exceptions import TerminalError
from devtools_cli.logging import LoggerFactory
from devtools_cli.menu.model import ItemKind, Menu, MenuItem
from devtools_cli.requirements import InstallAction, first_failed_requirement
from devtools_cli.ui.keys import Key
from devtools_cli.ui.renderer import MenuRenderer
from devtools_cli.ui.terminal import Terminal

log = LoggerFactory.for_menu()

NO_INSTALLER_STATUS = "No install action is available for the current requirement error."
INSTALL_DONE_STATUS = "Install action completed. Re-enter the module to retry checks."


class MenuNavigator:
    """Stack-based state machine behind the full-screen menu.

    The bottom of the stack is the root menu and the top is the screen being
    shown. ``handle_key`` applies one key event and returns True once the
    session should end. Errors from requirement checks, actions and
    installers become ``status`` text; only ``TerminalError`` escapes.
    """

    def __init__(
        self,
        root: Menu,
        terminal: Optional[Terminal] = None,
        renderer: Optional[MenuRenderer] = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self._stack: List[Menu] = [root]
        self._terminal = terminal or Terminal()
        self._renderer = renderer or MenuRenderer()
        self.max_depth = max_depth
        self.cursor = 0
        self.status = ""
        self.pending_installer: Optional[InstallAction] = None

    @property
    def stack(self) -> Tuple[Menu, ...]:
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def current_menu(self) -> Menu:
        return self._stack[-1]

    def current_items(self) -> Tuple[MenuItem, ...]:
        return self.current_menu().items

    def run(self) -> None:
        """Drive the menu until Quit. Terminal failures propagate."""
        with self._terminal.session():
            log.info(f"Menu session started at {self.current_menu().title!r}")
            while True:
                self._terminal.paint(self.render())
                key = self._terminal.read_key()
                if self.handle_key(key):
                    break
        log.info("Menu session ended")

    def render(self) -> str:
        log.trace("Repaint")
        return self._renderer.render_menu_screen(
            title=self.current_menu().title,
            items=self.current_items(),
            selected_index=self.cursor,
            depth=self.depth,
            max_depth=self.max_depth,
            status=self.status,
            install_available=self.pending_installer is not None,
        )

    def handle_key(self, key: Key) -> bool:
        log.trace(f"Key pressed: {key.name}")
        if key is Key.QUIT:
            return True
        if key is Key.UP:
            self._move(-1)
        elif key is Key.DOWN:
            self._move(1)
        elif key is Key.LEFT:
            self.back()
        elif key is Key.INSTALL:
            self._install()
        elif key is Key.ENTER:
            return self._activate()
        return False

    def _move(self, delta: int) -> None:
        items = self.current_items()
        if not items:
            return
        self.cursor = (self.cursor + delta) % len(items)

    def back(self) -> bool:
        if len(self._stack) <= 1:
            log.debug("Back ignored: already at root")
            return False
        popped = self._stack.pop()
        self._reset_screen()
        log.debug(f"Back from {popped.title!r} to {self.current_menu().title!r}")
        return True

    def _reset_screen(self) -> None:
        self.cursor = 0
        self.status = ""
        self.pending_installer = None

    def _activate(self) -> bool:
        items = self.current_items()
        if not items:
            return False
        selected = items[self.cursor]
        target = selected.target
        if target is ItemKind.QUIT:
            return True
        if target is ItemKind.BACK:
            self.back()
        elif target is ItemKind.SUBMENU:
            self._open_submenu(selected)
        elif selected.action is not None:
            self._run_leaf(selected)
        return False

    def _open_submenu(self, item: MenuItem) -> None:
        if len(self._stack) >= self.max_depth:
            self.status = (
                f"Max menu depth reached ({self.max_depth}). "
                "Go back before opening more submenus."
            )
            log.debug(f"Refused to open {item.label!r}: depth limit")
            return

        failure = first_failed_requirement(item.requirements)
        if failure is not None:
            self.pending_installer = failure.installer
            self.status = f"Requirement failed: {failure.error}"
            if self.pending_installer is not None:
                self.status += f" | Press i to {self.pending_installer.label}."
            return

        self._stack.append(item.submenu)
        self._reset_screen()
        log.debug(f"Opened {item.submenu.title!r} (depth {self.depth})")

    def _run_leaf(self, item: MenuItem) -> None:
        try:
            output = self._invoke(item.action)
        except TerminalError:
            raise
        except Exception as error:
            log.warning(f"Action {item.label!r} failed: {error}")
            self.status = f"Error: {error}"
            return
        self.status = output or ""

    def _install(self) -> None:
        installer = self.pending_installer
        if installer is None:
            self.status = NO_INSTALLER_STATUS
            return
        try:
            output = self._invoke(installer.run)
        except TerminalError:
            raise
        except Exception as error:
            log.warning(f"Installer {installer.label!r} failed: {error}")
            self.status = f"Install error: {error}"
        else:
            log.info(f"Installer {installer.label!r} finished")
            self.status = output or INSTALL_DONE_STATUS
        finally:
            self.pending_installer = None

    def _invoke(self, run: Callable[[], str]) -> str:
        """Call ``run`` with the terminal back in normal mode."""
        with self._terminal.suspended():
            return run()
