"""
Pytest configuration and shared fixtures for devtools-cli tests.

The navigator is driven through ``FakeTerminal`` so no real TTY is needed.
"""

from contextlib import contextmanager
from typing import Iterable, List
from unittest.mock import Mock

import pytest

from devtools_cli.config import settings
from devtools_cli.exceptions import KeyReadError, RequirementFailedError
from devtools_cli.menu import Menu, MenuBuilder, MenuNavigator
from devtools_cli.requirements import InstallAction, RequirementCheck
from devtools_cli.ui.keys import Key
from devtools_cli.ui.renderer import MenuRenderer


class FakeTerminal:
    """Scripted stand-in for ``Terminal`` that records what the navigator does."""

    def __init__(self, keys: Iterable[Key] = ()) -> None:
        self.keys: List[Key] = list(keys)
        self.frames: List[str] = []
        self.raw = False
        self.suspend_count = 0
        self.session_closed = False

    @contextmanager
    def session(self):
        self.raw = True
        try:
            yield self
        finally:
            self.raw = False
            self.session_closed = True

    @contextmanager
    def suspended(self):
        self.suspend_count += 1
        self.raw = False
        try:
            yield
        finally:
            self.raw = True

    def read_key(self) -> Key:
        if not self.keys:
            raise KeyReadError("end of input")
        return self.keys.pop(0)

    def paint(self, frame: str) -> None:
        self.frames.append(frame)


# ==============================================================================
# Navigator Fixtures
# ==============================================================================


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def plain_renderer() -> MenuRenderer:
    return MenuRenderer(use_color=False)


@pytest.fixture
def make_navigator(fake_terminal, plain_renderer):
    """Factory building a navigator wired to the shared fake terminal."""

    def factory(root: Menu, max_depth: int = 4) -> MenuNavigator:
        return MenuNavigator(root, fake_terminal, plain_renderer, max_depth=max_depth)

    return factory


@pytest.fixture
def child_menu() -> Menu:
    return (
        MenuBuilder("Child")
        .action("Child action", "Returns text", lambda: "child ran")
        .with_back()
        .build()
    )


@pytest.fixture
def installer() -> InstallAction:
    return InstallAction(label="Install thing with Homebrew", run=Mock(return_value="installed"))


@pytest.fixture
def failing_check(installer) -> RequirementCheck:
    return RequirementCheck(
        name="thing",
        validate=Mock(side_effect=RequirementFailedError("thing", "required command 'thing' is not installed")),
        installer=installer,
    )


@pytest.fixture
def gated_root(child_menu, failing_check) -> Menu:
    """Root whose first item is gated by a failing check with an installer."""
    return (
        MenuBuilder("Root")
        .submenu("Gated", "Needs thing", child_menu, failing_check)
        .submenu("Open", "No checks", child_menu)
        .with_quit()
        .build()
    )


# ==============================================================================
# Settings Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temp file and reset to defaults for every test."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "SETTINGS_PATH", path)
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)
    yield path
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)
