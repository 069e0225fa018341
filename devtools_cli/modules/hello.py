"""Example standalone module with nested menus."""

from __future__ import annotations

from datetime import datetime

from devtools_cli.menu.model import Menu, MenuBuilder
from devtools_cli.modules.base import ActionContext, ActionSpec

GREETING = "Hello from the Hello Tool module."


def greet(_context: ActionContext) -> str:
    return GREETING


def timestamp(_context: ActionContext) -> str:
    """Current local time in RFC 3339 form."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


class HelloTool:
    tool_id = "hello-tool"
    label = "Hello Tool"
    description = "Example standalone module with nested menus"

    def requirements(self):
        return ()

    def actions(self):
        return (
            ActionSpec(
                action_id="greet",
                label="Print greeting",
                description="Simple example action",
                usage="devtools run hello-tool greet",
                run=greet,
            ),
            ActionSpec(
                action_id="timestamp",
                label="Show current timestamp",
                description="Print the current RFC3339 timestamp",
                usage="devtools run hello-tool timestamp",
                run=timestamp,
            ),
        )

    def menu(self) -> Menu:
        utilities = (
            MenuBuilder("Hello Tool / Utilities")
            .action("Show current timestamp", "Runs a local action", lambda: timestamp(ActionContext()))
            .with_back()
            .build()
        )
        return (
            MenuBuilder("Hello Tool")
            .action("Print greeting", "Simple example action", lambda: greet(ActionContext()))
            .submenu("Utilities", "Nested submenu example", utilities)
            .with_back()
            .build()
        )
