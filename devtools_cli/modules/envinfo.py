"""Diagnostics module gated on a local Python interpreter."""

from __future__ import annotations

import os
import platform

from devtools_cli.menu.model import Menu, MenuBuilder
from devtools_cli.modules.base import ActionContext, ActionSpec
from devtools_cli.requirements import command_exists_with_brew


def runtime_info(_context: ActionContext) -> str:
    return (
        f"OS={platform.system().lower()} ARCH={platform.machine()} "
        f"PYTHON={platform.python_version()}"
    )


def path_entries(_context: ActionContext) -> str:
    entries = [entry for entry in os.environ.get("PATH", "").split(os.pathsep) if entry]
    if not entries:
        return "PATH is empty."
    return "\n".join(entries)


class EnvInfoTool:
    tool_id = "env-info"
    label = "Environment Info"
    description = "Diagnostics module with requirement checks"

    def requirements(self):
        return (command_exists_with_brew("python3", "python"),)

    def actions(self):
        return (
            ActionSpec(
                action_id="runtime",
                label="Show runtime info",
                description="Print OS, architecture and Python version",
                usage="devtools run env-info runtime",
                run=runtime_info,
            ),
            ActionSpec(
                action_id="path",
                label="Show PATH entries",
                description="Print PATH split into lines",
                usage="devtools run env-info path",
                run=path_entries,
            ),
        )

    def menu(self) -> Menu:
        paths = (
            MenuBuilder("Environment Info / PATH")
            .action("Show PATH entries", "Displays PATH split into lines", lambda: path_entries(ActionContext()))
            .with_back()
            .build()
        )
        return (
            MenuBuilder("Environment Info Tool")
            .action("Show runtime info", "Prints local runtime metadata", lambda: runtime_info(ActionContext()))
            .submenu("PATH details", "Nested submenu example", paths)
            .with_back()
            .build()
        )
