"""Tool modules reachable from the launcher."""

from __future__ import annotations

from typing import List

from devtools_cli.modules.authtoken import AuthTokenTool
from devtools_cli.modules.base import (
    ActionContext,
    ActionSpec,
    Tool,
    build_root_menu,
    find_action,
    find_tool,
    to_menu_item,
    validate_requirements,
)
from devtools_cli.modules.chucknorris import ChuckNorrisTool
from devtools_cli.modules.cloudcli import CloudCliTool
from devtools_cli.modules.envinfo import EnvInfoTool
from devtools_cli.modules.hello import HelloTool


def default_tools() -> List[Tool]:
    return [
        HelloTool(),
        EnvInfoTool(),
        ChuckNorrisTool(),
        AuthTokenTool(),
        CloudCliTool(),
    ]


__all__ = [
    "ActionContext",
    "ActionSpec",
    "AuthTokenTool",
    "ChuckNorrisTool",
    "CloudCliTool",
    "EnvInfoTool",
    "HelloTool",
    "Tool",
    "build_root_menu",
    "default_tools",
    "find_action",
    "find_tool",
    "to_menu_item",
    "validate_requirements",
]
