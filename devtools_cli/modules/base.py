"""Contract between tool modules and the launcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from devtools_cli.exceptions import RequirementFailedError
from devtools_cli.menu.model import Menu, MenuItem, quit_item
from devtools_cli.requirements import RequirementCheck, first_failed_requirement


@dataclass
class ActionContext:
    """Arguments passed to an action from the line-mode command."""

    params: Dict[str, str] = field(default_factory=dict)
    positionals: List[str] = field(default_factory=list)

    def param_or_positional(self, key: str, position: int) -> str:
        value = self.params.get(key)
        if value:
            return value
        if 0 <= position < len(self.positionals):
            return self.positionals[position]
        return ""


@dataclass(frozen=True)
class ActionSpec:
    action_id: str
    label: str
    description: str
    usage: str
    run: Callable[[ActionContext], str]


@runtime_checkable
class Tool(Protocol):
    tool_id: str
    label: str
    description: str

    def requirements(self) -> Sequence[RequirementCheck]: ...

    def actions(self) -> Sequence[ActionSpec]: ...

    def menu(self) -> Menu: ...


def to_menu_item(tool: Tool) -> MenuItem:
    return MenuItem(
        label=tool.label,
        description=tool.description,
        submenu=tool.menu(),
        requirements=tuple(tool.requirements()),
    )


def build_root_menu(title: str, tools: Sequence[Tool]) -> Menu:
    """Root menu: one entry per tool followed by the Exit item."""
    items = [to_menu_item(tool) for tool in tools]
    items.append(quit_item("Exit"))
    return Menu(title=title, items=items)


def find_tool(tools: Sequence[Tool], tool_id: str) -> Optional[Tool]:
    for tool in tools:
        if tool.tool_id == tool_id:
            return tool
    return None


def find_action(tool: Tool, action_id: str) -> Optional[ActionSpec]:
    for action in tool.actions():
        if action.action_id == action_id:
            return action
    return None


def validate_requirements(tool: Tool) -> None:
    """Raise for the first failing requirement, naming its installer if any."""
    failure = first_failed_requirement(tool.requirements())
    if failure is None:
        return
    message = str(failure.error)
    if failure.installer is not None:
        message += f" (installer available: {failure.installer.label})"
    raise RequirementFailedError(failure.check.name, message) from failure.error
