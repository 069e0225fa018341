"""Line-mode command dispatch: ``devtools run <module> <action> [args]``."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, TextIO, Tuple

from devtools_cli.exceptions import RequirementFailedError, UsageError
from devtools_cli.logging import LoggerFactory
from devtools_cli.modules.base import (
    ActionContext,
    ActionSpec,
    Tool,
    find_action,
    find_tool,
    validate_requirements,
)

log = LoggerFactory.for_system()

RUN_USAGE = "usage: devtools run <module-id> <action-id> [--key value|--key=value|key=value]"
HELP_FLAGS = ("--help", "-h", "help")

HELP_TEXT = """\
Developer Tools CLI

Usage:
  devtools                      Launch interactive TUI
  devtools tui                  Launch interactive TUI
  devtools list                 List modules and actions
  devtools help                 Show this help
  devtools help <module-id>     Show module actions
  devtools help <module-id> <action-id>
  devtools run <module-id> <action-id> [--key value|--key=value|key=value]
  devtools <module-id> <action-id> [args]   Shortcut for run

Examples:
  devtools run chuck-norris-facts random-fact
  devtools run auth-token-generator userpass-token --username alice --password secret
  devtools help auth-token-generator google-token
"""


def run_cli(
    args: Sequence[str],
    stdout: TextIO,
    tools: Sequence[Tool],
    run_tui: Callable[[], None],
) -> None:
    args = list(args)
    if not args or args[0] == "tui":
        run_tui()
        return

    command, rest = args[0], args[1:]
    if command in HELP_FLAGS:
        print_help(stdout, tools, rest)
    elif command == "list":
        print_list(stdout, tools)
    elif command == "run":
        run_action(stdout, tools, rest)
    else:
        run_action(stdout, tools, args)


def _resolve(tools: Sequence[Tool], tool_id: str, action_id: str | None = None) -> Tuple[Tool, ActionSpec | None]:
    tool = find_tool(tools, tool_id)
    if tool is None:
        raise UsageError(f"unknown module {tool_id!r}")
    if action_id is None:
        return tool, None
    action = find_action(tool, action_id)
    if action is None:
        raise UsageError(f"unknown action {action_id!r} for module {tool_id!r}")
    return tool, action


def _sorted_actions(tool: Tool) -> List[ActionSpec]:
    return sorted(tool.actions(), key=lambda action: action.action_id)


def print_help(stdout: TextIO, tools: Sequence[Tool], topic: Sequence[str]) -> None:
    if not topic:
        print(HELP_TEXT, file=stdout)
        print_list(stdout, tools)
        return

    if len(topic) == 1:
        tool, _ = _resolve(tools, topic[0])
        print(f"Module: {tool.label} ({tool.tool_id})", file=stdout)
        print(f"{tool.description}\n", file=stdout)
        print_module_actions(stdout, tool)
        return

    tool, action = _resolve(tools, topic[0], topic[1])
    print_action_help(stdout, tool, action)


def print_action_help(stdout: TextIO, tool: Tool, action: ActionSpec) -> None:
    print(f"Module: {tool.label} ({tool.tool_id})", file=stdout)
    print(f"Action: {action.label} ({action.action_id})", file=stdout)
    print(f"Description: {action.description}", file=stdout)
    if action.usage:
        print(f"Usage: {action.usage}", file=stdout)


def print_list(stdout: TextIO, tools: Sequence[Tool]) -> None:
    print("Available modules and actions:", file=stdout)
    for tool in tools:
        print(f"- {tool.label} ({tool.tool_id})", file=stdout)
        for action in _sorted_actions(tool):
            print(f"  - {action.action_id}: {action.description}", file=stdout)


def print_module_actions(stdout: TextIO, tool: Tool) -> None:
    print("Actions:", file=stdout)
    for action in _sorted_actions(tool):
        print(f"- {action.action_id}: {action.description}", file=stdout)
        if action.usage:
            print(f"  usage: {action.usage}", file=stdout)


def run_action(stdout: TextIO, tools: Sequence[Tool], args: Sequence[str]) -> None:
    if len(args) < 2:
        raise UsageError(RUN_USAGE)

    tool_id, action_id, rest = args[0], args[1], list(args[2:])
    tool, action = _resolve(tools, tool_id, action_id)

    if any(arg in HELP_FLAGS for arg in rest):
        print_action_help(stdout, tool, action)
        return

    try:
        validate_requirements(tool)
    except RequirementFailedError as error:
        raise RequirementFailedError(
            tool_id, f"requirements failed for module {tool_id!r}: {error}"
        ) from error
    params, positionals = parse_params(rest)
    log.info(f"Running {tool_id} {action_id}")
    output = action.run(ActionContext(params=params, positionals=positionals))
    if output:
        print(output, file=stdout)


def parse_params(args: Sequence[str]) -> Tuple[Dict[str, str], List[str]]:
    """Split action arguments into ``--key value`` style params and positionals.

    Accepted forms: ``--key value``, ``--key=value``, ``key=value`` and bare
    positionals. A flag followed by nothing, or by another flag, is an error.
    """
    params: Dict[str, str] = {}
    positionals: List[str] = []

    index = 0
    while index < len(args):
        token = args[index]
        if token.startswith("--"):
            name = token[2:]
            if "=" in name:
                key, value = name.split("=", 1)
                if not key:
                    raise UsageError(f"invalid flag {token!r}")
                params[key] = value
                index += 1
                continue
            if index + 1 >= len(args) or args[index + 1].startswith("-"):
                raise UsageError(f"missing value for flag {token!r}")
            params[name] = args[index + 1]
            index += 2
        elif "=" in token:
            key, value = token.split("=", 1)
            if not key:
                raise UsageError(f"invalid argument {token!r}")
            params[key] = value
            index += 1
        else:
            positionals.append(token)
            index += 1

    return params, positionals
