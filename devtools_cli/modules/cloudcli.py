"""AWS and Azure CLI checks with Homebrew install actions."""

from __future__ import annotations

import subprocess
from typing import Optional

from devtools_cli.exceptions import ActionError
from devtools_cli.logging import LoggerFactory
from devtools_cli.menu.model import Menu, MenuBuilder
from devtools_cli.modules.base import ActionContext, ActionSpec
from devtools_cli.requirements import command_exists_with_brew

log = LoggerFactory.for_tools("cloud-cli-checks")

NO_OUTPUT = "Command completed with no output."


def _escape_braces(text: str) -> str:
    """Escape curly braces for loguru formatting."""
    return text.replace("{", "{{").replace("}", "}}")


def validate_command_args(args: list[str]) -> None:
    """Validate command arguments before executing."""
    if not args or not all(isinstance(arg, str) and arg for arg in args):
        raise ValueError("Command args must be a non-empty list of strings.")


def run_command(args: list[str], *, timeout: Optional[float] = None) -> str:
    """Run a command and return its trimmed output.

    stdout is preferred; stderr is used when stdout is empty (``aws --version``
    historically prints to stderr).
    """
    validate_command_args(args)
    command = " ".join(args)
    log.debug(f"Running command: {_escape_braces(repr(args))}")
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ActionError(f"{command} failed: {e}")
    log.debug(f"Command return code: {result.returncode}")
    stdout = result.stdout.strip()
    stderr = result.stderr.strip()
    if result.returncode != 0:
        raise ActionError(f"{command} failed: exit status {result.returncode} ({stderr})")
    return stdout or stderr or NO_OUTPUT


def aws_version(_context: ActionContext) -> str:
    return run_command(["aws", "--version"])


def azure_version(_context: ActionContext) -> str:
    return run_command(["az", "version"])


class CloudCliTool:
    tool_id = "cloud-cli-checks"
    label = "Cloud CLI Checks"
    description = "AWS/Azure CLI checks with install actions"

    def requirements(self):
        return ()

    def actions(self):
        return (
            ActionSpec(
                action_id="aws-version",
                label="Show aws version",
                description="Runs aws --version",
                usage="devtools run cloud-cli-checks aws-version",
                run=aws_version,
            ),
            ActionSpec(
                action_id="azure-version",
                label="Show az version",
                description="Runs az version",
                usage="devtools run cloud-cli-checks azure-version",
                run=azure_version,
            ),
        )

    def menu(self) -> Menu:
        aws_menu = (
            MenuBuilder("Cloud CLI / AWS")
            .action("Show aws version", "Runs aws --version", lambda: aws_version(ActionContext()))
            .with_back()
            .build()
        )
        azure_menu = (
            MenuBuilder("Cloud CLI / Azure")
            .action("Show az version", "Runs az version", lambda: azure_version(ActionContext()))
            .with_back()
            .build()
        )
        return (
            MenuBuilder("Cloud CLI Checks")
            .submenu(
                "AWS CLI",
                "Requires aws command",
                aws_menu,
                command_exists_with_brew("aws", "awscli"),
            )
            .submenu(
                "Azure CLI",
                "Requires az command",
                azure_menu,
                command_exists_with_brew("az", "azure-cli"),
            )
            .with_back()
            .build()
        )
