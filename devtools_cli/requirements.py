"""Preconditions that gate entry into a tool's menu.

A check is evaluated every time its submenu is entered. Nothing is cached, so
a tool installed mid-session is picked up on the next attempt.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from devtools_cli.exceptions import InstallError, RequirementFailedError
from devtools_cli.logging import LoggerFactory, operation_context

log = LoggerFactory.for_tools("requirements")


@dataclass(frozen=True)
class InstallAction:
    """Remediation offered when a requirement fails."""

    label: str
    run: Callable[[], str]


@dataclass(frozen=True)
class RequirementCheck:
    name: str
    validate: Optional[Callable[[], None]] = None
    installer: Optional[InstallAction] = None

    def run(self) -> None:
        """Raise if the requirement is not met. A check without a validator passes."""
        if self.validate is None:
            return
        self.validate()


@dataclass(frozen=True)
class RequirementFailure:
    check: RequirementCheck
    error: Exception

    @property
    def installer(self) -> Optional[InstallAction]:
        return self.check.installer


def first_failed_requirement(
    checks: Iterable[RequirementCheck],
) -> Optional[RequirementFailure]:
    """Evaluate checks in order and stop at the first one that fails."""
    for check in checks:
        try:
            check.run()
        except Exception as error:
            log.info(f"Requirement {check.name!r} failed: {error}")
            return RequirementFailure(check=check, error=error)
        log.debug(f"Requirement {check.name!r} passed")
    return None


def command_exists(name: str) -> RequirementCheck:
    def validate() -> None:
        if shutil.which(name) is None:
            raise RequirementFailedError(name, f"required command {name!r} is not installed")

    return RequirementCheck(name=name, validate=validate)


def _brew_install(formula: str) -> str:
    if shutil.which("brew") is None:
        raise InstallError(
            f"homebrew is required for auto-install of {formula!r}", target=formula
        )
    with operation_context("install", target=formula) as op_log:
        op_log.debug(f"Running brew install {formula}")
        # stdio is inherited so brew can show progress and prompt on the real terminal
        result = subprocess.run(["brew", "install", formula], check=False)
        if result.returncode != 0:
            raise InstallError(
                f"brew install {formula} failed with exit code {result.returncode}",
                target=formula,
            )
    return f"Installed {formula!r} with Homebrew."


def command_exists_with_brew(name: str, formula: str) -> RequirementCheck:
    check = command_exists(name)
    return RequirementCheck(
        name=check.name,
        validate=check.validate,
        installer=InstallAction(
            label=f"Install {name} with Homebrew",
            run=lambda: _brew_install(formula),
        ),
    )


def env_var_set(name: str) -> RequirementCheck:
    def validate() -> None:
        if not os.environ.get(name):
            raise RequirementFailedError(
                name, f"required environment variable {name!r} is not set"
            )

    return RequirementCheck(name=name, validate=validate)
