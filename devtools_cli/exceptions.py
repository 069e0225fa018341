"""Custom exceptions for the devtools launcher.

Exception Hierarchy:
    DevToolsError (base)
        ├── TerminalError
        │   ├── TerminalModeError
        │   └── KeyReadError
        ├── RequirementError
        │   ├── RequirementFailedError
        │   └── InstallError
        ├── ActionError
        └── UsageError

Terminal errors end an interactive session and propagate to the caller.
Requirement and action errors are shown to the user as status text and the
session keeps running.

Usage:
    from devtools_cli.exceptions import RequirementFailedError

    if shutil.which("aws") is None:
        raise RequirementFailedError("aws", "required command 'aws' is not installed")
"""


class DevToolsError(Exception):
    """Base exception for all launcher errors."""



class TerminalError(DevToolsError):
    """Base exception for terminal I/O failures. Always fatal to a session."""



class TerminalModeError(TerminalError):
    """Terminal line discipline could not be queried or changed."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        msg = f"failed to {operation}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class KeyReadError(TerminalError):
    """The first byte of a key press could not be read."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to read key: {reason}")


class RequirementError(DevToolsError):
    """Base exception for requirement checks and their installers."""



class RequirementFailedError(RequirementError):
    """A requirement check did not pass."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class InstallError(RequirementError):
    """An installer for a missing requirement failed."""

    def __init__(self, message: str, target: str = None):
        self.target = target
        super().__init__(message)


class ActionError(DevToolsError):
    """A tool action failed."""

    def __init__(self, message: str, action_id: str = None):
        self.action_id = action_id
        super().__init__(message)


class UsageError(DevToolsError):
    """Line-mode command arguments were invalid."""
