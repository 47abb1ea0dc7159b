"""Fatal error taxonomy for version resolution and launching.

Core modules raise these; only the CLI entrypoint turns them into a one-line
diagnostic and a process exit code.
"""
from __future__ import annotations

from constants import ExitCodes


class RunnerError(Exception):
    """Base class for every fatal launcher condition."""

    exit_code = ExitCodes.FATAL.value


class MissingTool(RunnerError):
    """A required external executable is not on PATH."""

    def __init__(self, tool: str, purpose: str = ""):
        self.tool = tool
        self.purpose = purpose
        message = f"required tool '{tool}' not found on PATH"
        if purpose:
            message += f" (needed for {purpose})"
        super().__init__(message)


class MissingArgument(RunnerError):
    """A flag that takes a value was given none, or a flag-shaped token."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"{flag} requires an argument")


class LookupFailure(RunnerError):
    """An external lookup returned a non-success result."""

    def __init__(self, step: str, detail: str = ""):
        self.step = step
        self.detail = detail
        message = f"failed to resolve {step}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
