"""Exception hierarchy for nginx-auth."""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path


class NginxAuthError(Exception):
    """Base exception for all nginx-auth errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all nginx-auth errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(NginxAuthError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Precondition Errors
class PreconditionError(NginxAuthError):
    """A prerequisite for the installation is not met.

    Raised before anything on disk is touched.
    """

    hint: str | None = None


class DocumentRootNotFoundError(PreconditionError):
    """The Nginx document root is missing or not a directory."""

    def __init__(self, path: Path, reason: str = "does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Nginx document root '{path}' {reason}.")


class ToolNotFoundError(PreconditionError):
    """A required external tool is not on PATH."""

    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        self.hint = hint
        super().__init__(f"'{tool}' command not found.")


# Command Errors
class PrivilegedCommandError(NginxAuthError):
    """A command run with elevated privilege failed."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {shlex.join(self.command)}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)


class CredentialsAccessError(NginxAuthError):
    """The state of the credentials file or its directory cannot be established."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot check {path}: {reason}")
