"""Run commands with elevated privilege."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import TYPE_CHECKING

from nginx_auth.exceptions import PrivilegedCommandError
from nginx_auth.utils.output import info

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

SUDO = "sudo"


def is_root() -> bool:
    """Return whether the current process runs with uid 0."""
    return os.geteuid() == 0


class PrivilegedRunner:
    """Execute commands through sudo unless already running as root.

    Every command is attempted exactly once. A non-zero exit status or a
    missing executable raises PrivilegedCommandError.

    Usage:
        runner = PrivilegedRunner()
        runner.run(["mkdir", "-p", "/etc/seedbox/config"])
        runner.run(["tee", "/etc/seedbox/config/.htpasswd"], input="...")
    """

    def __init__(self, *, use_sudo: bool = True, dry_run: bool = False) -> None:
        """Initialize the runner.

        Args:
            use_sudo: Prefix commands with sudo. Ignored when running as root.
            dry_run: Report commands without executing them.
        """
        root = is_root()
        self.use_sudo = use_sudo and not root
        self.elevated = use_sudo or root
        self.dry_run = dry_run

    def command(self, args: Sequence[str]) -> list[str]:
        """Build the full argv for *args*."""
        if self.use_sudo:
            return [SUDO, *args]
        return list(args)

    def run(
        self,
        args: Sequence[str],
        *,
        input: str | None = None,
    ) -> subprocess.CompletedProcess[str] | None:
        """Run *args* with elevated privilege.

        Args:
            args: Command and arguments, without the sudo prefix.
            input: Optional text fed to the command's stdin.

        Returns:
            The completed process, or None in dry-run mode.

        Raises:
            PrivilegedCommandError: If the command fails or cannot be started.
        """
        cmd = self.command(args)
        if self.dry_run:
            info(f"Would run: {shlex.join(cmd)}")
            return None
        return self._execute(cmd, input)

    def query(self, args: Sequence[str]) -> str:
        """Run a read-only command with elevated privilege and return its stdout.

        Executed even in dry-run mode.

        Raises:
            PrivilegedCommandError: If the command fails or cannot be started.
        """
        result = self._execute(self.command(args), None)
        return result.stdout.strip()

    def _execute(
        self, cmd: list[str], input: str | None
    ) -> subprocess.CompletedProcess[str]:
        logger.debug("Running: %s", shlex.join(cmd))
        try:
            result = subprocess.run(cmd, input=input, capture_output=True, text=True)
        except OSError as e:
            raise PrivilegedCommandError(cmd, 127, str(e)) from e

        if result.returncode != 0:
            raise PrivilegedCommandError(cmd, result.returncode, result.stderr.strip())
        return result
