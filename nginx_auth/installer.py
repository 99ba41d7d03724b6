"""The install procedure: validate, ensure credentials, print guidance, reload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nginx_auth.guidance import print_guidance
from nginx_auth.htpasswd import (
    CredentialsStatus,
    ensure_credentials_file,
    ensure_directory,
)
from nginx_auth.preflight import run_preflight
from nginx_auth.service import reload_service
from nginx_auth.utils.output import info, success, warning

if TYPE_CHECKING:
    from nginx_auth.config import Config
    from nginx_auth.utils.privileged import PrivilegedRunner


@dataclass
class InstallResult:
    """What an install run did."""

    directory_created: bool = False
    file_status: CredentialsStatus | None = None
    reloaded: bool | None = None  # None = reload skipped


def run_install(
    config: Config,
    runner: PrivilegedRunner,
    *,
    reload: bool = True,
) -> InstallResult:
    """Run the full setup against *config*.

    Preconditions are checked before any side effect. Failures creating
    the directory or file propagate; a failed reload only produces a
    warning.

    Args:
        config: Resolved configuration.
        runner: Runner for privileged commands.
        reload: Attempt to reload the web server at the end.

    Returns:
        InstallResult describing the run.

    Raises:
        PreconditionError: If the document root or htpasswd tool is missing.
        CredentialsAccessError: If the state of the directory or file cannot
            be established.
        PrivilegedCommandError: If creating the directory or file fails.
    """
    run_preflight(config)

    result = InstallResult()
    result.directory_created = ensure_directory(config.htpasswd_file.parent, runner)
    result.file_status = ensure_credentials_file(config.htpasswd_file, runner)

    print_guidance(config)

    if reload:
        info(f"Attempting to reload {config.service}...")
        result.reloaded = reload_service(config.service, runner)
        if result.reloaded:
            success(f"{config.service} reloaded successfully.")
        else:
            warning(
                f"Failed to reload {config.service}. Please check your Nginx "
                f"configuration and reload manually."
            )

    return result
