"""Credentials file (.htpasswd) initialization.

The credentials file is managed outside this tool. We only make sure it
exists so that Nginx can start with ``auth_basic_user_file`` pointing at
it. An existing file is never rewritten and its permissions are left
alone.
"""

from __future__ import annotations

import enum
import logging
import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from nginx_auth.exceptions import CredentialsAccessError, PrivilegedCommandError
from nginx_auth.utils.output import debug, info, warning

if TYPE_CHECKING:
    from nginx_auth.utils.privileged import PrivilegedRunner

logger = logging.getLogger(__name__)

HTPASSWD_HEADER = (
    "# This file is managed externally. Add your user entries in the format:\n"
    "# username:hashed_password\n"
)

# Owner read/write, group read
HTPASSWD_MODE = "640"


class CredentialsStatus(enum.Enum):
    """Outcome of ensure_credentials_file."""

    CREATED = "created"
    FOUND = "found"


class PathKind(enum.Enum):
    """What, if anything, exists at a path."""

    ABSENT = "absent"
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


# Runs under sudo when the invoking user cannot stat the path itself.
_TEST_SCRIPT = (
    'if [ -d "$1" ]; then echo directory; '
    'elif [ -f "$1" ]; then echo file; '
    'elif [ -e "$1" ]; then echo other; '
    "else echo absent; fi"
)


def path_kind(path: Path, runner: PrivilegedRunner) -> PathKind:
    """Determine what exists at *path*.

    A plain ``stat`` is tried first. When it is denied, the test is
    repeated with elevated privilege if the runner has it.

    Raises:
        CredentialsAccessError: If the state of *path* cannot be established.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return PathKind.ABSENT
    except PermissionError as e:
        if not runner.elevated:
            raise CredentialsAccessError(
                path, "permission denied without elevated privilege"
            ) from e
        debug(f"stat {path} denied, retrying with elevated privilege")
        return _elevated_path_kind(path, runner)
    except OSError as e:
        raise CredentialsAccessError(path, e.strerror or str(e)) from e

    if stat.S_ISDIR(st.st_mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return PathKind.FILE
    return PathKind.OTHER


def _elevated_path_kind(path: Path, runner: PrivilegedRunner) -> PathKind:
    try:
        output = runner.query(["sh", "-c", _TEST_SCRIPT, "sh", str(path)])
    except PrivilegedCommandError as e:
        raise CredentialsAccessError(path, str(e)) from e
    try:
        return PathKind(output)
    except ValueError:
        raise CredentialsAccessError(path, f"unexpected test result {output!r}") from None


def ensure_directory(path: Path, runner: PrivilegedRunner) -> bool:
    """Create the credentials directory if it is missing.

    Args:
        path: Directory that will hold the credentials file.
        runner: Runner used for the privileged ``mkdir -p``.

    Returns:
        True if the directory was created.

    Raises:
        CredentialsAccessError: If the path cannot be checked or is not a directory.
        PrivilegedCommandError: If creation fails.
    """
    kind = path_kind(path, runner)
    if kind is PathKind.DIRECTORY:
        logger.debug("Credentials directory exists: %s", path)
        return False
    if kind is not PathKind.ABSENT:
        raise CredentialsAccessError(path, "exists but is not a directory")

    info(f"Creating directory for .htpasswd file: {path}")
    runner.run(["mkdir", "-p", str(path)])
    return True


def ensure_credentials_file(path: Path, runner: PrivilegedRunner) -> CredentialsStatus:
    """Create a placeholder credentials file if none exists.

    A fresh file gets the two-line header and mode 640. An existing file
    is only reported. Nothing is written unless the file is known to be
    absent.

    Raises:
        CredentialsAccessError: If the path cannot be checked or is not a regular file.
        PrivilegedCommandError: If writing or chmod fails.
    """
    kind = path_kind(path, runner)
    if kind is PathKind.FILE:
        info(f".htpasswd file found at: {path}")
        return CredentialsStatus.FOUND
    if kind is not PathKind.ABSENT:
        raise CredentialsAccessError(path, "exists but is not a regular file")

    warning(f"{path} does not exist.")
    info(
        "Creating a placeholder .htpasswd file. "
        "Please update it manually with valid user credentials."
    )
    runner.run(["tee", str(path)], input=HTPASSWD_HEADER)
    runner.run(["chmod", HTPASSWD_MODE, str(path)])
    return CredentialsStatus.CREATED


def read_users(path: Path) -> list[str]:
    """Return the usernames listed in a credentials file.

    Comment and blank lines are skipped. Bytes that are not valid UTF-8
    are replaced rather than rejected.

    Raises:
        OSError: If the file cannot be read.
    """
    users = []
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        users.append(line.split(":", 1)[0])
    return users
