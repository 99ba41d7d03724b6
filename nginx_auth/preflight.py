"""Precondition checks run before anything on disk is touched."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from nginx_auth.exceptions import DocumentRootNotFoundError, ToolNotFoundError

if TYPE_CHECKING:
    from nginx_auth.config import Config

HTPASSWD_TOOL = "htpasswd"
HTPASSWD_INSTALL_HINT = (
    "Please install apache2-utils (Debian/Ubuntu) or httpd-tools (RHEL/CentOS) first."
)


def check_document_root(path: Path) -> None:
    """Verify the document root is an existing directory.

    Raises:
        DocumentRootNotFoundError: If it is missing, unreadable or not a directory.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        raise DocumentRootNotFoundError(path) from None
    except OSError as e:
        raise DocumentRootNotFoundError(
            path, f"cannot be accessed ({e.strerror or e})"
        ) from e
    if not stat.S_ISDIR(st.st_mode):
        raise DocumentRootNotFoundError(path, "is not a directory")


def check_tool(name: str, hint: str | None = None) -> str:
    """Locate an external tool on PATH.

    Args:
        name: Executable name.
        hint: Installation hint attached to the error.

    Returns:
        Absolute path of the executable.

    Raises:
        ToolNotFoundError: If the tool is not found.
    """
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(name, hint)
    return path


def run_preflight(config: Config) -> None:
    """Run all precondition checks in order, stopping at the first failure."""
    check_document_root(config.doc_root)
    check_tool(HTPASSWD_TOOL, HTPASSWD_INSTALL_HINT)
