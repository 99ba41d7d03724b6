"""File helpers for the nginx-auth config file and credentials inspection."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def secure_mkdir(path: Path) -> None:
    """Create *path* (and parents) and restrict it to the owner (0o700)."""
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)


def secure_atomic_write(path: Path, content: str) -> None:
    """Write *content* to *path* atomically with 0o600 permissions.

    The parent directory is created with 0o700 when missing. A temporary
    file in the same directory is renamed over *path* so readers never
    see partial content.
    """
    if not path.parent.exists():
        secure_mkdir(path.parent)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".tmp")
    try:
        os.fchmod(fd, 0o600)
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise


def file_mode(path: Path) -> int | None:
    """Return the permission bits of *path*, or None if it cannot be stat'ed."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        return None


def is_world_accessible(mode: int) -> bool:
    """True if any of the "other" permission bits are set."""
    return bool(mode & stat.S_IRWXO)
