"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from nginx_auth.utils.output import console, error_console, set_color, set_verbosity

if TYPE_CHECKING:
    from collections.abc import Generator

    from nginx_auth.config import Config
    from nginx_auth.utils.privileged import PrivilegedRunner


@pytest.fixture(autouse=True)
def reset_output() -> Generator[None, None, None]:
    """Reset module-level output flags left behind by CLI invocations."""
    # Wide consoles keep long tmp paths on one line
    console.width = 200
    error_console.width = 200
    set_verbosity()
    yield
    set_verbosity()
    set_color(True)


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create a sample config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("""[paths]
doc_root = "/srv/www"
htpasswd_file = "/etc/nginx/.htpasswd"

[nginx]
service = "nginx-test"
reload = false

[display]
colored_output = true
""")
    return config_path


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """An existing document root."""
    path = tmp_path / "www"
    path.mkdir()
    return path


@pytest.fixture
def htpasswd_path(tmp_path: Path) -> Path:
    """Credentials file location whose parent directory does not exist yet."""
    return tmp_path / "seedbox" / "config" / ".htpasswd"


@pytest.fixture
def app_config(doc_root: Path, htpasswd_path: Path) -> Config:
    """Create a Config object pointing at temporary paths."""
    from nginx_auth.config import Config

    return Config(
        doc_root=doc_root,
        htpasswd_file=htpasswd_path,
        colored_output=False,
        use_sudo=False,
    )


@pytest.fixture
def direct_runner() -> PrivilegedRunner:
    """A runner that executes commands without sudo."""
    from nginx_auth.utils.privileged import PrivilegedRunner

    return PrivilegedRunner(use_sudo=False)


@pytest.fixture
def htpasswd_installed() -> Generator[None, None, None]:
    """Pretend the htpasswd tool is on PATH."""
    with patch(
        "nginx_auth.preflight.shutil.which",
        side_effect=lambda name: f"/usr/bin/{name}",
    ):
        yield


@pytest.fixture
def htpasswd_missing() -> Generator[None, None, None]:
    """Pretend the htpasswd tool is not installed."""
    with patch("nginx_auth.preflight.shutil.which", return_value=None):
        yield
