"""Unit tests for the read-only snippet and status commands."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from nginx_auth.cli import Context
from nginx_auth.commands.snippet import cli as snippet_cli
from nginx_auth.commands.status import cli as status_cli
from nginx_auth.config import Config
from nginx_auth.htpasswd import HTPASSWD_HEADER


class TestSnippet:
    def test_prints_directives(self) -> None:
        config = Config(doc_root=Path("/srv/www"), htpasswd_file=Path("/etc/nginx/.htpasswd"))
        runner = CliRunner()
        result = runner.invoke(snippet_cli, [], obj=Context(config), standalone_mode=False)

        assert result.exception is None
        assert "auth_basic_user_file /etc/nginx/.htpasswd;" in result.output
        assert "root /srv/www;" in result.output

    def test_options_override(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            snippet_cli,
            ["--htpasswd-file", "/opt/users"],
            obj=Context(Config()),
            standalone_mode=False,
        )

        assert "auth_basic_user_file /opt/users;" in result.output

    def test_expands_home_in_paths(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            snippet_cli,
            ["--htpasswd-file", "~/users", "--doc-root", "~/www"],
            obj=Context(Config()),
            standalone_mode=False,
        )

        assert result.exception is None
        home = Path.home()
        assert f"auth_basic_user_file {home / 'users'};" in result.output
        assert f"root {home / 'www'};" in result.output
        assert "~/" not in result.output

    def test_does_not_touch_filesystem(self, app_config: Config) -> None:
        runner = CliRunner()
        runner.invoke(snippet_cli, [], obj=Context(app_config), standalone_mode=False)

        assert not app_config.htpasswd_file.parent.exists()


class TestStatus:
    def test_missing_credentials_file(self, app_config: Config) -> None:
        runner = CliRunner()
        result = runner.invoke(status_cli, [], obj=Context(app_config), standalone_mode=False)

        assert result.exception is None
        assert "missing" in result.output
        assert not app_config.htpasswd_file.exists()

    def test_counts_user_entries(self, app_config: Config) -> None:
        htpasswd = app_config.htpasswd_file
        htpasswd.parent.mkdir(parents=True)
        htpasswd.write_text(HTPASSWD_HEADER + "alice:x\nbob:y\n")
        htpasswd.chmod(0o640)

        runner = CliRunner()
        result = runner.invoke(status_cli, [], obj=Context(app_config), standalone_mode=False)

        assert result.exception is None
        assert "640" in result.output
        assert "User entries" in result.output
        assert "Warning" not in result.output

    def test_warns_on_world_readable_file(self, app_config: Config) -> None:
        htpasswd = app_config.htpasswd_file
        htpasswd.parent.mkdir(parents=True)
        htpasswd.write_text("alice:x\n")
        htpasswd.chmod(0o644)
        before = htpasswd.read_text()

        runner = CliRunner()
        result = runner.invoke(status_cli, [], obj=Context(app_config), standalone_mode=False)

        assert "accessible by other users" in result.output
        # Reporting only; permissions stay as they are
        assert htpasswd.read_text() == before
        assert htpasswd.stat().st_mode & 0o777 == 0o644

    def test_non_utf8_credentials_file(self, app_config: Config) -> None:
        htpasswd = app_config.htpasswd_file
        htpasswd.parent.mkdir(parents=True)
        htpasswd.write_bytes(b"j\xfcrgen:$apr1$x$y\n")
        htpasswd.chmod(0o640)

        runner = CliRunner()
        result = runner.invoke(status_cli, [], obj=Context(app_config), standalone_mode=False)

        assert result.exception is None
        assert "User entries" in result.output
        assert "unreadable" not in result.output

    def test_denied_stat_reported(self, app_config: Config) -> None:
        htpasswd = app_config.htpasswd_file
        real_stat = os.stat

        def stat_denying_htpasswd(path, *args, **kwargs):
            if isinstance(path, (str, os.PathLike)) and Path(path) == htpasswd:
                raise PermissionError(13, "Permission denied", str(path))
            return real_stat(path, *args, **kwargs)

        runner = CliRunner()
        with (
            patch("nginx_auth.utils.privileged.is_root", return_value=False),
            patch("nginx_auth.htpasswd.os.stat", side_effect=stat_denying_htpasswd),
        ):
            result = runner.invoke(
                status_cli, [], obj=Context(app_config), standalone_mode=False
            )

        assert result.exception is None
        assert "cannot check" in result.output
        assert "Cannot check" in result.output
