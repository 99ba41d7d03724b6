"""Tests for the top-level command group."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from nginx_auth import __version__
from nginx_auth.cli import cli


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_commands_registered() -> None:
    for name in ("install", "snippet", "status", "check-deps", "init-config", "help"):
        assert name in cli.commands


def test_help_for_subcommand() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["help", "install"])
    assert result.exit_code == 0
    assert "--no-reload" in result.output


def test_invalid_config_exits(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.toml"
    config_path.write_text("[nginx\n")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_path), "snippet"])

    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_environment_variables_select_paths(tmp_path: Path, doc_root: Path) -> None:
    htpasswd = tmp_path / "env-auth" / ".htpasswd"
    config_path = tmp_path / "config.toml"
    config_path.write_text("[privileges]\nuse_sudo = false\n")

    runner = CliRunner()
    with patch(
        "nginx_auth.preflight.shutil.which", return_value="/usr/bin/htpasswd"
    ), patch("nginx_auth.installer.reload_service", return_value=False):
        result = runner.invoke(
            cli,
            ["--config", str(config_path), "install"],
            env={"NGINX_DOC_ROOT": str(doc_root), "NGINX_HTPASSWD_FILE": str(htpasswd)},
        )

    assert result.exit_code == 0
    assert htpasswd.is_file()
    assert f"Your Nginx document root is: {doc_root}" in result.output


def test_missing_doc_root_exit_code(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'[paths]\ndoc_root = "{tmp_path / "nope"}"\n')

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(config_path), "install", "--no-sudo"],
        env={"NGINX_DOC_ROOT": None},
    )

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_quiet_still_prints_snippet(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("")

    runner = CliRunner()
    result = runner.invoke(cli, ["--quiet", "--config", str(config_path), "snippet"])

    assert result.exit_code == 0
    assert "auth_basic_user_file" in result.output
