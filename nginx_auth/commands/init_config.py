"""Initialize configuration file for nginx-auth."""

from __future__ import annotations

from pathlib import Path

import click

from nginx_auth.cli import Context, pass_context
from nginx_auth.config import Config, get_default_config_path, save_config
from nginx_auth.utils.output import error, info, success


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/nginx-auth/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Creates a configuration file at the default location
    (~/.config/nginx-auth/config.toml) or at a custom path
    specified with --output. The file is readable by its owner only.

    Examples:

    \b
      # Create config at default location
      nginx-auth init-config

    \b
      # Overwrite existing config
      nginx-auth init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    try:
        save_config(Config(), config_path)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    info("Edit this file to customize your settings.")
    info("NGINX_DOC_ROOT and NGINX_HTPASSWD_FILE still override the paths it sets.")
