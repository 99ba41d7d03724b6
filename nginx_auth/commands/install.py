"""Set up Basic Authentication for the Nginx site."""

from __future__ import annotations

from pathlib import Path

import click

from nginx_auth.cli import Context, pass_context
from nginx_auth.exceptions import NginxAuthError, PreconditionError, PrivilegedCommandError
from nginx_auth.installer import run_install
from nginx_auth.utils.output import error, info, verbose
from nginx_auth.utils.privileged import PrivilegedRunner

EXIT_PRECONDITION = 1
EXIT_NO_CONFIG = 1


@click.command("install")
@click.option(
    "--doc-root",
    type=click.Path(path_type=Path),
    default=None,
    help="Nginx document root (overrides NGINX_DOC_ROOT and config)",
)
@click.option(
    "--htpasswd-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Credentials file (overrides NGINX_HTPASSWD_FILE and config)",
)
@click.option(
    "--service",
    default=None,
    help="systemd unit to reload (default: nginx)",
)
@click.option(
    "--reload/--no-reload",
    "reload",
    default=None,
    help="Reload the web server afterwards (default: from config, on)",
)
@click.option(
    "--no-sudo",
    is_flag=True,
    default=False,
    help="Run privileged commands directly instead of through sudo",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show privileged commands without running them",
)
@pass_context
def cli(
    ctx: Context,
    doc_root: Path | None,
    htpasswd_file: Path | None,
    service: str | None,
    reload: bool | None,
    no_sudo: bool,
    dry_run: bool,
) -> None:
    """Set up HTTP Basic Authentication for Nginx.

    Checks that the document root exists and htpasswd is installed,
    creates the credentials file (mode 640, placeholder header) if it
    is missing, prints the Nginx directives to add and reloads Nginx.

    An existing credentials file is left untouched. A failed reload is
    reported but does not change the exit status.

    Examples:

    \b
      # Use defaults or NGINX_DOC_ROOT / NGINX_HTPASSWD_FILE
      nginx-auth install

    \b
      # Custom paths, no reload
      nginx-auth install --doc-root /srv/www --htpasswd-file /etc/nginx/.htpasswd --no-reload
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_NO_CONFIG)

    if doc_root is not None:
        config.doc_root = doc_root.expanduser()
    if htpasswd_file is not None:
        config.htpasswd_file = htpasswd_file.expanduser()
    if service is not None:
        config.service = service
    if reload is None:
        reload = config.reload

    runner = PrivilegedRunner(use_sudo=config.use_sudo and not no_sudo, dry_run=dry_run)
    verbose(f"Document root: {config.doc_root}")
    verbose(f"Credentials file: {config.htpasswd_file}")
    if runner.use_sudo:
        verbose("Privileged commands run through sudo")

    info("Setting up Basic HTTP Authentication (Nginx mode)...")

    try:
        run_install(config, runner, reload=reload)
    except PreconditionError as e:
        error(str(e), hint=e.hint)
        raise SystemExit(EXIT_PRECONDITION)
    except PrivilegedCommandError as e:
        error(str(e))
        raise SystemExit(e.returncode or 1)
    except NginxAuthError as e:
        error(str(e))
        raise SystemExit(1)
