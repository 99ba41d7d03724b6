"""Print the Nginx configuration snippet."""

from __future__ import annotations

from pathlib import Path

import click

from nginx_auth.cli import Context, pass_context
from nginx_auth.guidance import print_guidance
from nginx_auth.utils.output import error


@click.command("snippet")
@click.option(
    "--doc-root",
    type=click.Path(path_type=Path),
    default=None,
    help="Document root to show in the example server block",
)
@click.option(
    "--htpasswd-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Credentials file path to reference",
)
@pass_context
def cli(ctx: Context, doc_root: Path | None, htpasswd_file: Path | None) -> None:
    """Print the Nginx auth_basic directives without changing anything."""
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(1)

    if doc_root is not None:
        config.doc_root = doc_root.expanduser()
    if htpasswd_file is not None:
        config.htpasswd_file = htpasswd_file.expanduser()

    print_guidance(config)
