"""Show the resolved setup and the state of the files it refers to."""

from __future__ import annotations

from pathlib import Path

import click

from nginx_auth.cli import Context, pass_context
from nginx_auth.exceptions import CredentialsAccessError
from nginx_auth.htpasswd import PathKind, path_kind, read_users
from nginx_auth.utils.fileops import file_mode, is_world_accessible
from nginx_auth.utils.output import console, create_table, error, warning
from nginx_auth.utils.privileged import PrivilegedRunner


@click.command("status")
@pass_context
def cli(ctx: Context) -> None:
    """Show document root, credentials file and reload settings.

    Read-only: reports whether the paths exist, the credentials file
    mode and how many user entries it holds.
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(1)

    table = create_table(title="Basic Auth Setup", show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("State")

    # status never escalates; a denied stat is shown as such
    runner = PrivilegedRunner(use_sudo=False)

    doc_kind = _kind(config.doc_root, runner)
    if doc_kind is PathKind.DIRECTORY:
        doc_state = "[green]exists[/green]"
    elif doc_kind is None:
        doc_state = "[yellow]cannot check[/yellow]"
    else:
        doc_state = "[red]missing[/red]"
    table.add_row("Document root", str(config.doc_root), doc_state)

    htpasswd = config.htpasswd_file
    file_kind = _kind(htpasswd, runner)
    mode = file_mode(htpasswd) if file_kind is PathKind.FILE else None
    if file_kind is None:
        file_state = "[yellow]cannot check[/yellow]"
    elif mode is None:
        file_state = "[yellow]missing[/yellow]"
    else:
        file_state = f"[green]exists[/green] (mode {mode:03o})"
    table.add_row("Credentials file", str(htpasswd), file_state)

    if mode is not None:
        try:
            users = read_users(htpasswd)
        except OSError:
            entries = "[yellow]unreadable[/yellow]"
        else:
            entries = str(len(users))
        table.add_row("User entries", entries, "")

    table.add_row("Service", config.service, "reload on install" if config.reload else "")
    table.add_row("Config file", str(config.config_path or "(defaults)"), "")

    console.print(table)

    if mode is not None and is_world_accessible(mode):
        warning(f"Credentials file is accessible by other users (mode {mode:03o}): {htpasswd}")


def _kind(path: Path, runner: PrivilegedRunner) -> PathKind | None:
    try:
        return path_kind(path, runner)
    except CredentialsAccessError as e:
        warning(str(e))
        return None
