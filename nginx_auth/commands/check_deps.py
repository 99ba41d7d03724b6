"""Check availability of external tool dependencies."""

from __future__ import annotations

import shutil

import click
from rich.table import Table

from nginx_auth.cli import Context, pass_context
from nginx_auth.preflight import HTPASSWD_INSTALL_HINT
from nginx_auth.utils.output import console, error, info, success

# Each entry: (name, required, purpose, used_by)
_TOOL_REGISTRY: list[tuple[str, bool, str, list[str]]] = [
    ("htpasswd", True, "Credentials file management", ["install"]),
    ("sudo", False, "Elevated privilege when not root", ["install"]),
    ("systemctl", False, "Web server reload", ["install"]),
    ("nginx", False, "Web server", ["install"]),
]


@click.command("check-deps")
@pass_context
def cli(ctx: Context) -> None:
    """Check availability of external tool dependencies.

    Prints a table of the external tools nginx-auth relies on,
    whether they are found on PATH, and which commands need them.

    Exits with code 1 if any required tools are missing.
    """
    table = Table(title="External Dependencies", show_lines=False)
    table.add_column("Tool", style="bold")
    table.add_column("Status")
    table.add_column("Required")
    table.add_column("Path")
    table.add_column("Purpose")
    table.add_column("Used By")

    missing_required: list[str] = []

    for name, required, purpose, used_by in _TOOL_REGISTRY:
        path = shutil.which(name)

        if path is not None:
            status = "[green]found[/green]"
        elif required:
            status = "[red]MISSING[/red]"
            missing_required.append(name)
        else:
            status = "[yellow]not found[/yellow]"

        table.add_row(
            name,
            status,
            "yes" if required else "no",
            path or "",
            purpose,
            ", ".join(used_by),
        )

    console.print(table)
    console.print()

    if missing_required:
        error(
            f"Missing {len(missing_required)} required tool(s): "
            f"{', '.join(missing_required)}"
        )
        info(HTPASSWD_INSTALL_HINT)
        raise SystemExit(1)
    else:
        success("All required tools are available.")
