"""Layer inspection CLI for harmonylayers.

Provides commands to list stored layers and print one of them.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from harmonylayers.domain.errors import MigrationError
from harmonylayers.infrastructure.db import DatabaseError
from harmonylayers.interfaces.cli.context import (CLIContext, build_cli_context,
                                                  layer_store_service)

console = Console()
DEFAULT_CLI_CONTEXT = build_cli_context()


@click.group()
@click.option(
    "--db",
    "db_path",
    default=None,
    show_default=str(DEFAULT_CLI_CONTEXT.db_path),
    help="Path to the SQLite layer database.",
)
@click.pass_context
def layers(ctx: click.Context, db_path: str | None) -> None:
    """Inspect configuration layers stored in the database."""

    ctx.ensure_object(dict)
    ctx.obj["cli_context"] = (
        DEFAULT_CLI_CONTEXT if db_path is None else build_cli_context(db_path)
    )


@layers.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List all layers with content."""

    cli_context: CLIContext = ctx.obj["cli_context"]
    try:
        with layer_store_service(cli_context) as service:
            stored = service.list_layers()
    except (MigrationError, DatabaseError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        ctx.exit(1)

    if not stored:
        console.print("[yellow]No layers found.[/yellow]")
        return

    table = Table(title="Layers")
    table.add_column("Title", style="bold")
    table.add_column("Size (bytes)", justify="right")
    for layer in stored:
        table.add_row(layer.title, str(layer.size))
    console.print(table)


@layers.command("show")
@click.argument("title")
@click.pass_context
def show_cmd(ctx: click.Context, title: str) -> None:
    """Print the TOML content of layer TITLE."""

    cli_context: CLIContext = ctx.obj["cli_context"]
    try:
        with layer_store_service(cli_context) as service:
            layer = service.get_layer(title)
    except (MigrationError, DatabaseError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        ctx.exit(1)

    if layer is None or layer.is_empty:
        console.print(f"[red]Layer '{escape(title)}' not found.[/red]")
        ctx.exit(1)
    click.echo(layer.config)
