"""Migration CLI for harmonylayers.

Provides ``migrate from-miner``, which expresses a miner repo's configuration
as a database layer for the provider fleet.
"""

from __future__ import annotations

import os

import click
from rich.console import Console
from rich.markup import escape

from harmonylayers.domain.errors import MigrationError
from harmonylayers.infrastructure.node import DEFAULT_MINER_REPO
from harmonylayers.interfaces.cli.context import (CLIContext, build_cli_context,
                                                  layer_store_service)
from harmonylayers.services.migration import MigrationService

console = Console()
DEFAULT_CLI_CONTEXT = build_cli_context()

FLAG_MINER_REPO = "miner-repo"
FLAG_MINER_REPO_DEPRECATED = "storagerepo"
MINER_REPO_ENV_VARS = ["LOTUS_MINER_PATH", "LOTUS_STORAGE_PATH"]
DEPRECATED_ENV_VAR = "LOTUS_STORAGE_PATH"


def build_migration_service(cli_context: CLIContext) -> MigrationService:
    """Wire a MigrationService to the CLI context's layer store."""

    return MigrationService(lambda: layer_store_service(cli_context))


@click.group()
def migrate() -> None:
    """Migrate legacy node configuration into layers."""


@migrate.command("from-miner")
@click.option(
    f"--{FLAG_MINER_REPO}",
    "miner_repo",
    envvar=MINER_REPO_ENV_VARS,
    default=DEFAULT_MINER_REPO,
    show_default=True,
    help=(
        f"Specify miner repo path. flag({FLAG_MINER_REPO_DEPRECATED}) and "
        f"env({DEPRECATED_ENV_VAR}) are deprecated and will be removed soon."
    ),
)
@click.option(
    f"--{FLAG_MINER_REPO_DEPRECATED}",
    "deprecated_repo",
    default=None,
    hidden=True,
    help=f"Deprecated alias for --{FLAG_MINER_REPO}.",
)
@click.option(
    "--to-layer",
    "-t",
    default="",
    help="The layer name for this data push. 'base' is recommended for single-miner setup.",
)
@click.option(
    "--replace",
    "-r",
    "--overwrite",
    "replace",
    is_flag=True,
    default=False,
    help="Use this with --to-layer to replace an existing layer.",
)
@click.option(
    "--db",
    "db_path",
    default=None,
    show_default=str(DEFAULT_CLI_CONTEXT.db_path),
    help="Path to the SQLite layer database.",
)
@click.pass_context
def from_miner(
    ctx: click.Context,
    miner_repo: str,
    deprecated_repo: str | None,
    to_layer: str,
    replace: bool,
    db_path: str | None,
) -> None:
    """Express a database config (for lotus-provider) from an existing miner."""

    if deprecated_repo is not None:
        console.print(
            f"[yellow]--{FLAG_MINER_REPO_DEPRECATED} is deprecated, "
            f"use --{FLAG_MINER_REPO} instead.[/yellow]"
        )
        miner_repo = deprecated_repo
    elif DEPRECATED_ENV_VAR in os.environ and "LOTUS_MINER_PATH" not in os.environ:
        console.print(
            f"[yellow]{DEPRECATED_ENV_VAR} is deprecated, "
            "use LOTUS_MINER_PATH instead.[/yellow]"
        )

    cli_context = DEFAULT_CLI_CONTEXT if db_path is None else build_cli_context(db_path)
    service = build_migration_service(cli_context)
    try:
        result = service.run(miner_repo, to_layer=to_layer, overwrite=replace)
    except MigrationError as exc:
        console.print(f"[red]Migration failed:[/red] {escape(str(exc))}", soft_wrap=True)
        ctx.exit(1)

    if result.base_created:
        console.print("[green]Created default [bold]base[/bold] layer.[/green]")
    click.echo(result.message)
