"""Entry point for running the harmonylayers CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``harmonylayers.interfaces.cli`` package. Executing
``python -m harmonylayers.interfaces.cli`` invokes this group.
"""

import logging

import click

from harmonylayers import __version__
from harmonylayers.infrastructure.observability import configure_logging

from .layers import layers
from .migrate import migrate


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="harmonylayers")
def cli(verbose: bool) -> None:
    """Manage provider configuration layers."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)


cli.add_command(migrate)
cli.add_command(layers)


if __name__ == "__main__":
    cli()
