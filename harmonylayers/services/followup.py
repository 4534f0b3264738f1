"""Operator guidance printed after a layer has been created."""

from __future__ import annotations

from harmonylayers.domain.models import HarmonyDBConfig

PROVIDER_COMMAND = "./lotus-provider"


def derive_db_flags(actual: HarmonyDBConfig, default: HarmonyDBConfig) -> str:
    """Return the ``--db-*`` flags needed to reach ``actual``.

    Only settings that differ from ``default`` produce a flag. Every flag is
    prefixed with a space; values that may contain shell-special characters
    are double-quoted, the port is not.
    """
    flags: list[str] = []
    if actual.hosts != default.hosts:
        flags.append(f' --db-host="{",".join(actual.hosts)}"')
    if actual.port != default.port:
        flags.append(f" --db-port={actual.port}")
    if actual.username != default.username:
        flags.append(f' --db-user="{actual.username}"')
    if actual.password != default.password:
        flags.append(f' --db-password="{actual.password}"')
    if actual.database != default.database:
        flags.append(f' --db-name="{actual.database}"')
    return "".join(flags)


def build_followup_message(
    layer_name: str, actual: HarmonyDBConfig, default: HarmonyDBConfig
) -> str:
    """Return ready-to-copy commands for working with the new layer."""
    db_flags = derive_db_flags(actual, default)
    return (
        "To work with the config:\n"
        f"{PROVIDER_COMMAND}{db_flags} config help\n"
        "To run Lotus Provider: in its own machine or cgroup without other files, use the command:\n"
        f'{PROVIDER_COMMAND}{db_flags} run --layers="{layer_name}"\n'
    )
