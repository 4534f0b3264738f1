"""Configuration schemas for the legacy miner and the layered provider.

Both schemas mirror the TOML files on disk: attribute names are snake_case in
Python and PascalCase in TOML. Unknown keys are ignored when decoding, so a
miner ``config.toml`` can be decoded straight into :class:`ProviderConfig` and
every section/key the two schemas share is carried over as-is.
"""

from __future__ import annotations

import tomllib
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_pascal

from harmonylayers.domain.errors import ConfigDecodeError


class _TomlSection(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal, populate_by_name=True, extra="ignore"
    )


# --- Legacy miner schema ---
class HarmonyDBConfig(_TomlSection):
    """Connection settings for the shared layer database."""

    model_config = ConfigDict(frozen=True)

    hosts: list[str] = Field(default_factory=lambda: ["127.0.0.1"])
    username: str = "yugabyte"
    password: str = "yugabyte"
    database: str = "yugabyte"
    port: str = "5433"


class StorageMinerConfig(_TomlSection):
    """The parts of a miner ``config.toml`` the migration reads directly."""

    model_config = ConfigDict(frozen=True)

    harmony_db: HarmonyDBConfig = Field(
        default_factory=HarmonyDBConfig, alias="HarmonyDB"
    )


# --- Provider (layered) schema ---
class ProviderSubsystemsConfig(_TomlSection):
    enable_window_post: bool = False
    window_post_max_tasks: int = 0
    enable_winning_post: bool = False
    winning_post_max_tasks: int = 0


class BatchFeeConfig(_TomlSection):
    base: str = "0 FIL"
    per_sector: str = "0 FIL"


class ProviderFeesConfig(_TomlSection):
    default_max_fee: str = "0.07 FIL"
    max_pre_commit_gas_fee: str = "0.025 FIL"
    max_commit_gas_fee: str = "0.05 FIL"
    max_pre_commit_batch_gas_fee: BatchFeeConfig = Field(
        default_factory=lambda: BatchFeeConfig(base="0 FIL", per_sector="0.02 FIL")
    )
    max_commit_batch_gas_fee: BatchFeeConfig = Field(
        default_factory=lambda: BatchFeeConfig(base="0 FIL", per_sector="0.03 FIL")
    )
    max_terminate_gas_fee: str = "0.5 FIL"
    max_window_po_st_gas_fee: str = Field(default="5 FIL", alias="MaxWindowPoStGasFee")
    max_publish_deals_fee: str = "0.05 FIL"


class ProviderAddressesConfig(_TomlSection):
    pre_commit_control: list[str] = Field(default_factory=list)
    commit_control: list[str] = Field(default_factory=list)
    terminate_control: list[str] = Field(default_factory=list)
    disable_owner_fallback: bool = False
    disable_worker_fallback: bool = False
    miner_addresses: list[str] = Field(default_factory=list)


class ProvingConfig(_TomlSection):
    parallel_check_limit: int = 32
    single_check_timeout: str = "10m0s"
    partition_check_timeout: str = "20m0s"
    disable_builtin_window_po_st: bool = Field(
        default=False, alias="DisableBuiltinWindowPoSt"
    )
    disable_builtin_winning_po_st: bool = Field(
        default=False, alias="DisableBuiltinWinningPoSt"
    )
    disable_wd_po_st_pre_checks: bool = Field(
        default=False, alias="DisableWDPoStPreChecks"
    )
    max_partitions_per_po_st_message: int = Field(
        default=0, alias="MaxPartitionsPerPoStMessage"
    )
    max_partitions_per_recovery_message: int = 0
    single_recovering_partition_per_post_message: bool = False


class JournalConfig(_TomlSection):
    disabled_events: str = ""


class ApisConfig(_TomlSection):
    chain_api_info: list[str] = Field(default_factory=list)
    storage_rpc_secret: str = Field(default="", alias="StorageRPCSecret")


class ProviderConfig(_TomlSection):
    """Schema of a provider configuration layer."""

    subsystems: ProviderSubsystemsConfig = Field(
        default_factory=ProviderSubsystemsConfig
    )
    fees: ProviderFeesConfig = Field(default_factory=ProviderFeesConfig)
    addresses: ProviderAddressesConfig = Field(
        default_factory=ProviderAddressesConfig
    )
    proving: ProvingConfig = Field(default_factory=ProvingConfig)
    journal: JournalConfig = Field(default_factory=JournalConfig)
    apis: ApisConfig = Field(default_factory=ApisConfig)


def default_storage_miner_config() -> StorageMinerConfig:
    """Return the compiled-in miner defaults."""
    return StorageMinerConfig()


def default_provider_config() -> ProviderConfig:
    """Return the compiled-in provider defaults."""
    return ProviderConfig()


def _load_toml(text: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigDecodeError(f"could not decode toml: {exc}") from exc


def parse_storage_miner_config(text: str) -> StorageMinerConfig:
    """Decode a miner ``config.toml``.

    Raises:
        ConfigDecodeError: If the text is not TOML or a known key has the
            wrong type.
    """
    data = _load_toml(text)
    try:
        return StorageMinerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigDecodeError(f"invalid miner config: {exc}") from exc


def parse_provider_config(text: str) -> ProviderConfig:
    """Decode TOML text into a :class:`ProviderConfig`.

    Keys that the provider schema does not know are dropped, so this also
    accepts a miner ``config.toml``.

    Raises:
        ConfigDecodeError: If the text is not TOML or a shared key has the
            wrong type.
    """
    data = _load_toml(text)
    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigDecodeError(f"could not decode toml: {exc}") from exc


def provider_config_to_toml(config: ProviderConfig) -> str:
    """Serialize a provider config with its TOML key names."""
    return tomli_w.dumps(config.model_dump(by_alias=True))
