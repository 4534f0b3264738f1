"""Domain models package.

This package contains the legacy and provider configuration schemas and the
layer record stored in the database.
"""

from .config import (
    ApisConfig,
    HarmonyDBConfig,
    ProviderConfig,
    StorageMinerConfig,
    default_provider_config,
    default_storage_miner_config,
    parse_provider_config,
    parse_storage_miner_config,
    provider_config_to_toml,
)
from .layer import BASE_LAYER, Layer

__all__ = [
    "ApisConfig",
    "BASE_LAYER",
    "HarmonyDBConfig",
    "Layer",
    "ProviderConfig",
    "StorageMinerConfig",
    "default_provider_config",
    "default_storage_miner_config",
    "parse_provider_config",
    "parse_storage_miner_config",
    "provider_config_to_toml",
]
