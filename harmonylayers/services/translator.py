"""Translate a miner ``config.toml`` into a provider configuration layer.

The miner file is decoded straight into the provider schema, so settings the
two share (fees, control addresses, proving) carry over unchanged. On top of
that four fields are owned by the migration: the miner address, the storage
RPC secret, the chain API token and the WindowPoSt toggle.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

from harmonylayers.domain.errors import (
    AuthorizationHeaderError,
    EncodingError,
    MissingIdentityError,
)
from harmonylayers.domain.models import (
    ProviderConfig,
    parse_provider_config,
    provider_config_to_toml,
)

BEARER_PREFIX = "Bearer "

WINDOW_POST_ADVISORY = (
    "Before running lotus-provider, ensure any miner/worker answering of WindowPost is disabled by\n"
    "(on Miner) DisableBuiltinWindowPoSt=true and (on Workers) not enabling windowpost on CLI or via\n"
    "environment variable LOTUS_WORKER_WINDOWPOST.\n"
)


@dataclass(frozen=True)
class Translation:
    """Result of translating a miner config."""

    config: ProviderConfig
    advisory: str

    def to_toml(self) -> str:
        return provider_config_to_toml(self.config)


def encode_rpc_secret(raw_secret_key: bytes) -> str:
    """Encode a raw key as unpadded standard base64."""
    if not raw_secret_key:
        raise EncodingError("storage RPC secret key is empty")
    return base64.b64encode(raw_secret_key).decode("ascii").rstrip("=")


def parse_bearer_token(header: str) -> str:
    """Return ``<token>`` from an ``Authorization: Bearer <token>`` value.

    Raises:
        AuthorizationHeaderError: If the value is shorter than the prefix, does
            not start with it, or carries no token.
    """
    if header is None or len(header) < len(BEARER_PREFIX):
        raise AuthorizationHeaderError(
            "Authorization header is too short to hold a bearer token"
        )
    if not header.startswith(BEARER_PREFIX):
        raise AuthorizationHeaderError("Authorization header is not a Bearer token")
    token = header[len(BEARER_PREFIX):]
    if not token:
        raise AuthorizationHeaderError("Authorization header carries an empty token")
    return token


def translate(
    legacy_toml: str,
    miner_address: str,
    raw_secret_key: bytes,
    authorization_header: str,
) -> Translation:
    """Build the provider layer for a miner.

    Args:
        legacy_toml: Content of the miner's ``config.toml``.
        miner_address: Actor address of the miner, e.g. ``f01000``.
        raw_secret_key: The miner's JWT HMAC secret.
        authorization_header: ``Bearer <token>`` for the chain node API.

    Raises:
        ConfigDecodeError: If ``legacy_toml`` cannot be decoded.
        MissingIdentityError: If ``miner_address`` is empty.
        EncodingError: If ``raw_secret_key`` is empty.
        AuthorizationHeaderError: If the header is not a bearer token.
    """
    config = parse_provider_config(legacy_toml)

    if not miner_address:
        raise MissingIdentityError("miner actor address is empty")
    config.addresses.miner_addresses = [miner_address]
    config.apis.storage_rpc_secret = encode_rpc_secret(raw_secret_key)
    config.apis.chain_api_info = [parse_bearer_token(authorization_header)]
    config.subsystems.enable_window_post = True

    return Translation(config=config, advisory=WINDOW_POST_ADVISORY)
