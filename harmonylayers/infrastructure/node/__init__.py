"""Adapters for a legacy lotus miner: its repo, keystore and RPC endpoints."""

from .api_info import ApiInfo, FullNodeApiInfo, multiaddr_to_url
from .keystore import JWT_SECRET_NAME, FsKeyStore, KeyInfo
from .repo import DEFAULT_MINER_REPO, MinerRepo
from .rpc import JsonRpcClient, MinerIdentity, RpcError

__all__ = [
    "ApiInfo",
    "DEFAULT_MINER_REPO",
    "FsKeyStore",
    "FullNodeApiInfo",
    "JWT_SECRET_NAME",
    "JsonRpcClient",
    "KeyInfo",
    "MinerIdentity",
    "MinerRepo",
    "RpcError",
    "multiaddr_to_url",
]
