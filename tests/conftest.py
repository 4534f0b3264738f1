from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from harmonylayers.infrastructure.node.keystore import JWT_SECRET_NAME, encode_key_name

SECRET_KEY = b"\x01\x02secret-hmac-key\xff"

MINER_CONFIG_TOML = """
[Subsystems]
  EnableMining = true
  EnableSealing = true

[Fees]
  MaxPreCommitGasFee = "0.03 FIL"
  MaxWindowPoStGasFee = "7 FIL"

[Addresses]
  PreCommitControl = ["f3precommit"]
  DisableOwnerFallback = true

[Proving]
  ParallelCheckLimit = 64

[HarmonyDB]
  Hosts = ["127.0.0.1"]
  Username = "yugabyte"
  Password = "yugabyte"
  Database = "yugabyte"
  Port = "5432"
"""


def write_miner_repo(
    root: Path,
    *,
    config_toml: str = MINER_CONFIG_TOML,
    secret: bytes | None = SECRET_KEY,
    api: str | None = "/ip4/127.0.0.1/tcp/2345/http",
    token: str | None = "miner-token",
) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "config.toml").write_text(config_toml, encoding="utf-8")
    keystore = root / "keystore"
    keystore.mkdir(exist_ok=True)
    if secret is not None:
        key_file = keystore / encode_key_name(JWT_SECRET_NAME)
        key_file.write_text(
            json.dumps(
                {
                    "Type": "jwt-hmac-secret",
                    "PrivateKey": base64.b64encode(secret).decode("ascii"),
                }
            ),
            encoding="utf-8",
        )
    if api is not None:
        (root / "api").write_text(api, encoding="utf-8")
    if token is not None:
        (root / "token").write_text(token, encoding="utf-8")
    return root


class FakeIdentity:
    def __init__(self, address: str = "f01000") -> None:
        self.address = address
        self.calls = 0

    def actor_address(self) -> str:
        self.calls += 1
        return self.address


class FakeSecrets:
    def __init__(self, key: bytes = SECRET_KEY) -> None:
        self.key = key
        self.requested: list[str] = []

    def private_key(self, name: str) -> bytes:
        self.requested.append(name)
        return self.key


class FakeApiInfo:
    def __init__(self, header: str = "Bearer chain-token") -> None:
        self.header = header

    def authorization_header(self) -> str:
        return self.header


@pytest.fixture
def miner_repo(tmp_path: Path) -> Path:
    return write_miner_repo(tmp_path / "lotusminer")
