from __future__ import annotations

from pathlib import Path

import pytest

from harmonylayers.domain.errors import SecretLookupError
from harmonylayers.infrastructure.node import JWT_SECRET_NAME, FsKeyStore, MinerRepo
from harmonylayers.infrastructure.node.keystore import encode_key_name

from conftest import SECRET_KEY, write_miner_repo


def test_key_file_name_is_unpadded_base32() -> None:
    assert encode_key_name(JWT_SECRET_NAME) == "MF2XI2BNNJ3XILLQOJUXMYLUMU"


def test_reads_jwt_secret_from_repo(tmp_path: Path) -> None:
    repo = MinerRepo(write_miner_repo(tmp_path / "repo"))

    info = repo.keystore().get(JWT_SECRET_NAME)

    assert info.type == "jwt-hmac-secret"
    assert info.private_key == SECRET_KEY
    assert repo.keystore().private_key(JWT_SECRET_NAME) == SECRET_KEY


def test_missing_key(tmp_path: Path) -> None:
    repo = MinerRepo(write_miner_repo(tmp_path / "repo", secret=None))

    with pytest.raises(SecretLookupError, match=JWT_SECRET_NAME):
        repo.keystore().get(JWT_SECRET_NAME)


def test_corrupt_key_file(tmp_path: Path) -> None:
    keystore = tmp_path / "keystore"
    keystore.mkdir()
    (keystore / encode_key_name("broken")).write_text("{not json", encoding="utf-8")
    (keystore / encode_key_name("nokey")).write_text('{"Type": "x"}', encoding="utf-8")

    store = FsKeyStore(keystore)

    with pytest.raises(SecretLookupError):
        store.get("broken")
    with pytest.raises(SecretLookupError):
        store.get("nokey")
